from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

# --- Display ---
WIDTH = 960                 # virtual canvas width (px)
HEIGHT = 360                # virtual canvas height (px)
FPS = 60
GROUND_Y = 290              # ground line (y grows downward)

# --- Player ---
PLAYER_X = 120              # player's fixed x (world scrolls left)
PLAYER_W = 30
PLAYER_H = 30
JUMP_VELOCITY = -620.0      # launch velocity (px/s, negative = up)
GRAVITY = 2100.0            # px/s^2
ALLOW_DOUBLE_JUMP = True
MAX_JUMPS = 2               # jumps allowed between two ground contacts

# --- World / Difficulty ---
INITIAL_WORLD_SPEED = 320.0
MAX_WORLD_SPEED = 650.0
SPEED_INCREASE_PER_SEC = 9.0
SCORE_RATE = 10.0           # points per second

# --- Obstacle generation ---
SPAWN_INTERVAL_MIN = 0.8    # seconds
SPAWN_INTERVAL_MAX = 1.8
SPAWN_SHRINK_AT_MAX = 0.32  # spawn delay shrinks by this share at max speed
MIN_SPAWN_DISTANCE = 200    # gap between last obstacle and right edge (px)
OBSTACLE_MIN_W = 22
OBSTACLE_MAX_W = 42
OBSTACLE_MIN_H = 26
OBSTACLE_MAX_H = 58
SPAWN_OFFSET_MIN = 20       # spawn just past the right edge
SPAWN_OFFSET_MAX = 70
CULL_X = -10.0              # obstacles whose right edge falls to this are dropped

# --- Landing dust ---
DUST_COUNT = 5
DUST_JITTER_X = 8.0
DUST_VX = (-60.0, 95.0)
DUST_VY = (-180.0, -60.0)
DUST_SIZE = (2.0, 4.0)
DUST_LIFE = (0.16, 0.34)
DUST_DAMPING = 0.96         # per fixed step
DUST_GRAVITY = 1250.0
DUST_FADE_LIFE = 0.34       # reference lifetime for alpha

# --- Clock ---
FIXED_TIME_STEP = 1.0 / 120.0
MAX_FRAME_DELTA = 0.05      # clamp stalls (tab switch, window drag...)

# --- Persistence ---
HIGH_SCORE_KEY = "minimal_runner_high_score"
SCORES_FILE_DEFAULT = "~/.minirunner_scores.json"

# --- Observations ---
OBS_MAX_VY = 1200.0         # clamp for normalized vertical speed

# --- Colors (RGB) ---
COLOR_BG = (255, 255, 255)
COLOR_FG = (31, 31, 31)
COLOR_OBSTACLE = (61, 61, 61)
COLOR_DUST = (143, 143, 143)
COLOR_OVERLAY = (255, 255, 255, 184)


@dataclass(frozen=True)
class SimConfig:
    """
    Every tunable of the simulation in one place.
    Defaults are the module constants above; override with dataclasses.replace().
    """
    width: float = WIDTH
    height: float = HEIGHT
    ground_y: float = GROUND_Y

    player_x: float = PLAYER_X
    player_w: float = PLAYER_W
    player_h: float = PLAYER_H
    jump_velocity: float = JUMP_VELOCITY
    gravity: float = GRAVITY
    allow_double_jump: bool = ALLOW_DOUBLE_JUMP
    max_jumps: int = MAX_JUMPS

    initial_speed: float = INITIAL_WORLD_SPEED
    max_speed: float = MAX_WORLD_SPEED
    speed_increase: float = SPEED_INCREASE_PER_SEC
    score_rate: float = SCORE_RATE

    spawn_interval_min: float = SPAWN_INTERVAL_MIN
    spawn_interval_max: float = SPAWN_INTERVAL_MAX
    spawn_shrink: float = SPAWN_SHRINK_AT_MAX
    min_spawn_distance: float = MIN_SPAWN_DISTANCE
    obstacle_min_w: int = OBSTACLE_MIN_W
    obstacle_max_w: int = OBSTACLE_MAX_W
    obstacle_min_h: int = OBSTACLE_MIN_H
    obstacle_max_h: int = OBSTACLE_MAX_H
    spawn_offset_min: int = SPAWN_OFFSET_MIN
    spawn_offset_max: int = SPAWN_OFFSET_MAX
    cull_x: float = CULL_X

    dust_count: int = DUST_COUNT
    dust_jitter_x: float = DUST_JITTER_X
    dust_vx: Tuple[float, float] = DUST_VX
    dust_vy: Tuple[float, float] = DUST_VY
    dust_size: Tuple[float, float] = DUST_SIZE
    dust_life: Tuple[float, float] = DUST_LIFE
    dust_damping: float = DUST_DAMPING
    dust_gravity: float = DUST_GRAVITY
    dust_fade_life: float = DUST_FADE_LIFE

    fixed_dt: float = FIXED_TIME_STEP
    max_frame_delta: float = MAX_FRAME_DELTA

    def __post_init__(self):
        if self.fixed_dt <= 0.0:
            raise ValueError(f"fixed_dt must be > 0, got {self.fixed_dt}")
        if self.max_frame_delta < 0.0:
            raise ValueError(f"max_frame_delta must be >= 0, got {self.max_frame_delta}")
        if self.max_speed < self.initial_speed:
            raise ValueError("max_speed must be >= initial_speed")
        ranges = {
            "spawn_interval": (self.spawn_interval_min, self.spawn_interval_max),
            "obstacle_w": (self.obstacle_min_w, self.obstacle_max_w),
            "obstacle_h": (self.obstacle_min_h, self.obstacle_max_h),
            "spawn_offset": (self.spawn_offset_min, self.spawn_offset_max),
            "dust_vx": self.dust_vx,
            "dust_vy": self.dust_vy,
            "dust_size": self.dust_size,
            "dust_life": self.dust_life,
        }
        for name, (lo, hi) in ranges.items():
            if lo > hi:
                raise ValueError(f"{name} range is inverted: {lo} > {hi}")
        if not 0.0 <= self.spawn_shrink < 1.0:
            raise ValueError(f"spawn_shrink must be in [0, 1), got {self.spawn_shrink}")

    @property
    def floor_y(self) -> float:
        """Top coordinate of a grounded player."""
        return self.ground_y - self.player_h
