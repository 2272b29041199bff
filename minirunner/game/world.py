# minirunner/game/world.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
from .clock import FixedStepClock
from .config import SimConfig
from .level import Obstacle, ObstacleGen
from .particles import DustEmitter, Particle
from .player import Runner
from .utils import Box, SimRandom, clamp, rects_overlap

logger = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    size: float
    alpha: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer after every host tick."""
    phase: Phase
    score: float
    best_score: int
    world_speed: float
    player: Box
    obstacles: Tuple[Box, ...]
    particles: Tuple[ParticleView, ...]
    show_restart: bool
    steps: int = 0   # fixed steps run during the tick that produced this snapshot

    @property
    def display_score(self) -> int:
        return int(self.score)


class Session:
    """
    Whole-game state, mutated in place for the lifetime of the process.

    Each fixed step runs, in order: player motion, world speed/score,
    spawning, obstacle scroll/cull, dust, collision. Nothing moves unless
    the phase is RUNNING.
    """
    def __init__(self,
                 cfg: Optional[SimConfig] = None,
                 seed: Optional[int] = None,
                 best_score: int = 0,
                 rng: Optional[SimRandom] = None,
                 on_high_score: Optional[Callable[[int], None]] = None):
        self.cfg = cfg if cfg is not None else SimConfig()
        self.rng = rng if rng is not None else SimRandom(seed)
        self.best_score = max(0, int(best_score))
        self.on_high_score = on_high_score

        self.clock = FixedStepClock(self.cfg.fixed_dt, self.cfg.max_frame_delta)
        self.runner = Runner(cfg=self.cfg)
        self.level = ObstacleGen(self.cfg, self.rng)
        self.dust = DustEmitter(self.cfg, self.rng)

        self._init_run()

    def _init_run(self):
        self.phase = Phase.NOT_STARTED
        self.score = 0.0
        self.world_speed = self.cfg.initial_speed
        self.show_restart = False

    # -------------------- Entities --------------------

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.level.obstacles

    @property
    def particles(self) -> List[Particle]:
        return self.dust.particles

    @property
    def seed(self) -> Optional[int]:
        return getattr(self.rng, "seed", None)

    # -------------------- Input --------------------

    def start(self) -> bool:
        if self.phase is not Phase.NOT_STARTED:
            return False
        self.phase = Phase.RUNNING
        logger.info("run started (seed=%s)", self.seed)
        return True

    def request_jump(self):
        """Latch a jump. Also starts the run when nothing is running yet."""
        self.runner.request_jump()
        if self.phase is Phase.NOT_STARTED:
            self.start()

    def reset(self) -> bool:
        """Back to NOT_STARTED, keeping best_score. Ignored unless the run is over."""
        if self.phase is not Phase.OVER:
            return False
        self._init_run()
        self.runner.place_on_ground()
        self.level.reset()
        self.dust.clear()
        self.clock.reset()
        logger.info("session reset (best=%d)", self.best_score)
        return True

    def handle_input(self, jump: bool = False, restart: bool = False):
        """Apply the debounced per-tick input signals."""
        if restart:
            self.reset()
        if jump:
            self.request_jump()

    # -------------------- Simulation --------------------

    def update_world(self, dt: float):
        cfg = self.cfg
        self.world_speed = clamp(self.world_speed + cfg.speed_increase * dt,
                                 cfg.initial_speed, cfg.max_speed)
        self.score += cfg.score_rate * dt

    def check_collision(self) -> bool:
        player_box = self.runner.box
        for obstacle in self.level.obstacles:
            if rects_overlap(player_box, obstacle.box):
                self._game_over()
                return True
        return False

    def _game_over(self):
        self.phase = Phase.OVER
        self.best_score = max(self.best_score, int(self.score))
        self.show_restart = True
        logger.info("game over: score=%d best=%d", int(self.score), self.best_score)
        if self.on_high_score is not None:
            self.on_high_score(self.best_score)

    def step(self, dt: float):
        """One fixed simulation step."""
        if self.phase is not Phase.RUNNING:
            return
        cfg = self.cfg
        runner = self.runner

        if runner.step(dt):
            self.dust.spawn_landing_dust(runner.x + runner.width * 0.35, cfg.ground_y, cfg.dust_count)
        self.update_world(dt)
        self.level.update_spawning(dt, self.world_speed)
        self.level.update_obstacles(dt, self.world_speed)
        self.dust.update(dt)
        self.check_collision()

    def tick(self, now: float) -> Snapshot:
        """Host entry point: feed a timestamp in seconds, get the frame to draw."""
        steps = self.clock.tick(now, self.step)
        return self.snapshot(steps)

    def snapshot(self, steps: int = 0) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            score=self.score,
            best_score=self.best_score,
            world_speed=self.world_speed,
            player=self.runner.box,
            obstacles=tuple(o.box for o in self.level.obstacles),
            particles=tuple(
                ParticleView(p.x, p.y, p.size, self.dust.alpha(p)) for p in self.dust.particles
            ),
            show_restart=self.show_restart,
            steps=steps,
        )
