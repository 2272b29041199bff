# minirunner/game/level.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional
from .config import SimConfig
from .utils import Box, SimRandom, clamp

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """Ground-resting block. Only x changes after spawn."""
    x: float
    y: float
    width: int
    height: int

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def box(self) -> Box:
        return (self.x, self.y, float(self.width), float(self.height))


class ObstacleGen:
    """
    Timed obstacle spawning with a spacing guarantee, plus left scrolling and culling.

    The list keeps spawn order, which is also left-to-right order, so the last
    element is always the obstacle closest to the spawn edge.
    """
    def __init__(self, cfg: SimConfig, rng: SimRandom):
        self.cfg = cfg
        self.rng = rng
        self.obstacles: List[Obstacle] = []
        self.spawn_timer = 0.0
        self.spawn_delay = 0.0
        self.reset()

    def reset(self):
        self.obstacles = []
        self.spawn_timer = 0.0
        # first delay is unscaled: the run always starts at initial speed
        self.spawn_delay = self._draw_interval()

    def _draw_interval(self) -> float:
        return self.rng.uniform(self.cfg.spawn_interval_min, self.cfg.spawn_interval_max)

    def spawn_scale(self, world_speed: float) -> float:
        """1.0 at initial speed, 1 - spawn_shrink at max speed, linear in between."""
        span = self.cfg.max_speed - self.cfg.initial_speed
        ratio = (world_speed - self.cfg.initial_speed) / span if span > 0 else 1.0
        return 1.0 - self.cfg.spawn_shrink * clamp(ratio, 0.0, 1.0)

    def last_obstacle(self) -> Optional[Obstacle]:
        return self.obstacles[-1] if self.obstacles else None

    def spawn_gap(self) -> Optional[float]:
        """Distance from the last obstacle's right edge to the right edge of the view."""
        last = self.last_obstacle()
        if last is None:
            return None
        return self.cfg.width - last.right

    def update_spawning(self, dt: float, world_speed: float) -> Optional[Obstacle]:
        """Advance the spawn timer; returns the new obstacle if one was placed."""
        self.spawn_timer += dt
        if self.spawn_timer < self.spawn_delay:
            return None

        gap = self.spawn_gap()
        if gap is not None and gap < self.cfg.min_spawn_distance:
            # deferred: timer keeps running, retried next step
            return None

        cfg = self.cfg
        width = self.rng.randint(cfg.obstacle_min_w, cfg.obstacle_max_w)
        height = self.rng.randint(cfg.obstacle_min_h, cfg.obstacle_max_h)
        obstacle = Obstacle(
            x=cfg.width + self.rng.randint(cfg.spawn_offset_min, cfg.spawn_offset_max),
            y=cfg.ground_y - height,
            width=width,
            height=height,
        )
        self.obstacles.append(obstacle)

        self.spawn_timer = 0.0
        self.spawn_delay = self._draw_interval() * self.spawn_scale(world_speed)
        logger.debug("spawned %dx%d at x=%.1f, next in %.3fs",
                     width, height, obstacle.x, self.spawn_delay)
        return obstacle

    def update_obstacles(self, dt: float, world_speed: float):
        """Scroll every obstacle left and drop those past the cull line."""
        move = world_speed * dt
        for obstacle in self.obstacles:
            obstacle.x -= move
        self.obstacles = [o for o in self.obstacles if o.right > self.cfg.cull_x]
