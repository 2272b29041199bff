# minirunner/game/particles.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List
from .config import SimConfig
from .utils import SimRandom, clamp


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    life: float   # seconds left


class DustEmitter:
    """Landing puffs. Purely cosmetic: never read by collision or score."""

    def __init__(self, cfg: SimConfig, rng: SimRandom):
        self.cfg = cfg
        self.rng = rng
        self.particles: List[Particle] = []

    def clear(self):
        self.particles = []

    def spawn_landing_dust(self, x: float, y: float, count: int):
        cfg = self.cfg
        uniform = self.rng.uniform
        for _ in range(count):
            self.particles.append(Particle(
                x=x + uniform(-cfg.dust_jitter_x, cfg.dust_jitter_x),
                y=y - 2.0,
                vx=uniform(*cfg.dust_vx),
                vy=uniform(*cfg.dust_vy),
                size=uniform(*cfg.dust_size),
                life=uniform(*cfg.dust_life),
            ))

    def update(self, dt: float):
        damping = self.cfg.dust_damping
        gravity = self.cfg.dust_gravity
        for p in self.particles:
            p.vx *= damping
            p.vy += gravity * dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.life -= dt
        self.particles = [p for p in self.particles if p.life > 0.0]

    def alpha(self, p: Particle) -> float:
        """Fade factor in [0, 1] for drawing."""
        return clamp(p.life / self.cfg.dust_fade_life, 0.0, 1.0)
