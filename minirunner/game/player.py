# minirunner/game/player.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from .config import SimConfig
from .utils import Box

logger = logging.getLogger(__name__)


@dataclass
class Runner:
    """
    Vertical-only player:
    - x is fixed, the world scrolls past
    - y is TOP-based and grows downward; floor is ground_y - height
    - jumps_used counts jumps since the last ground contact
    """
    cfg: SimConfig = field(default_factory=SimConfig)
    y: float = 0.0
    vy: float = 0.0
    grounded: bool = True
    jumps_used: int = 0
    jump_queued: bool = False

    def __post_init__(self):
        self.place_on_ground()

    @property
    def x(self) -> float:
        return self.cfg.player_x

    @property
    def width(self) -> float:
        return self.cfg.player_w

    @property
    def height(self) -> float:
        return self.cfg.player_h

    @property
    def box(self) -> Box:
        return (self.x, self.y, self.width, self.height)

    def place_on_ground(self):
        self.y = self.cfg.floor_y
        self.vy = 0.0
        self.grounded = True
        self.jumps_used = 0
        self.jump_queued = False

    def request_jump(self):
        """Latch a jump; it is consumed by the next step()."""
        self.jump_queued = True

    def can_jump(self) -> bool:
        if self.grounded:
            return True
        return self.cfg.allow_double_jump and self.jumps_used < self.cfg.max_jumps

    def _try_jump(self) -> bool:
        performed = False
        if self.jump_queued and self.can_jump():
            self.vy = self.cfg.jump_velocity
            self.grounded = False
            self.jumps_used += 1
            performed = True
        self.jump_queued = False
        return performed

    def step(self, dt: float) -> bool:
        """
        Resolve a pending jump, integrate, clamp to the floor.
        Returns True on the step where the player lands (airborne -> grounded).
        """
        self._try_jump()
        was_grounded = self.grounded

        self.vy += self.cfg.gravity * dt
        self.y += self.vy * dt

        if self.y < 0.0:
            self.y = 0.0
            self.vy = max(self.vy, 0.0)

        floor_y = self.cfg.floor_y
        if self.y >= floor_y:
            self.y = floor_y
            self.vy = 0.0
            self.grounded = True
            self.jumps_used = 0
            if not was_grounded:
                logger.debug("landed")
                return True
        else:
            self.grounded = False
        return False
