# minirunner/game/utils.py
from __future__ import annotations
import random
from typing import Optional, Tuple

Box = Tuple[float, float, float, float]  # (x, y, w, h), top-left based


class SimRandom:
    """
    The single source of randomness for a session.
    seed=None picks a fresh seed, kept in .seed so the run can be reproduced.
    """
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def uniform(self, lo: float, hi: float) -> float:
        """Real number in [lo, hi)."""
        return lo + self.rng.random() * (hi - lo)

    def randint(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends included."""
        return self.rng.randint(lo, hi)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def intervals_overlap(a0: float, a1: float, b0: float, b1: float) -> bool:
    """Open intervals (a0, a1) and (b0, b1) share at least one point."""
    return a0 < b1 and a1 > b0


def rects_overlap(a: Box, b: Box) -> bool:
    """Axis-aligned overlap. Shared edges (zero area) do not count."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return (intervals_overlap(ax, ax + aw, bx, bx + bw)
            and intervals_overlap(ay, ay + ah, by, by + bh))
