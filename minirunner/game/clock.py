# minirunner/game/clock.py
from __future__ import annotations
from typing import Callable, Optional
from .config import FIXED_TIME_STEP, MAX_FRAME_DELTA


class FixedStepClock:
    """
    Turns a variable-rate stream of timestamps into fixed simulation steps.

    - the first timestamp only primes the clock (zero elapsed time)
    - elapsed time is clamped to [0, max_frame_delta] so a stall never
      turns into a burst of catch-up steps
    - leftover time stays in the accumulator for the next tick
    """
    def __init__(self, fixed_dt: float = FIXED_TIME_STEP, max_frame_delta: float = MAX_FRAME_DELTA):
        self.fixed_dt = fixed_dt
        self.max_frame_delta = max_frame_delta
        self.last_time: Optional[float] = None
        self.accumulator = 0.0

    def reset(self):
        self.last_time = None
        self.accumulator = 0.0

    def frame_delta(self, now: float) -> float:
        """Elapsed seconds since the previous timestamp, clamped."""
        if self.last_time is None:
            frame_dt = 0.0
        else:
            frame_dt = now - self.last_time
        self.last_time = now
        return min(max(frame_dt, 0.0), self.max_frame_delta)

    def advance(self, frame_dt: float, step: Callable[[float], None]) -> int:
        """Accumulate frame_dt and run as many fixed steps as it covers."""
        self.accumulator += frame_dt
        steps = 0
        while self.accumulator >= self.fixed_dt:
            step(self.fixed_dt)
            self.accumulator -= self.fixed_dt
            steps += 1
        return steps

    def tick(self, now: float, step: Callable[[float], None]) -> int:
        """Feed a timestamp (seconds). Returns how many fixed steps ran."""
        return self.advance(self.frame_delta(now), step)
