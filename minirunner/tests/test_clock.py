# minirunner/tests/test_clock.py
"""
Fixed-step clock tests.

Step sizes and deltas are powers of two so the float arithmetic is exact.

Usage (from repo root):
  python -m pytest minirunner/tests/test_clock.py
"""
import random

from minirunner.game.clock import FixedStepClock


def _counter():
    calls = []
    return calls, calls.append


def test_first_tick_is_zero_duration():
    clock = FixedStepClock(fixed_dt=0.25, max_frame_delta=10.0)
    calls, step = _counter()
    assert clock.tick(1234.5, step) == 0
    assert calls == []
    assert clock.accumulator == 0.0


def test_leftover_time_carries_forward():
    clock = FixedStepClock(fixed_dt=0.25, max_frame_delta=10.0)
    calls, step = _counter()
    clock.tick(0.0, step)
    assert clock.tick(0.625, step) == 2
    assert clock.accumulator == 0.125
    assert clock.tick(1.0, step) == 2
    assert clock.accumulator == 0.0
    assert clock.tick(1.125, step) == 0
    assert clock.accumulator == 0.125
    assert calls == [0.25] * 4


def test_stall_is_clamped():
    clock = FixedStepClock(fixed_dt=0.25, max_frame_delta=0.5)
    calls, step = _counter()
    clock.tick(0.0, step)
    assert clock.tick(100.0, step) == 2
    assert clock.accumulator == 0.0


def test_backwards_time_is_ignored():
    clock = FixedStepClock(fixed_dt=0.25, max_frame_delta=1.0)
    calls, step = _counter()
    clock.tick(5.0, step)
    assert clock.tick(4.0, step) == 0
    assert clock.accumulator == 0.0
    # the timestamp still moves so the next delta is measured from 4.0
    assert clock.tick(4.5, step) == 2


def test_accumulator_conservation():
    fixed = 1.0 / 64.0
    clock = FixedStepClock(fixed_dt=fixed, max_frame_delta=0.05)
    calls, step = _counter()
    rng = random.Random(7)

    now = 0.0
    total = 0.0
    clock.tick(now, step)
    for _ in range(2000):
        elapsed = rng.randint(0, 12) / 256.0
        now += elapsed
        total += elapsed
        clock.tick(now, step)
        steps = len(calls)
        assert steps == int(total // fixed)
        assert clock.accumulator == total - steps * fixed


def test_reset_forgets_last_timestamp():
    clock = FixedStepClock(fixed_dt=0.25, max_frame_delta=1.0)
    calls, step = _counter()
    clock.tick(0.0, step)
    clock.tick(0.375, step)
    clock.reset()
    assert clock.accumulator == 0.0
    assert clock.tick(50.0, step) == 0
