# minirunner/tests/test_level.py
from dataclasses import replace

import pytest

from minirunner.game.config import SimConfig
from minirunner.game.level import Obstacle, ObstacleGen
from minirunner.game.utils import SimRandom

DT = 1.0 / 120.0


class FixedRandom:
    """Deterministic stand-in: every draw sits at the same fraction of its range."""
    def __init__(self, frac: float = 0.0):
        self.frac = frac

    def uniform(self, lo, hi):
        return lo + self.frac * (hi - lo)

    def randint(self, lo, hi):
        return lo + int(round(self.frac * (hi - lo)))


def _gen(frac=0.0, **overrides):
    cfg = replace(SimConfig(), **overrides)
    return cfg, ObstacleGen(cfg, FixedRandom(frac))


def test_initial_delay_is_unscaled():
    cfg, gen = _gen(frac=1.0)
    assert gen.spawn_delay == cfg.spawn_interval_max
    assert gen.spawn_timer == 0.0
    assert gen.obstacles == []


def test_spawn_scale_interpolates_and_clamps():
    cfg, gen = _gen()
    assert gen.spawn_scale(cfg.initial_speed) == pytest.approx(1.0)
    assert gen.spawn_scale(cfg.max_speed) == pytest.approx(1.0 - cfg.spawn_shrink)
    mid = (cfg.initial_speed + cfg.max_speed) / 2
    assert gen.spawn_scale(mid) == pytest.approx(1.0 - cfg.spawn_shrink / 2)
    assert gen.spawn_scale(cfg.max_speed * 3) == pytest.approx(1.0 - cfg.spawn_shrink)
    assert gen.spawn_scale(0.0) == pytest.approx(1.0)


def test_no_spawn_before_delay():
    cfg, gen = _gen()
    assert gen.update_spawning(gen.spawn_delay / 2, cfg.initial_speed) is None
    assert gen.obstacles == []


def test_spawned_obstacle_rests_on_ground_past_right_edge():
    cfg, gen = _gen(frac=1.0)
    obstacle = gen.update_spawning(gen.spawn_delay, cfg.initial_speed)

    assert obstacle is not None
    assert gen.obstacles == [obstacle]
    assert obstacle.width == cfg.obstacle_max_w
    assert obstacle.height == cfg.obstacle_max_h
    assert obstacle.x == cfg.width + cfg.spawn_offset_max
    assert obstacle.y + obstacle.height == cfg.ground_y
    assert gen.spawn_timer == 0.0


def test_next_delay_uses_speed_at_spawn_time():
    cfg, gen = _gen(frac=0.0)
    gen.update_spawning(gen.spawn_delay, cfg.max_speed)
    assert gen.spawn_delay == pytest.approx(cfg.spawn_interval_min * (1.0 - cfg.spawn_shrink))


def test_spawn_deferred_while_last_obstacle_too_close():
    cfg, gen = _gen()
    blocker = Obstacle(x=cfg.width - 150, y=cfg.ground_y - 30, width=30, height=30)
    gen.obstacles.append(blocker)
    gen.spawn_timer = gen.spawn_delay

    assert gen.spawn_gap() == pytest.approx(120)
    assert gen.update_spawning(DT, cfg.initial_speed) is None
    # timer keeps running while deferred
    assert gen.spawn_timer == pytest.approx(gen.spawn_delay + DT)
    assert gen.obstacles == [blocker]

    blocker.x = cfg.width - cfg.min_spawn_distance - blocker.width
    spawned = gen.update_spawning(DT, cfg.initial_speed)
    assert spawned is not None
    assert gen.obstacles[-1] is spawned
    assert gen.spawn_timer == 0.0


def test_obstacles_scroll_uniformly():
    cfg, gen = _gen()
    gen.obstacles = [Obstacle(x=500.0, y=250.0, width=30, height=40),
                     Obstacle(x=800.0, y=240.0, width=22, height=50)]
    gen.update_obstacles(0.5, 320.0)
    assert [o.x for o in gen.obstacles] == [340.0, 640.0]
    assert [o.y for o in gen.obstacles] == [250.0, 240.0]


def test_cull_scenario_obstacle_from_1000():
    cfg, gen = _gen()
    tracked = Obstacle(x=1000.0, y=cfg.ground_y - 40, width=30, height=40)
    gen.obstacles = [tracked]

    seen_until = None
    for i in range(420):   # 3.5 s at 120 Hz
        gen.update_obstacles(DT, 320.0)
        for o in gen.obstacles:
            assert o.right > cfg.cull_x
        if tracked in gen.obstacles:
            seen_until = i

    assert gen.obstacles == []
    # culled on the first step its right edge reached the cull line, not later
    assert seen_until is not None and seen_until < 419
    assert cfg.cull_x - 320.0 * DT < tracked.right <= cfg.cull_x
    # 1000 + 30 - 320 * 3.5 = -90: well past the line by the end of the run
    assert 1030.0 - 320.0 * 3.5 < cfg.cull_x


def test_cull_keeps_survivor_order():
    cfg, gen = _gen()
    a = Obstacle(x=-45.0, y=0.0, width=30, height=30)
    b = Obstacle(x=100.0, y=0.0, width=30, height=30)
    c = Obstacle(x=400.0, y=0.0, width=30, height=30)
    d = Obstacle(x=700.0, y=0.0, width=30, height=30)
    gen.obstacles = [a, b, c, d]
    gen.update_obstacles(0.0, 320.0)
    assert gen.obstacles == [b, c, d]
    assert gen.obstacles[0] is b and gen.obstacles[-1] is d


@pytest.mark.parametrize("seed", [1, 2, 3, 42, 12345])
def test_spacing_guarantee_holds_for_any_run(seed):
    cfg = SimConfig()
    gen = ObstacleGen(cfg, SimRandom(seed))
    speed = cfg.initial_speed
    spawns = 0

    for _ in range(120 * 120):  # two simulated minutes
        speed = min(cfg.max_speed, speed + cfg.speed_increase * DT)
        previous = gen.last_obstacle()
        gap = gen.spawn_gap()
        new = gen.update_spawning(DT, speed)
        if new is not None:
            spawns += 1
            assert gen.last_obstacle() is new
            assert cfg.obstacle_min_w <= new.width <= cfg.obstacle_max_w
            assert cfg.obstacle_min_h <= new.height <= cfg.obstacle_max_h
            if previous is not None:
                assert gap >= cfg.min_spawn_distance
                assert new.x - previous.right >= cfg.min_spawn_distance + cfg.spawn_offset_min
        gen.update_obstacles(DT, speed)
        xs = [o.x for o in gen.obstacles]
        assert xs == sorted(xs)

    assert spawns > 50


@pytest.mark.parametrize("overrides", [
    {"spawn_interval_min": 2.0, "spawn_interval_max": 1.0},
    {"obstacle_min_w": 50, "obstacle_max_w": 40},
    {"spawn_offset_min": 80, "spawn_offset_max": 70},
    {"max_speed": 100.0},
    {"fixed_dt": 0.0},
    {"spawn_shrink": 1.0},
])
def test_config_rejects_inconsistent_parameters(overrides):
    with pytest.raises(ValueError):
        SimConfig(**overrides)
