# minirunner/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from minirunner.game.config import OBS_MAX_VY
from minirunner.game.world import Session

OBS_SIZE = 11
LOOKAHEAD_OBSTACLES = 2

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_vy(vy: float, vy_max: float = OBS_MAX_VY) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    return max(-vy_max, min(vy, vy_max)) / vy_max

def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0] * LOOKAHEAD_OBSTACLES, dtype=np.float32)
    high = np.ones(OBS_SIZE, dtype=np.float32)
    return low, high

def build_observation(session: Session) -> np.ndarray:
    """
    Returns a fixed (11,) float32 vector:
      [ y_norm, vy_norm, grounded, jumps_used_norm, speed_ratio,
        dist@1, w@1, h@1,
        dist@2, w@2, h@2 ]
    - y_norm in [0,1] (0 = top of canvas, 1 = standing on the ground)
    - vy_norm in [-1,1]
    - dist is the gap from the player's right edge to the obstacle's left edge / canvas width;
      sentinel: dist=1.0, w=h=0.0 when fewer obstacles are ahead
    """
    cfg = session.cfg
    runner = session.runner

    y_norm = _clamp01(runner.y / max(1.0, cfg.floor_y))
    vy_norm = _norm_vy(runner.vy)
    grounded = 1.0 if runner.grounded else 0.0
    jumps = _clamp01(runner.jumps_used / max(1, cfg.max_jumps))
    span = cfg.max_speed - cfg.initial_speed
    speed = _clamp01((session.world_speed - cfg.initial_speed) / span) if span > 0 else 1.0

    feats: List[float] = [y_norm, vy_norm, grounded, jumps, speed]

    # obstacles are kept left-to-right, so the first ones past the player are the nearest
    ahead = [o for o in session.obstacles if o.right > runner.x]
    player_right = runner.x + runner.width
    for i in range(LOOKAHEAD_OBSTACLES):
        if i < len(ahead):
            o = ahead[i]
            feats.extend([
                _clamp01((o.x - player_right) / cfg.width),
                _clamp01(o.width / cfg.obstacle_max_w),
                _clamp01(o.height / cfg.obstacle_max_h),
            ])
        else:
            feats.extend([1.0, 0.0, 0.0])

    return np.asarray(feats, dtype=np.float32)
