# minirunner/env/runner_env.py
from __future__ import annotations
import os
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from minirunner.game.config import WIDTH, HEIGHT, SimConfig
from minirunner.game.render import Renderer
from minirunner.game.world import Phase, Session
from minirunner.env.observations import build_observation, observation_bounds


class RunnerEnv(gym.Env):
    """
    Runner Gymnasium environment (vector observations).
    - Simulation at the session's fixed step (120 Hz by default).
    - Agent acts every `frame_skip` steps (default 4) -> 30 decisions/sec.
    - Observation: shape (11,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 cfg: Optional[SimConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.cfg = cfg if cfg is not None else SimConfig()
        self.dt = self.cfg.fixed_dt

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(time_limit_seconds / (self.dt * self.frame_skip))

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[Session] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed drives the session generator directly (exact reproducibility);
        # None lets the session pick a fresh one.
        self.session = Session(cfg=self.cfg, seed=int(seed) if seed is not None else None)
        self.session.start()
        self.timestep = 0
        self.current_seed = self.session.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0.0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "Call reset() before step()"
        session = self.session

        if action == 1 and session.phase is Phase.RUNNING:
            session.request_jump()

        for _ in range(self.frame_skip):
            session.step(self.dt)
            if session.phase is Phase.OVER:
                break

        # Reward: +1 if alive after this decision; -1 on death
        terminated = session.phase is Phase.OVER
        reward = -1.0 if terminated else 1.0

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": session.score,
            "world_speed": session.world_speed,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": session.runner.grounded,
            "obstacles": len(session.obstacles),
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        return build_observation(self.session)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        if self.screen is None:
            if self.render_mode == "rgb_array":
                os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Minimal Runner — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.renderer = Renderer()

        self.renderer.draw(self.screen, self.session.snapshot(), seed=self.current_seed)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
