# cave_escape/env/cave_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from cave_escape.game.config import WIDTH, HEIGHT, SIM_DT
from cave_escape.game.render import draw_world
from cave_escape.game.session import Session, PLAYING, STAGECLEAR
from cave_escape.env.observations import build_observation, OBS_SIZE


class CaveEnv(gym.Env):
    """
    Cave Escape Gymnasium environment (vector observations).
    - Simulation at 1/SIM_DT Hz (internal).
    - Agent acts every `frame_skip` ticks and holds the action in between.
    - Stage clears advance to the next stage automatically.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 start_stage: int = 1,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.start_stage = start_stage
        self.dt = SIM_DT

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(time_limit_seconds / (self.dt * self.frame_skip))

        # Actions: 0 = NOOP, 1 = THRUST
        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0] + [0.0, 0.0] * ((OBS_SIZE - 2) // 2), dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.session: Optional[Session] = None
        self.timestep = 0

        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)
        # Seeded episodes use the seed as the cave phase directly so runs can be replayed.
        cave_seed = float(seed) if seed is not None else float(self.np_random.random() * 1000.0)
        self.session = Session(seed=cave_seed, start_stage=self.start_stage)
        self.session.start()
        self.timestep = 0
        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "call reset() first"
        s = self.session
        thrust = bool(action == 1)

        for _ in range(self.frame_skip):
            s.step(self.dt, thrust)
            if s.state == STAGECLEAR:
                s.next_stage()
            if s.state != PLAYING:
                break

        terminated = not s.alive or s.state != PLAYING
        reward = -1.0 if not s.alive else 1.0

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        return build_observation(self.session.rocket, self.session.cave)

    def _info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "seed": s.seed,
            "stage": s.stage,
            "distance_px": s.total_distance,
            "timestep": self.timestep,
            "state": s.state,
            "death_cause": s.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Cave Escape — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        draw_world(self.screen, self.session)

        if self.render_mode == "human":
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
