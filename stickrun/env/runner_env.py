# stickrun/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import WIDTH, HEIGHT, FPS
from ..game.game import draw_scene, draw_hud
from ..game.simulation import Simulation
from ..game.stages import DEFAULT_STAGE_ID
from ..game.state import StageStatus
from .observations import build_observation, OBS_SIZE, N_HAZARDS


class RunnerEnv(gym.Env):
    """
    Stickman runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), one Simulation per env.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP (ground jump, or air jump if energy allows).
    - Observation: shape (OBS_SIZE,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 stage_id: str = DEFAULT_STAGE_ID,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode!r}"
        self.render_mode = render_mode
        self.stage_id = stage_id
        self.frame_skip = int(frame_skip)
        self.dt = 1.0 / FPS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0] * N_HAZARDS, dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # With no seed, derive one from np_random so the episode can still be replayed.
        run_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        stage_id = (options or {}).get("stage_id", self.stage_id)

        if self.sim is None:
            self.sim = Simulation(stage_id=stage_id, seed=run_seed)
        else:
            self.sim.reset(stage_id=stage_id, seed=run_seed)
        self.sim.start()

        self.timestep = 0
        self.current_seed = run_seed
        return self._get_obs(), self._info(hit=False)

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"

        if action == 1:
            self.sim.request_jump()

        hit = False
        for _ in range(self.frame_skip):
            hit = self.sim.advance_frame(self.dt) or hit
            if self.sim.game_over or self.sim.metrics.stage_status is not StageStatus.PLAYING:
                break

        m = self.sim.metrics
        reward = -1.0 if m.game_over else 1.0

        self.timestep += 1
        terminated = m.game_over or m.stage_status is not StageStatus.PLAYING
        truncated = (not terminated
                     and self.time_limit_decisions is not None
                     and self.timestep >= self.time_limit_decisions)

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info(hit=hit)

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.snapshot())

    def _info(self, hit: bool) -> Dict[str, Any]:
        m = self.sim.metrics
        return {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": m.score,
            "health": m.health,
            "energy": m.energy,
            "distance": m.distance,
            "stage_status": m.stage_status.value,
            "hit": hit,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Stickman Runner - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 16)

        draw_scene(self.screen, self.sim.snapshot(), self.sim.stage)
        draw_hud(self.screen, self.font, self.sim.metrics, self.sim.stage)

        if self.render_mode == "human":
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
