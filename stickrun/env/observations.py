# stickrun/env/observations.py
from __future__ import annotations
import numpy as np
from ..game.config import (WIDTH, PLAYER_X, PLAYER_SIZE, GRAVITY, JUMP_FORCE, MAX_ENERGY)
from ..game.player import PLAYER_GROUND_Y
from ..game.state import GameState

N_HAZARDS = 3            # nearest hazards ahead of the player
OBS_SIZE = 5 + 2 * N_HAZARDS
MAX_LOOKAHEAD = float(WIDTH)   # dx normalisation; "nothing ahead" reads as 1.0
MAX_RISE = JUMP_FORCE * JUMP_FORCE / GRAVITY   # two stacked jump apexes


def build_observation(state: GameState) -> np.ndarray:
    """
    Compact observation vector, float32, shape (OBS_SIZE,):
      [height, vy, grounded, energy, health,
       dx_1, is_heal_1, dx_2, is_heal_2, dx_3, is_heal_3]
    height/dx/energy/health in [0, 1], vy in [-1, 1].
    """
    p = state.player
    height = (PLAYER_GROUND_Y - p.y) / MAX_RISE
    vy = p.vy / abs(JUMP_FORCE)
    obs = [
        min(1.0, max(0.0, height)),
        min(1.0, max(-1.0, vy)),
        1.0 if p.grounded else 0.0,
        state.energy / MAX_ENERGY,
        p.health / max(1, p.max_health),
    ]

    ahead = sorted((hz for hz in state.hazards if hz.right >= PLAYER_X),
                   key=lambda hz: hz.x)
    for i in range(N_HAZARDS):
        if i < len(ahead):
            hz = ahead[i]
            dx = (hz.x - (PLAYER_X + PLAYER_SIZE)) / MAX_LOOKAHEAD
            obs += [min(1.0, max(0.0, dx)), 1.0 if hz.spec.heals else 0.0]
        else:
            obs += [1.0, 0.0]

    return np.asarray(obs, dtype=np.float32)
