# stickrun/game/spawner.py
from __future__ import annotations
import math
from typing import Tuple
from .config import (
    WIDTH, FPS,
    SPAWN_SAFE_OFFSET, SPAWN_GAP_MIN_FACTOR, SPAWN_GAP_MAX_FACTOR, SPAWN_CHANCE,
    HEART_CHANCE, DOUBLE_SPAWN_CHANCE, DOUBLE_SPAWN_COOLDOWN, DOUBLE_SPAWN_SPACING,
    MAX_HAZARDS,
)
from .hazards import HAZARD_SPECS, Hazard, HazardKind
from .particles import IdCounter
from .stages import StageConfig
from .state import GameState


def gap_thresholds(stage: StageConfig) -> Tuple[float, float]:
    """(min_gap, max_gap) in world units: distance covered in one spawn interval, +-20%."""
    gap = stage.base_speed * FPS * stage.difficulty.spawn_interval_s
    return gap * SPAWN_GAP_MIN_FACTOR, gap * SPAWN_GAP_MAX_FACTOR


class Spawner:
    """
    Feeds hazards in from the right edge.
    Owns the hazard id counter for a run; call reset() when the run is replaced.
    """
    def __init__(self):
        self.ids = IdCounter()

    def reset(self):
        self.ids.reset()

    def _make(self, state: GameState, kind: HazardKind, x: float) -> Hazard:
        phase = None
        if HAZARD_SPECS[kind].oscillates:
            phase = state.rng.random() * 2 * math.pi
        return Hazard(id=self.ids.next(), x=float(x), kind=kind, phase=phase)

    def _pick_kind(self, state: GameState, stage: StageConfig) -> HazardKind:
        kinds = stage.difficulty.kinds
        if HazardKind.HEART in kinds and state.rng.random() < HEART_CHANCE:
            return HazardKind.HEART
        dangerous = [k for k in kinds if not HAZARD_SPECS[k].heals]
        return state.rng.choice(dangerous)

    def _maybe_double(self, state: GameState, stage: StageConfig, lead: Hazard):
        if not stage.difficulty.double_spawn:
            return
        if state.distance - state.last_double_spawn_distance <= DOUBLE_SPAWN_COOLDOWN:
            return
        if state.rng.random() >= DOUBLE_SPAWN_CHANCE:
            return
        simple = [k for k in stage.difficulty.kinds if HAZARD_SPECS[k].simple]
        if not simple:
            return
        kind = state.rng.choice(simple)
        state.hazards.append(self._make(state, kind, lead.x + DOUBLE_SPAWN_SPACING))
        state.last_double_spawn_distance = state.distance
        if state.debug:
            print(f"[spawn] double at d={state.distance:.0f}: {lead.kind.value}+{kind.value}")

    def spawn_obstacle(self, state: GameState, stage: StageConfig):
        """Append 0, 1 or 2 hazards to state.hazards."""
        if not state.hazards:
            first = stage.difficulty.kinds[0]
            state.hazards.append(self._make(state, first, WIDTH + SPAWN_SAFE_OFFSET))
            return

        min_gap, max_gap = gap_thresholds(stage)
        last_x = state.hazards[-1].x

        if last_x < WIDTH - min_gap:
            forced = last_x < WIDTH - max_gap
            if forced or state.rng.random() < SPAWN_CHANCE:
                lead = self._make(state, self._pick_kind(state, stage), WIDTH)
                state.hazards.append(lead)
                self._maybe_double(state, stage, lead)

        # Physics prunes off-screen hazards; this only bounds the list.
        if len(state.hazards) > MAX_HAZARDS:
            del state.hazards[:len(state.hazards) - MAX_HAZARDS]
