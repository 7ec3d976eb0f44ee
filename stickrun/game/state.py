# stickrun/game/state.py
from __future__ import annotations
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List
from .config import MAX_ENERGY, DEBUG_EVENTS, NOON_HOUR
from .hazards import Hazard
from .particles import IdCounter, Particle
from .player import PlayerState
from .stages import DEFAULT_STAGE_ID, get_stage


class StageStatus(str, Enum):
    PLAYING = "playing"
    EXHAUSTED = "exhausted"    # course cleared, world frozen, runner catching breath
    VICTORY = "victory"


@dataclass
class GameState:
    player: PlayerState
    hazards: List[Hazard]
    particles: List[Particle]
    rng: random.Random
    particle_ids: IdCounter

    score: int = 0
    distance: float = 0.0
    energy: float = MAX_ENERGY
    time_of_day: float = NOON_HOUR

    stage_id: str = DEFAULT_STAGE_ID
    stage_status: StageStatus = StageStatus.PLAYING
    status_elapsed_s: float = 0.0          # time spent in the current non-playing status
    last_double_spawn_distance: float = 0.0

    started: bool = False
    over: bool = False
    debug: bool = False

    @property
    def health(self) -> int:
        return self.player.health

    @property
    def max_health(self) -> int:
        return self.player.max_health


def create_initial_state(stage_id: str = DEFAULT_STAGE_ID,
                         seed: int | None = None,
                         debug: bool = False) -> GameState:
    """The only way a GameState should come into existence."""
    get_stage(stage_id)  # fail fast on a typo
    return GameState(
        player=PlayerState(),
        hazards=[],
        particles=[],
        rng=random.Random(seed),
        particle_ids=IdCounter(),
        stage_id=stage_id,
        debug=debug or DEBUG_EVENTS,
    )
