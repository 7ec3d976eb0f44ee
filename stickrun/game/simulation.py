# stickrun/game/simulation.py
"""
Frame driver. Per frame, strictly in this order:
  physics -> spawn -> particles -> collisions -> stage/time bookkeeping -> metrics

Presentation layers only ever see `Simulation.metrics` and `Simulation.snapshot()`;
the two ways to change the run are `advance_frame()` and `request_jump()`.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass
from typing import Callable, Optional
from .config import FPS
from .collisions import resolve_collisions
from .particles import advance_particles
from .physics import advance_physics, request_jump as _request_jump
from .progression import stage_progress, update_progression
from .spawner import Spawner
from .stages import DEFAULT_STAGE_ID, StageConfig, get_stage
from .state import GameState, StageStatus, create_initial_state


@dataclass(frozen=True)
class Metrics:
    score: int
    health: int
    max_health: int
    energy: float
    distance: float
    stage_progress: float
    time_of_day: float
    stage_status: StageStatus
    game_over: bool
    best_score: int
    new_best: bool


def advance_frame(state: GameState, stage: StageConfig, spawner: Spawner,
                  dt: float = 1.0 / FPS) -> bool:
    """
    One tick. Returns True if a collision was processed.
    Before start and after game over only bookkeeping runs; once the stage
    is cleared the world freezes but particles finish their animation.
    """
    hit = False
    if state.started and not state.over:
        if state.stage_status is StageStatus.PLAYING:
            advance_physics(state, stage)
            spawner.spawn_obstacle(state, stage)
            state.particles = advance_particles(state.particles)
            hit = resolve_collisions(state)
        else:
            state.particles = advance_particles(state.particles)

    update_progression(state, stage, dt)
    return hit


class Simulation:
    """Owns the authoritative GameState for one run at a time."""

    def __init__(self, stage_id: Optional[str] = None, seed: Optional[int] = None,
                 best_score: int = 0,
                 on_new_best: Optional[Callable[[int], None]] = None,
                 debug: bool = False):
        self.spawner = Spawner()
        self.best_score = int(best_score)
        self.on_new_best = on_new_best
        self.debug = debug
        self._new_best = False
        self._state: GameState = None  # type: ignore[assignment]
        self.stage: StageConfig = None  # type: ignore[assignment]
        self.metrics: Metrics = None  # type: ignore[assignment]
        self.reset(stage_id=stage_id, seed=seed)

    # -------------------- Entry points --------------------

    def reset(self, stage_id: Optional[str] = None, seed: Optional[int] = None):
        """Replace the whole run. Keeps the known best score."""
        if stage_id is None:
            stage_id = self._state.stage_id if self._state is not None else DEFAULT_STAGE_ID
        self._state = create_initial_state(stage_id, seed=seed, debug=self.debug)
        self.stage = get_stage(self._state.stage_id)
        self.spawner.reset()
        self._new_best = False
        self._sync_metrics()

    def start(self):
        self._state.started = True

    def request_jump(self) -> bool:
        """
        Jump intent from input. The first intent of a run starts it instead
        of jumping; intents after game over or a cleared stage are ignored.
        """
        state = self._state
        if state.over or state.stage_status is not StageStatus.PLAYING:
            return False
        if not state.started:
            self.start()
            return False
        return _request_jump(state)

    def advance_frame(self, dt: Optional[float] = None) -> bool:
        hit = advance_frame(self._state, self.stage, self.spawner,
                            dt if dt is not None else 1.0 / FPS)
        self._check_best()
        self._sync_metrics()
        return hit

    # -------------------- Read side --------------------

    def snapshot(self) -> GameState:
        """Deep copy for presentation; writing to it doesn't affect the run."""
        return copy.deepcopy(self._state)

    @property
    def started(self) -> bool:
        return self._state.started

    @property
    def game_over(self) -> bool:
        return self._state.over

    # -------------------- Internals --------------------

    def _check_best(self):
        score = self._state.score
        if score > self.best_score:
            self.best_score = score
            self._new_best = True
            if self.on_new_best is not None:
                self.on_new_best(score)

    def _sync_metrics(self):
        s = self._state
        self.metrics = Metrics(
            score=s.score,
            health=s.player.health,
            max_health=s.player.max_health,
            energy=s.energy,
            distance=s.distance,
            stage_progress=stage_progress(s.distance, self.stage.course_length),
            time_of_day=s.time_of_day,
            stage_status=s.stage_status,
            game_over=s.over,
            best_score=self.best_score,
            new_best=self._new_best,
        )
