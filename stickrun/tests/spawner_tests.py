# stickrun/tests/spawner_tests.py
"""Spawner tests: seeding, spacing gates, kind mix, double spawns, ids."""
from __future__ import annotations
import math
from dataclasses import replace
from typing import List

from stickrun.game.config import (
    WIDTH, BASE_SPEED, SPAWN_SAFE_OFFSET, DOUBLE_SPAWN_COOLDOWN, DOUBLE_SPAWN_SPACING, MAX_HAZARDS,
)
from stickrun.game.hazards import HAZARD_SPECS, Hazard, HazardKind
from stickrun.game.physics import advance_physics
from stickrun.game.spawner import Spawner, gap_thresholds
from stickrun.game.stages import Difficulty, get_stage
from stickrun.game.state import create_initial_state

CITY = get_stage("stage_1_city")      # no double spawns
PEAKS = get_stage("stage_3_landscape")
STALLED = replace(CITY, difficulty=replace(CITY.difficulty, base_speed=0.0))


class ScriptedRng:
    """random() pops from a script (0.99 once exhausted); choice() picks the first item."""

    def __init__(self, values: List[float]):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0) if self.values else 0.99

    def choice(self, seq):
        return seq[0]


def state_with_last_at(x: float, seed: int = 1):
    s = create_initial_state(seed=seed)
    s.hazards.append(Hazard(id=999, x=x))
    return s


def test_empty_list_seeds_one_hazard_at_safe_offset():
    s = create_initial_state(seed=1)
    sp = Spawner()
    sp.spawn_obstacle(s, CITY)
    assert len(s.hazards) == 1
    hz = s.hazards[0]
    assert hz.x == WIDTH + SPAWN_SAFE_OFFSET
    assert hz.kind is CITY.difficulty.kinds[0]
    assert hz.id == 0


def test_gap_thresholds_band():
    lo, hi = gap_thresholds(CITY)
    gap = CITY.difficulty.base_speed * 60 * CITY.difficulty.spawn_interval_s
    assert lo == gap * 0.8
    assert hi == gap * 1.2


def test_zero_speed_stage_spaces_hazards_at_base_speed():
    lo, hi = gap_thresholds(STALLED)
    gap = BASE_SPEED * 60 * STALLED.difficulty.spawn_interval_s
    assert (lo, hi) == (gap * 0.8, gap * 1.2)

    s = create_initial_state(seed=4)
    sp = Spawner()
    for _ in range(600):
        advance_physics(s, STALLED)
        sp.spawn_obstacle(s, STALLED)
    xs = [hz.x for hz in s.hazards]
    assert 1 < len(xs) < MAX_HAZARDS
    assert all(b - a > lo for a, b in zip(xs, xs[1:]))


def test_no_spawn_inside_min_gap():
    sp = Spawner()
    min_gap, _ = gap_thresholds(CITY)
    for seed in range(20):
        s = state_with_last_at(WIDTH - min_gap + 1, seed=seed)
        sp.spawn_obstacle(s, CITY)
        assert len(s.hazards) == 1


def test_forced_spawn_past_max_gap():
    _, max_gap = gap_thresholds(CITY)
    s = state_with_last_at(WIDTH - max_gap - 1)
    Spawner().spawn_obstacle(s, CITY)
    assert len(s.hazards) == 2
    assert s.hazards[-1].x == WIDTH


def test_heart_chance_picks_heart():
    _, max_gap = gap_thresholds(CITY)
    s = state_with_last_at(WIDTH - max_gap - 1)
    s.rng = ScriptedRng([0.0])
    Spawner().spawn_obstacle(s, CITY)
    assert s.hazards[-1].kind is HazardKind.HEART


def test_non_heart_pick_never_returns_heart():
    _, max_gap = gap_thresholds(PEAKS)
    sp = Spawner()
    for seed in range(50):
        s = state_with_last_at(WIDTH - max_gap - 1, seed=seed)
        s.rng.random = lambda: 0.99   # skip the heart and double rolls
        sp.spawn_obstacle(s, PEAKS)
        assert s.hazards[-1].kind is not HazardKind.HEART
        assert s.hazards[-1].kind in PEAKS.difficulty.kinds


def test_double_spawn_appends_simple_follower():
    _, max_gap = gap_thresholds(PEAKS)
    s = state_with_last_at(WIDTH - max_gap - 1)
    s.distance = DOUBLE_SPAWN_COOLDOWN + 1.0
    s.rng = ScriptedRng([0.99, 0.0])   # no heart, double roll hits
    Spawner().spawn_obstacle(s, PEAKS)

    assert len(s.hazards) == 3
    lead, follower = s.hazards[-2], s.hazards[-1]
    assert follower.x == lead.x + DOUBLE_SPAWN_SPACING
    assert HAZARD_SPECS[follower.kind].simple
    assert s.last_double_spawn_distance == s.distance


def test_double_spawn_respects_cooldown():
    _, max_gap = gap_thresholds(PEAKS)
    s = state_with_last_at(WIDTH - max_gap - 1)
    s.distance = 5000.0
    s.last_double_spawn_distance = 5000.0 - DOUBLE_SPAWN_COOLDOWN
    s.rng = ScriptedRng([0.99, 0.0])
    Spawner().spawn_obstacle(s, PEAKS)
    assert len(s.hazards) == 2
    assert s.last_double_spawn_distance == 5000.0 - DOUBLE_SPAWN_COOLDOWN


def test_double_spawn_needs_stage_permission():
    _, max_gap = gap_thresholds(CITY)
    s = state_with_last_at(WIDTH - max_gap - 1)
    s.distance = 10 * DOUBLE_SPAWN_COOLDOWN
    s.rng = ScriptedRng([0.99, 0.0])
    Spawner().spawn_obstacle(s, CITY)
    assert len(s.hazards) == 2


def test_followers_are_never_hearts_or_boulders():
    assert not HAZARD_SPECS[HazardKind.HEART].simple
    assert not HAZARD_SPECS[HazardKind.BOULDER].simple


def test_boulder_gets_random_phase():
    stage = replace(PEAKS, difficulty=Difficulty(7.0, 1.1, (HazardKind.BOULDER,)))
    s = create_initial_state(seed=5)
    Spawner().spawn_obstacle(s, stage)
    hz = s.hazards[0]
    assert hz.kind is HazardKind.BOULDER
    assert hz.phase is not None and 0.0 <= hz.phase < 2 * math.pi


def test_ids_unique_and_reset():
    s = create_initial_state(seed=11)
    sp = Spawner()
    seen = set()
    last = -1
    for _ in range(2000):
        sp.spawn_obstacle(s, PEAKS)
        for hz in s.hazards:
            hz.x -= PEAKS.base_speed
        s.hazards = [hz for hz in s.hazards if hz.right > 0]
        s.distance += PEAKS.base_speed
        for hz in s.hazards:
            if hz.id not in seen:
                assert hz.id > last
                last = hz.id
                seen.add(hz.id)
    assert len(seen) > 5

    sp.reset()
    fresh = create_initial_state(seed=11)
    sp.spawn_obstacle(fresh, PEAKS)
    assert fresh.hazards[0].id == 0


def test_overflow_trim_drops_oldest():
    s = create_initial_state(seed=2)
    s.hazards = [Hazard(id=i, x=-100.0 + i) for i in range(MAX_HAZARDS + 5)]
    Spawner().spawn_obstacle(s, CITY)
    assert len(s.hazards) == MAX_HAZARDS
    assert s.hazards[0].id > 4


def test_boulder_phase_spans_a_full_turn():
    stage = replace(PEAKS, difficulty=Difficulty(7.0, 1.1, (HazardKind.BOULDER,)))
    s = create_initial_state(seed=5)
    s.rng = ScriptedRng([0.5])
    Spawner().spawn_obstacle(s, stage)
    assert math.isclose(s.hazards[0].phase, math.pi)
