# stickrun/tests/collisions_tests.py
"""Collision resolver: forgiveness margin, damage, healing, score bonus."""
from __future__ import annotations
import pygame

from stickrun.game.collisions import overlaps, resolve_collisions
from stickrun.game.config import (
    PLAYER_X, PLAYER_SIZE, HEART_HEAL, HEART_SCORE_BONUS, DAMAGE_BLOCK, HIT_MARGIN,
)
from stickrun.game.hazards import Hazard, HazardKind
from stickrun.game.state import create_initial_state


def state_with(*hazards: Hazard, health: int = 10):
    s = create_initial_state(seed=0)
    s.player.health = health
    s.hazards.extend(hazards)
    return s


def test_touching_edges_do_not_collide():
    s = state_with(Hazard(id=0, x=PLAYER_X + PLAYER_SIZE))
    assert resolve_collisions(s) is False
    assert s.player.health == 10
    assert len(s.hazards) == 1


def test_forgiveness_margin_absorbs_shallow_overlap():
    # raw boxes overlap by 8, shrunk boxes are 2 apart
    x = PLAYER_X + PLAYER_SIZE - 8
    s = state_with(Hazard(id=0, x=x))
    assert s.player.rect.colliderect(s.hazards[0].rect)
    assert resolve_collisions(s) is False
    assert s.player.health == 10


def test_overlap_beyond_margin_hits():
    x = PLAYER_X + PLAYER_SIZE - 2 * HIT_MARGIN - 1
    s = state_with(Hazard(id=0, x=x))
    assert resolve_collisions(s) is True
    assert s.player.health == 10 - DAMAGE_BLOCK
    assert s.hazards == []


def test_overlaps_helper_is_symmetric():
    a = pygame.Rect(0, 0, 40, 40)
    b = pygame.Rect(31, 0, 40, 40)
    c = pygame.Rect(29, 0, 40, 40)
    assert not overlaps(a, b) and not overlaps(b, a)
    assert overlaps(a, c) and overlaps(c, a)


def test_lethal_hit_clamps_to_zero_and_ends_run():
    s = state_with(Hazard(id=0, x=PLAYER_X), health=3)
    assert resolve_collisions(s) is True
    assert s.player.health == 0
    assert s.over is True
    assert s.hazards == []


def test_heal_clamps_to_max():
    s = state_with(Hazard(id=0, x=PLAYER_X, kind=HazardKind.HEART), health=7)
    assert HEART_HEAL == 3
    assert resolve_collisions(s) is True
    assert s.player.health == 10
    assert s.score == 0
    assert s.hazards == []
    assert s.particles and all(p.target is not None for p in s.particles)


def test_heart_at_full_health_pays_score_bonus():
    s = state_with(Hazard(id=0, x=PLAYER_X, kind=HazardKind.HEART), health=10)
    assert resolve_collisions(s) is True
    assert s.player.health == 10
    assert s.score == HEART_SCORE_BONUS
    assert s.hazards == []


def test_only_one_damaging_hit_per_frame():
    s = state_with(Hazard(id=0, x=PLAYER_X), Hazard(id=1, x=PLAYER_X + 2))
    assert resolve_collisions(s) is True
    assert s.player.health == 10 - DAMAGE_BLOCK
    assert [hz.id for hz in s.hazards] == [1]


def test_heart_then_block_both_resolve():
    s = state_with(Hazard(id=0, x=PLAYER_X, kind=HazardKind.HEART),
                   Hazard(id=1, x=PLAYER_X + 2), health=7)
    assert resolve_collisions(s) is True
    assert s.player.health == 10 - DAMAGE_BLOCK
    assert s.hazards == []


def test_airborne_player_clears_hazard():
    s = state_with(Hazard(id=0, x=PLAYER_X))
    s.player.y = 100.0
    s.player.grounded = False
    assert resolve_collisions(s) is False
    assert len(s.hazards) == 1


def test_bigger_hazards_explode_bigger():
    big = state_with(Hazard(id=0, x=PLAYER_X, kind=HazardKind.BLOCK))
    small = state_with(Hazard(id=0, x=PLAYER_X, kind=HazardKind.SHARD))
    resolve_collisions(big)
    resolve_collisions(small)
    assert len(big.particles) > len(small.particles)
