# stickrun/game/collisions.py
from __future__ import annotations
import pygame
from .config import (
    HIT_MARGIN, HEART_HEAL, HEART_SCORE_BONUS,
    HEALTH_ANCHOR, SCORE_ANCHOR, COLOR_HP, COLOR_GOLD, COLOR_DANGER,
)
from .hazards import Hazard
from .particles import spawn_particles
from .state import GameState


def hitbox(rect: pygame.Rect, margin: int = HIT_MARGIN) -> pygame.Rect:
    """Shrink a box by `margin` on every side (near misses don't count)."""
    return rect.inflate(-2 * margin, -2 * margin)


def overlaps(a: pygame.Rect, b: pygame.Rect, margin: int = HIT_MARGIN) -> bool:
    # colliderect is strict: shared edges don't collide
    return hitbox(a, margin).colliderect(hitbox(b, margin))


def _collect_heart(state: GameState, hz: Hazard):
    player = state.player
    cx, cy = hz.rect.center
    if player.health < player.max_health:
        player.apply_health_delta(HEART_HEAL)
        color, anchor = COLOR_HP, HEALTH_ANCHOR
        if state.debug:
            print(f"[hit] heart #{hz.id}: health -> {player.health}")
    else:
        state.score += HEART_SCORE_BONUS
        color, anchor = COLOR_GOLD, SCORE_ANCHOR
        if state.debug:
            print(f"[hit] heart #{hz.id} at full health: +{HEART_SCORE_BONUS} score")
    state.particles = spawn_particles(
        state.particles, cx, cy, color, state.rng, state.particle_ids,
        count=15, speed=3.0, target=anchor,
    )


def _take_hit(state: GameState, hz: Hazard):
    player = state.player
    cx, cy = hz.rect.center
    player.health -= hz.spec.damage
    if player.health <= 0:
        player.health = 0
        state.over = True
    # bigger hazards blow up louder
    state.particles = spawn_particles(
        state.particles, cx, cy, hz.spec.color, state.rng, state.particle_ids,
        count=hz.size, speed=hz.size / 8.0, size=hz.size / 8.0,
    )
    if state.debug:
        print(f"[hit] {hz.kind.value} #{hz.id}: -{hz.spec.damage} -> health {player.health}"
              + ("  GAME OVER" if state.over else ""))


def resolve_collisions(state: GameState) -> bool:
    """
    Apply the effect of whatever the player is touching this frame.
    Pickups are all collected; at most one damaging hit is processed.
    Returns True if anything was hit or collected.
    """
    me = state.player.rect
    processed = False

    i = 0
    while i < len(state.hazards):
        hz = state.hazards[i]
        if not overlaps(me, hz.rect):
            i += 1
            continue

        del state.hazards[i]
        processed = True
        if hz.spec.heals:
            _collect_heart(state, hz)
            continue

        _take_hit(state, hz)
        return True

    return processed
