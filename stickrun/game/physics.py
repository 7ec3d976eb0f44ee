# stickrun/game/physics.py
from __future__ import annotations
from .config import (
    PLAYER_X, PLAYER_SIZE, GROUND_Y,
    MAX_ENERGY, ENERGY_REGEN, JUMP_ENERGY_COST, DUST_CHANCE,
    COLOR_FG, COLOR_ACCENT,
)
from .particles import spawn_particles
from .stages import StageConfig
from .state import GameState

# Particle colours
_DUST = (200, 200, 210)


def advance_physics(state: GameState, stage: StageConfig):
    """Move the player and the world by one frame at the stage's scroll speed."""
    player = state.player
    speed = stage.base_speed

    player.update_physics()
    state.distance += speed

    if player.touching_ground():
        if player.land():
            # Touchdown puff, drifting left
            state.particles = spawn_particles(
                state.particles, PLAYER_X + PLAYER_SIZE / 2, GROUND_Y, COLOR_FG,
                state.rng, state.particle_ids,
                count=20, speed=4.0, bias=(-3.0, -1.0),
            )
        state.energy = min(state.energy + ENERGY_REGEN, MAX_ENERGY)

        if state.rng.random() < DUST_CHANCE:
            state.particles = spawn_particles(
                state.particles, PLAYER_X, GROUND_Y, _DUST,
                state.rng, state.particle_ids,
                count=3, speed=1.0, bias=(-4.0, -0.5), size=2.0,
            )
    else:
        player.grounded = False

    for hz in state.hazards:
        hz.advance(speed)
        if not hz.scored and hz.right < PLAYER_X:
            state.score += 1
            hz.scored = True

    state.hazards = [hz for hz in state.hazards if hz.right > 0]


def request_jump(state: GameState) -> bool:
    """
    Ground jump is free; the air jump needs a full energy bar.
    Returns True if a jump happened, otherwise the request is ignored.
    """
    player = state.player

    if player.grounded:
        player.launch()
        return True

    if player.can_air_jump() and state.energy >= JUMP_ENERGY_COST:
        player.launch()
        state.energy = max(0.0, state.energy - JUMP_ENERGY_COST)
        state.particles = spawn_particles(
            state.particles, PLAYER_X + PLAYER_SIZE / 2, player.y + PLAYER_SIZE, COLOR_ACCENT,
            state.rng, state.particle_ids,
            count=30, speed=6.0, bias=(-3.0, 0.0),
        )
        return True

    return False
