# stickrun/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import (
    PLAYER_X, PLAYER_SIZE, GROUND_Y, GRAVITY, JUMP_FORCE, MAX_HEALTH,
)

# y of the player's top edge when standing on the ground line
PLAYER_GROUND_Y = GROUND_Y - PLAYER_SIZE


@dataclass
class PlayerState:
    """
    Runner with a fixed x (the world scrolls under it).
    - y is TOP-based, +y points down
    - jump_count: 0 on the ground, 1 after the ground jump, 2 after the air jump
    """
    y: float = float(PLAYER_GROUND_Y)
    vy: float = 0.0
    grounded: bool = True
    jump_count: int = 0
    health: int = MAX_HEALTH
    max_health: int = MAX_HEALTH

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(PLAYER_X, int(self.y), PLAYER_SIZE, PLAYER_SIZE)

    def update_physics(self):
        """Apply gravity, then integrate position."""
        self.vy += GRAVITY
        self.y += self.vy

    def touching_ground(self) -> bool:
        return self.y >= PLAYER_GROUND_Y

    def land(self) -> bool:
        """Snap to the ground line. Returns True if this frame is the touchdown."""
        touchdown = not self.grounded
        self.y = float(PLAYER_GROUND_Y)
        self.vy = 0.0
        self.grounded = True
        self.jump_count = 0
        return touchdown

    def launch(self):
        self.vy = JUMP_FORCE
        self.grounded = False
        self.jump_count += 1

    def can_air_jump(self) -> bool:
        return (not self.grounded) and self.jump_count < 2

    def apply_health_delta(self, delta: int) -> int:
        """Add delta (negative = damage), clamp to [0, max_health], return new health."""
        self.health = max(0, min(self.max_health, self.health + delta))
        return self.health
