# stickrun/game/hazards.py
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple
import pygame
from .config import (
    GROUND_Y, OBSTACLE_SIZE, OBSTACLE_SIZE_SMALL,
    DAMAGE_BLOCK, DAMAGE_SPIKE, DAMAGE_SHARD,
    BOULDER_PHASE_STEP, BOULDER_SWAY,
    COLOR_BLOCK, COLOR_SPIKE, COLOR_SHARD, COLOR_BOULDER, COLOR_HEART,
)


class HazardKind(str, Enum):
    BLOCK = "block"        # standard
    SPIKE = "spike"        # elevated damage
    SHARD = "shard"        # reduced damage
    BOULDER = "boulder"    # oscillating
    HEART = "heart"        # heal pickup


@dataclass(frozen=True)
class HazardSpec:
    size: int
    damage: int            # 0 for pickups
    color: Tuple[int, int, int]
    oscillates: bool = False
    heals: bool = False
    simple: bool = True    # allowed as the trailing half of a double spawn


# One row per kind, checked at import.
HAZARD_SPECS: Dict[HazardKind, HazardSpec] = {
    HazardKind.BLOCK:   HazardSpec(OBSTACLE_SIZE, DAMAGE_BLOCK, COLOR_BLOCK),
    HazardKind.SPIKE:   HazardSpec(OBSTACLE_SIZE, DAMAGE_SPIKE, COLOR_SPIKE),
    HazardKind.SHARD:   HazardSpec(OBSTACLE_SIZE_SMALL, DAMAGE_SHARD, COLOR_SHARD),
    HazardKind.BOULDER: HazardSpec(OBSTACLE_SIZE, DAMAGE_BLOCK, COLOR_BOULDER,
                                   oscillates=True, simple=False),
    HazardKind.HEART:   HazardSpec(OBSTACLE_SIZE_SMALL, 0, COLOR_HEART,
                                   heals=True, simple=False),
}

_missing = set(HazardKind) - set(HAZARD_SPECS)
if _missing:
    raise RuntimeError(f"HAZARD_SPECS missing rows for: {sorted(k.value for k in _missing)}")


@dataclass
class Hazard:
    """An obstacle or pickup sitting on the ground line, scrolling left."""
    id: int
    x: float
    kind: HazardKind = HazardKind.BLOCK
    phase: float | None = None    # boulders only
    scored: bool = False

    @property
    def spec(self) -> HazardSpec:
        return HAZARD_SPECS[self.kind]

    @property
    def size(self) -> int:
        return self.spec.size

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def rect(self) -> pygame.Rect:
        """Ground-aligned box sized by kind."""
        size = self.size
        return pygame.Rect(int(self.x), GROUND_Y - size, size, size)

    def advance(self, scroll_speed: float):
        """Move left by the scroll speed; boulders sway on top of it."""
        speed = scroll_speed
        if self.spec.oscillates:
            self.phase = (self.phase or 0.0) + BOULDER_PHASE_STEP
            speed += math.cos(self.phase) * BOULDER_SWAY
        self.x -= speed
