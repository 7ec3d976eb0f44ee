# stickrun/game/particles.py
"""
Short-lived visual effect particles.

`advance_particles` is pure: it returns fresh Particle objects and never
touches the input list. Randomness and ids come from the caller so a seeded
run stays reproducible.
"""
from __future__ import annotations
import math
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple
from .config import (
    PARTICLE_DECAY_MIN, PARTICLE_DECAY_SPREAD,
    HOMING_FORCE, HOMING_DAMPING, HOMING_CATCH_RADIUS, PARTICLE_DRAG,
)

Color = Tuple[int, int, int]
Point = Tuple[float, float]


class IdCounter:
    """Monotonic id source, one per run (or per test)."""

    def __init__(self, start: int = 0):
        self._start = start
        self._next = start

    def next(self) -> int:
        n = self._next
        self._next += 1
        return n

    def reset(self):
        self._next = self._start


@dataclass(frozen=True)
class Particle:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    life: float       # 1 -> 0, fades out
    decay: float      # life lost per frame
    color: Color
    size: float
    target: Optional[Point] = None   # homing particles fly here


def _step(p: Particle) -> Particle:
    vx, vy = p.vx, p.vy
    if p.target is not None:
        dx = p.target[0] - p.x
        dy = p.target[1] - p.y
        dist = math.hypot(dx, dy)
        if dist <= HOMING_CATCH_RADIUS:
            return replace(p, life=0.0)
        vx = (vx + dx / dist * HOMING_FORCE) * HOMING_DAMPING
        vy = (vy + dy / dist * HOMING_FORCE) * HOMING_DAMPING
    else:
        vx *= PARTICLE_DRAG
        vy *= PARTICLE_DRAG

    return replace(p, x=p.x + vx, y=p.y + vy, vx=vx, vy=vy, life=p.life - p.decay)


def advance_particles(particles: Sequence[Particle]) -> List[Particle]:
    """One frame of motion/decay; drops everything whose life ran out."""
    stepped = (_step(p) for p in particles)
    return [p for p in stepped if p.life > 0.0]


def spawn_particles(particles: Sequence[Particle],
                    x: float, y: float,
                    color: Color,
                    rng: random.Random,
                    ids: IdCounter,
                    count: int = 5,
                    speed: float = 2.0,
                    target: Optional[Point] = None,
                    bias: Point = (0.0, 0.0),
                    size: float = 4.0,
                    cone: Tuple[float, float] = (0.0, 2.0 * math.pi)) -> List[Particle]:
    """
    Return `particles` plus `count` new ones bursting from (x, y).

    Each gets a random heading inside `cone` (start angle, width in radians),
    a random speed up to `speed`, the shared `bias` drift and `target`, and a
    size jittered to [0.5, 1.5) x `size` (never below 1).
    """
    start, width = cone
    out = list(particles)
    for _ in range(count):
        angle = start + rng.random() * width
        v = rng.random() * speed
        p_size = max(1.0, size * (0.5 + rng.random()))
        out.append(Particle(
            id=ids.next(),
            x=x, y=y,
            vx=math.cos(angle) * v + bias[0],
            vy=math.sin(angle) * v + bias[1],
            life=1.0,
            decay=PARTICLE_DECAY_MIN + rng.random() * PARTICLE_DECAY_SPREAD,
            color=color,
            size=p_size,
            target=target,
        ))
    return out
