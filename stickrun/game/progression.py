# stickrun/game/progression.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from .config import (
    VICTORY_OVERSHOOT, VICTORY_POSE_DELAY_S,
    DUSK_START, NOON_HOUR, DUSK_HOUR, NIGHT_HOURS, DAY_HOURS,
)
from .stages import Color, StageConfig, TimelineEvent, UNTIL_END
from .state import GameState, StageStatus


def stage_progress(distance: float, course_length: float) -> float:
    if course_length <= 0:
        return 1.0
    return max(0.0, min(1.0, distance / course_length))


def time_of_day(progress: float) -> float:
    """
    Hour in [0, 24). Noon -> dusk over [0, DUSK_START), then dusk -> dawn
    (wrapping past midnight) over [DUSK_START, 1].
    """
    if progress < DUSK_START:
        return NOON_HOUR + (DUSK_HOUR - NOON_HOUR) * (progress / DUSK_START)
    night = (progress - DUSK_START) / (1.0 - DUSK_START)
    return (DUSK_HOUR + NIGHT_HOURS * night) % DAY_HOURS


def finish_distance(stage: StageConfig) -> float:
    return stage.course_length + VICTORY_OVERSHOOT


def update_progression(state: GameState, stage: StageConfig, dt: float) -> bool:
    """
    Stage status bookkeeping for one frame; runs even when the world is frozen.
    Returns True if the status changed this frame.
    """
    changed = False
    if state.stage_status is StageStatus.PLAYING:
        if state.distance >= finish_distance(stage):
            state.stage_status = StageStatus.EXHAUSTED
            state.status_elapsed_s = 0.0
            changed = True
    elif state.stage_status is StageStatus.EXHAUSTED:
        state.status_elapsed_s += dt
        if state.status_elapsed_s >= VICTORY_POSE_DELAY_S:
            state.stage_status = StageStatus.VICTORY
            state.status_elapsed_s = 0.0
            changed = True
    else:
        state.status_elapsed_s += dt

    if changed and state.debug:
        print(f"[stage] {stage.id}: {state.stage_status.value} at d={state.distance:.0f}")

    state.time_of_day = time_of_day(stage_progress(state.distance, stage.course_length))
    return changed


# --- Timeline (presentation helpers) ---

def resolve_window(event: TimelineEvent, course_length: float) -> Tuple[float, float]:
    """Absolute (start, end) distances for a timeline event."""
    start = event.start if event.start >= 0 else course_length + event.start
    if event.end == UNTIL_END:
        end = course_length
    elif event.end < 0:
        end = course_length + event.end
    else:
        end = event.end
    return start, end


def active_events(stage: StageConfig, distance: float) -> Iterator[Tuple[TimelineEvent, float]]:
    """Yield (event, local progress 0..1) for every event covering `distance`, in table order."""
    for event in stage.timeline:
        start, end = resolve_window(event, stage.course_length)
        if start <= distance <= end:
            span = end - start
            yield event, ((distance - start) / span if span > 0 else 1.0)


@dataclass(frozen=True)
class SkyView:
    """What the backdrop looks like at one distance."""
    gradient: Tuple[Color, Color, Color]   # top, mid, bottom
    sun_y: Optional[float] = None          # None = not in the sky
    moon_y: Optional[float] = None
    moon_opacity: float = 0.0
    lights_opacity: float = 0.0


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _lerp_color(a: Color, b: Color, t: float) -> Color:
    return tuple(int(round(_lerp(x, y, t))) for x, y in zip(a, b))


def sky_at(stage: StageConfig, distance: float) -> SkyView:
    """Fold the stage's active timeline events over its theme sky."""
    gradient = stage.theme.sky
    sun_y = moon_y = None
    moon_opacity = lights = 0.0
    for event, t in active_events(stage, distance):
        v = event.values
        if event.kind == "sky_gradient":
            gradient = tuple(_lerp_color(a, b, t) for a, b in zip(v["start_color"], v["end_color"]))
        elif event.kind == "celestial_sun":
            sun_y = _lerp(v["start_y"], v["end_y"], t)
        elif event.kind == "celestial_moon":
            moon_y = _lerp(v["start_y"], v["end_y"], t)
            moon_opacity = v.get("opacity", 1.0)
        elif event.kind == "night_lights":
            if "opacity" in v:
                lights = v["opacity"]
            else:
                lights = _lerp(v["start_opacity"], v["end_opacity"], t)
    return SkyView(gradient, sun_y, moon_y, moon_opacity, lights)
