# stickrun/game/stages.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple
from .config import BASE_SPEED
from .hazards import HazardKind

Color = Tuple[int, int, int]

# Timeline end sentinel: "until the end of the course".
UNTIL_END = -1.0


@dataclass(frozen=True)
class StageTheme:
    ground: Color
    sky: Tuple[Color, Color, Color]    # top, mid, bottom
    sun: Color
    moon: Color


@dataclass(frozen=True)
class Difficulty:
    base_speed: float
    spawn_interval_s: float
    kinds: Tuple[HazardKind, ...]      # first entry seeds the run
    double_spawn: bool = False


@dataclass(frozen=True)
class TimelineEvent:
    """
    Presentation-only visual event. Negative start/end are measured back from
    the course end; an end of exactly UNTIL_END means the course end itself.
    """
    kind: str                          # sky_gradient | celestial_sun | celestial_moon | night_lights
    start: float
    end: float
    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StageConfig:
    id: str
    name: str
    description: str
    theme: StageTheme
    background: str                    # city | beach | mountains | city_victory
    music: str
    difficulty: Difficulty
    course_length: float
    timeline: Tuple[TimelineEvent, ...] = ()

    @property
    def base_speed(self) -> float:
        return self.difficulty.base_speed or BASE_SPEED


K = HazardKind

STAGES: Tuple[StageConfig, ...] = (
    StageConfig(
        id="stage_1_city",
        name="NEON CITY",
        description="Survive the urban night run.",
        theme=StageTheme(ground=(255, 0, 204),
                         sky=((15, 12, 41), (48, 43, 99), (36, 36, 62)),
                         sun=(253, 184, 19), moon=(254, 252, 215)),
        background="city",
        music="neon_city",
        difficulty=Difficulty(base_speed=5.0, spawn_interval_s=1.5,
                              kinds=(K.BLOCK, K.SHARD, K.HEART)),
        course_length=50000.0,
        timeline=(
            TimelineEvent("celestial_sun", 0.0, 25000.0, {"start_y": 60.0, "end_y": 320.0}),
            TimelineEvent("sky_gradient", 20000.0, 30000.0, {
                "start_color": ((48, 43, 99), (120, 60, 140), (250, 140, 80)),
                "end_color": ((15, 12, 41), (48, 43, 99), (36, 36, 62)),
            }),
            TimelineEvent("night_lights", 25000.0, UNTIL_END,
                          {"start_opacity": 0.0, "end_opacity": 1.0}),
            TimelineEvent("celestial_moon", -20000.0, UNTIL_END,
                          {"start_y": 320.0, "end_y": 50.0, "opacity": 1.0}),
        ),
    ),
    StageConfig(
        id="stage_2_beach",
        name="SYNTHWAVE BEACH",
        description="Dodge obstacles on the retro coast.",
        theme=StageTheme(ground=(0, 255, 255),
                         sky=((26, 42, 108), (178, 31, 31), (253, 187, 45)),
                         sun=(255, 221, 85), moon=(255, 255, 255)),
        background="beach",
        music="synthwave_beach",
        difficulty=Difficulty(base_speed=6.0, spawn_interval_s=1.3,
                              kinds=(K.BLOCK, K.SHARD, K.BOULDER, K.HEART),
                              double_spawn=True),
        course_length=30000.0,
        timeline=(
            TimelineEvent("celestial_sun", 0.0, -10000.0, {"start_y": 200.0, "end_y": 330.0}),
            TimelineEvent("night_lights", -10000.0, UNTIL_END, {"opacity": 0.6}),
        ),
    ),
    StageConfig(
        id="stage_3_landscape",
        name="DIGITAL PEAKS",
        description="Navigate the wireframe mountains.",
        theme=StageTheme(ground=(0, 255, 0),
                         sky=((0, 0, 0), (15, 155, 15), (0, 0, 0)),
                         sun=(0, 255, 0), moon=(204, 255, 204)),
        background="mountains",
        music="digital_peaks",
        difficulty=Difficulty(base_speed=7.0, spawn_interval_s=1.1,
                              kinds=(K.BLOCK, K.SPIKE, K.SHARD, K.BOULDER, K.HEART),
                              double_spawn=True),
        course_length=40000.0,
    ),
    StageConfig(
        id="stage_4_victory",
        name="VICTORY LAP",
        description="The final sprint to glory.",
        theme=StageTheme(ground=(255, 215, 0),
                         sky=((75, 108, 183), (24, 40, 72), (255, 215, 0)),
                         sun=(255, 255, 255), moon=(255, 255, 255)),
        background="city_victory",
        music="victory_lap",
        difficulty=Difficulty(base_speed=8.0, spawn_interval_s=0.9,
                              kinds=(K.BLOCK, K.SPIKE, K.BOULDER, K.HEART),
                              double_spawn=True),
        course_length=50000.0,
    ),
)

STAGES_BY_ID: Dict[str, StageConfig] = {s.id: s for s in STAGES}
DEFAULT_STAGE_ID = STAGES[0].id


def get_stage(stage_id: str) -> StageConfig:
    try:
        return STAGES_BY_ID[stage_id]
    except KeyError:
        raise KeyError(f"Unknown stage id {stage_id!r}; known: {sorted(STAGES_BY_ID)}") from None
