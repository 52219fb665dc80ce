# cave_escape/game/stages.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import TARGET_DISTANCE_PX

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class StageParams:
    """Generation constraints for one stage. Colors and description are cosmetic."""
    min_gap: float           # minimum vertical opening (px)
    period: float            # noise wavelength in travel px
    slope_per_100: float     # max centre-line change per 100 px of travel
    target_distance: float   # travel needed to clear the stage
    speed: float             # scroll speed (px/s)
    spike_chance: float      # per-cell probability of a spike, per wall
    description: str = ""
    bg_color: Color = (44, 62, 80)
    wall_color: Color = (52, 73, 94)


STAGES: Tuple[StageParams, ...] = (
    StageParams(min_gap=260, period=600, slope_per_100=40, target_distance=TARGET_DISTANCE_PX,
                speed=150, spike_chance=0.10, description="Tutorial",
                bg_color=(44, 62, 80), wall_color=(52, 73, 94)),
    StageParams(min_gap=240, period=500, slope_per_100=50, target_distance=TARGET_DISTANCE_PX,
                speed=150, spike_chance=0.20, description="Height limits",
                bg_color=(52, 73, 94), wall_color=(44, 62, 80)),
    StageParams(min_gap=220, period=450, slope_per_100=60, target_distance=TARGET_DISTANCE_PX,
                speed=300, spike_chance=0.20, description="Fast scroll",
                bg_color=(142, 68, 173), wall_color=(155, 89, 182)),
    StageParams(min_gap=200, period=350, slope_per_100=80, target_distance=TARGET_DISTANCE_PX,
                speed=200, spike_chance=0.30, description="Complex walls",
                bg_color=(230, 126, 34), wall_color=(243, 156, 18)),
    StageParams(min_gap=180, period=300, slope_per_100=100, target_distance=TARGET_DISTANCE_PX,
                speed=250, spike_chance=0.35, description="Final stage",
                bg_color=(192, 57, 43), wall_color=(231, 76, 60)),
)

_DIFFICULTY = (1.0, 1.2, 1.5, 2.0, 2.5)


def stage_count() -> int:
    return len(STAGES)


def get_stage(stage: int) -> StageParams:
    """Stage numbers are 1-based."""
    if not 1 <= stage <= len(STAGES):
        raise IndexError(f"Stage {stage} out of range 1..{len(STAGES)}")
    return STAGES[stage - 1]


def is_last_stage(stage: int) -> bool:
    return stage >= len(STAGES)


def next_stage(stage: int) -> Optional[int]:
    return None if is_last_stage(stage) else stage + 1


def stage_progress(stage: int, distance: float) -> float:
    target = get_stage(stage).target_distance
    return max(0.0, min(distance / target, 1.0))


def difficulty_multiplier(stage: int) -> float:
    get_stage(stage)
    return _DIFFICULTY[stage - 1]
