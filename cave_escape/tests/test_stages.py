# cave_escape/tests/test_stages.py
from __future__ import annotations
import pytest

from cave_escape.game.config import HEIGHT, TOP_MARGIN, BOTTOM_MARGIN
from cave_escape.game.stages import (
    STAGES, stage_count, get_stage, is_last_stage, next_stage, stage_progress, difficulty_multiplier
)


def test_table_shape():
    assert stage_count() == 5
    assert get_stage(1) is STAGES[0]
    assert get_stage(5) is STAGES[-1]


def test_out_of_range_stage():
    with pytest.raises(IndexError):
        get_stage(0)
    with pytest.raises(IndexError):
        get_stage(6)


def test_difficulty_increases():
    gaps = [s.min_gap for s in STAGES]
    slopes = [s.slope_per_100 for s in STAGES]
    assert gaps == sorted(gaps, reverse=True), "min_gap should shrink stage by stage"
    assert slopes == sorted(slopes), "slope limit should grow stage by stage"
    mults = [difficulty_multiplier(n) for n in range(1, 6)]
    assert mults == sorted(mults)


def test_every_stage_fits_the_screen():
    for s in STAGES:
        assert s.min_gap <= HEIGHT - TOP_MARGIN - BOTTOM_MARGIN
        assert 0.0 <= s.spike_chance <= 1.0
        assert s.period > 0 and s.speed > 0


def test_progression():
    assert next_stage(1) == 2
    assert next_stage(5) is None
    assert is_last_stage(5) and not is_last_stage(4)
    assert stage_progress(1, 0) == 0.0
    assert stage_progress(1, get_stage(1).target_distance / 2) == pytest.approx(0.5)
    assert stage_progress(1, 1e9) == 1.0
