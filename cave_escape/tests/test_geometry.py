# cave_escape/tests/test_geometry.py
from __future__ import annotations
from dataclasses import dataclass

import pytest

from cave_escape.game.geometry import (
    clamp, lerp, quantize, hash01, segments_intersect, polygon_edges, polyline_y_at_x, format_km
)


@dataclass
class P:
    x: float
    y: float


def test_scalar_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(10, 20, 0.25) == pytest.approx(12.5)
    assert quantize(14.9, 10) == 10
    assert quantize(15.1, 10) == 20
    assert format_km(1234) == "12.3"


def test_hash01_is_pure_and_in_range():
    values = [hash01(i, 3.25) for i in range(500)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert values == [hash01(i, 3.25) for i in range(500)]
    assert values != [hash01(i, 4.25) for i in range(500)]
    # not degenerate
    assert 0.3 < sum(values) / len(values) < 0.7


def test_segments_crossing():
    assert segments_intersect((0, 0), (10, 10), (0, 10), (10, 0))


def test_segments_touching_at_endpoint():
    assert segments_intersect((0, 0), (10, 0), (10, 0), (10, 10))


def test_segments_apart():
    assert not segments_intersect((0, 0), (10, 0), (0, 5), (10, 5))
    assert not segments_intersect((0, 0), (4, 4), (6, 0), (10, -4))


def test_collinear_overlap_counts_as_no_hit():
    assert not segments_intersect((0, 0), (10, 0), (5, 0), (15, 0))


def test_polygon_edges_include_closing_edge():
    tri = [(0, 0), (1, 0), (0, 1)]
    edges = polygon_edges(tri)
    assert len(edges) == 3
    assert edges[-1] == ((0, 1), (0, 0))


def test_polyline_interpolation_and_flat_ends():
    line = [P(0, 100), P(20, 120), P(40, 80)]
    assert polyline_y_at_x(line, 10) == pytest.approx(110)
    assert polyline_y_at_x(line, 30) == pytest.approx(100)
    assert polyline_y_at_x(line, 20) == pytest.approx(120)
    assert polyline_y_at_x(line, -50) == 100
    assert polyline_y_at_x(line, 500) == 80
    assert polyline_y_at_x([P(5, 42)], 0) == 42
