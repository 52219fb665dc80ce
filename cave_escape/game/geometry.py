# cave_escape/game/geometry.py
from __future__ import annotations
import math
from typing import Iterable, List, Sequence, Tuple

Vec = Tuple[float, float]


def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def quantize(v: float, step: float) -> float:
    """Round v to the nearest multiple of step."""
    return round(v / step) * step


def hash01(i: int, seed: float) -> float:
    """Reproducible sine hash of (i, seed) in [0, 1). Not for anything secret."""
    h = math.sin(i * 127.1 + seed * 311.7) * 43758.5453
    return h - math.floor(h)


def segments_intersect(p1: Sequence[float], p2: Sequence[float],
                       p3: Sequence[float], p4: Sequence[float]) -> bool:
    """Segment p1p2 vs p3p4. Parallel and collinear pairs count as not touching."""
    rx, ry = p2[0] - p1[0], p2[1] - p1[1]
    sx, sy = p4[0] - p3[0], p4[1] - p3[1]
    denom = rx * sy - ry * sx
    if abs(denom) < 1e-8:
        return False
    qx, qy = p3[0] - p1[0], p3[1] - p1[1]
    t = (qx * sy - qy * sx) / denom
    u = (qx * ry - qy * rx) / denom
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def polygon_edges(poly: Sequence[Sequence[float]]) -> List[Tuple[Sequence[float], Sequence[float]]]:
    """All edges of a closed polygon, closing edge last."""
    n = len(poly)
    return [(poly[i], poly[(i + 1) % n]) for i in range(n)]


def polyline_y_at_x(points: Iterable, x: float) -> float:
    """
    Interpolated y of an x-sorted polyline (items with .x/.y).
    Outside the covered range the nearest endpoint's y is returned.
    """
    first = None
    prev = None
    for q in points:
        if prev is None:
            first = q
        elif prev.x <= x <= q.x:
            span = q.x - prev.x
            if span <= 0.0:
                return prev.y
            return lerp(prev.y, q.y, (x - prev.x) / span)
        prev = q
    assert first is not None, "empty polyline"
    return first.y if x < first.x else prev.y


def format_km(px: float, px_per_km: float = 100.0) -> str:
    return f"{px / px_per_km:.1f}"
