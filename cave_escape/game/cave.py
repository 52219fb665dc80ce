# cave_escape/game/cave.py
from __future__ import annotations
import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Sequence, Tuple

import pygame

from .config import (
    WIDTH, HEIGHT, SEGMENT_W, TOP_MARGIN, BOTTOM_MARGIN, BLOCK_STEP, SAFE_DIST_PX,
    WAVE_AMP_1, WAVE_AMP_2, WAVE_FREQ_RATIO, WAVE_PHASE_SCALE,
    SPIKE_CELL_W, SPIKE_MAX_H, SPIKE_BEVEL_SCALE, COLOR_EDGE
)
from .geometry import clamp, quantize, hash01, segments_intersect, polygon_edges, polyline_y_at_x
from .stages import StageParams

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass
class BoundaryPoint:
    x: float   # screen space, shifts left as the world scrolls
    y: float


class Cave:
    """
    Endless scrolling corridor between a `top` and a `bot` polyline.

    Points are generated on the right edge every SEGMENT_W px and evicted on
    the left once they are off screen. Geometry depends only on the travel
    position of each point and on `seed`, so two caves with the same seed,
    params and update sequence are identical.
    """
    def __init__(self, params: StageParams, safe_dist_px: float = SAFE_DIST_PX,
                 seed: Optional[float] = None, width: int = WIDTH, height: int = HEIGHT):
        assert safe_dist_px >= 0, "safe_dist_px must be >= 0"
        if seed is None:
            seed = random.random() * 1000.0
        self.seed = float(seed)
        self.width = width
        self.height = height
        self.safe_dist_px = float(safe_dist_px)
        self.params = params
        self._check_params(params)

        self.top: Deque[BoundaryPoint] = deque()
        self.bot: Deque[BoundaryPoint] = deque()
        self.centers: Deque[float] = deque()   # generated centre of each pair, before spikes
        self.right_x = 0.0                     # next x to generate (screen space)
        self.total = 0.0                       # cumulative travel
        self.reset()

    # -------------------- Lifecycle --------------------

    def reset(self):
        self.top.clear()
        self.bot.clear()
        self.centers.clear()
        self.right_x = 0.0
        self.total = 0.0
        self._extend()
        logger.debug("cave reset seed=%.3f points=%d min_gap=%s",
                     self.seed, len(self.top), self.params.min_gap)

    def set_params(self, params: StageParams):
        """Only affects points generated from now on."""
        self._check_params(params)
        self.params = params
        logger.debug("cave params -> %s (min_gap=%s)", params.description, params.min_gap)

    def _check_params(self, params: StageParams):
        playable = self.height - TOP_MARGIN - BOTTOM_MARGIN
        assert params.min_gap <= playable, f"min_gap {params.min_gap} exceeds playable height {playable}"
        assert params.period > 0, "period must be > 0"

    def update(self, dx: float):
        """Scroll the window left by dx, evict old points and extend on the right."""
        assert dx >= 0, f"dx must be >= 0, got {dx}"
        self.total += dx
        if dx:
            for p in self.top:
                p.x -= dx
            for p in self.bot:
                p.x -= dx
            self.right_x -= dx
        self._evict()
        self._extend()

    def _evict(self):
        while len(self.top) > 2 and self.top[1].x < -SEGMENT_W:
            self.top.popleft()
            self.bot.popleft()
            self.centers.popleft()

    def _extend(self):
        while self.right_x <= self.width + SEGMENT_W:
            self._append_pair(self.right_x)
            self.right_x += SEGMENT_W

    # -------------------- Generation --------------------

    def _center_bounds(self) -> Tuple[float, float]:
        half = self.params.min_gap / 2
        return TOP_MARGIN + half, self.height - BOTTOM_MARGIN - half

    def _center_y(self, travel: float) -> float:
        lo, hi = self._center_bounds()
        mid = clamp(self.height / 2, lo, hi)
        if travel < self.safe_dist_px:
            return mid

        t = travel / self.params.period
        y = (mid
             + WAVE_AMP_1 * math.sin(math.tau * t + self.seed)
             + WAVE_AMP_2 * math.sin(math.tau * t * WAVE_FREQ_RATIO + self.seed * WAVE_PHASE_SCALE))

        # slope clamp against the midpoint of the last pair
        if len(self.top) >= 2:
            prev = (self.top[-1].y + self.bot[-1].y) / 2
            max_delta = self.params.slope_per_100 * (SEGMENT_W / 100.0)
            y = clamp(y, prev - max_delta, prev + max_delta)
        return clamp(y, lo, hi)

    def _spike_heights(self, travel: float) -> Tuple[float, float]:
        """(stalactite, stalagmite) depth for this travel position, 0 when absent."""
        if travel < self.safe_dist_px:
            return 0.0, 0.0
        cell = int(travel // SPIKE_CELL_W)
        # first and last segment slot of the cell are bevelled
        slots = SPIKE_CELL_W // SEGMENT_W
        slot = int(round((travel - cell * SPIKE_CELL_W) / SEGMENT_W))
        scale = SPIKE_BEVEL_SCALE if slot <= 0 or slot >= slots - 1 else 1.0
        steps = SPIKE_MAX_H // BLOCK_STEP

        heights = []
        for k in (0, 1):  # 0 = top, 1 = bottom
            if hash01(4 * cell + k, self.seed) < self.params.spike_chance:
                h = (1 + int(hash01(4 * cell + 2 + k, self.seed) * steps)) * BLOCK_STEP
                heights.append(quantize(h * scale, BLOCK_STEP))
            else:
                heights.append(0.0)
        return heights[0], heights[1]

    def _fit(self, top_y: float, bot_y: float, gap: float, spike_top: float, spike_bot: float) -> Tuple[float, float]:
        """Restore the gap and margins after spikes, then snap outward to the block grid."""
        lo = TOP_MARGIN
        hi = self.height - BOTTOM_MARGIN

        deficit = gap - (bot_y - top_y)
        if deficit > 0:
            # a spike pushes the opposite wall away rather than closing the corridor
            if spike_top and not spike_bot:
                bot_y += deficit
            elif spike_bot and not spike_top:
                top_y -= deficit
            else:
                top_y -= deficit / 2
                bot_y += deficit / 2

        if top_y < lo:
            bot_y += lo - top_y
            top_y = lo
        if bot_y > hi:
            top_y -= bot_y - hi
            bot_y = hi
        top_y = max(top_y, lo)

        top_y = math.floor(top_y / BLOCK_STEP) * BLOCK_STEP
        bot_y = math.ceil(bot_y / BLOCK_STEP) * BLOCK_STEP
        return top_y, bot_y

    def _append_pair(self, x: float):
        # rounding absorbs float drift from repeated shifts
        travel = round(self.total + x, 6)
        center = quantize(self._center_y(travel), BLOCK_STEP)
        gap = math.ceil(self.params.min_gap / BLOCK_STEP) * BLOCK_STEP

        spike_top, spike_bot = self._spike_heights(travel)
        top_y = center - gap / 2 + spike_top
        bot_y = center + gap / 2 - spike_bot
        top_y, bot_y = self._fit(top_y, bot_y, gap, spike_top, spike_bot)

        self.top.append(BoundaryPoint(x, top_y))
        self.bot.append(BoundaryPoint(x, bot_y))
        self.centers.append(center)

    # -------------------- Queries --------------------

    def y_at_x(self, which: str, x: float) -> float:
        if which == "top":
            return polyline_y_at_x(self.top, x)
        if which == "bot":
            return polyline_y_at_x(self.bot, x)
        raise ValueError(f"Unknown boundary {which!r} (expected 'top' or 'bot')")

    def center_at_x(self, x: float) -> float:
        return (polyline_y_at_x(self.top, x) + polyline_y_at_x(self.bot, x)) / 2

    def collides(self, polygon: Sequence[Sequence[float]]) -> bool:
        """
        True if any vertex leaves the corridor at its own x, or any polygon edge
        (closing edge included) crosses a segment of either boundary.
        """
        assert len(polygon) >= 3, "polygon needs at least 3 vertices"
        return self.vertex_outside(polygon) or self.edges_cross(polygon)

    def vertex_outside(self, polygon: Sequence[Sequence[float]]) -> bool:
        for v in polygon:
            vx, vy = v[0], v[1]
            if vy < polyline_y_at_x(self.top, vx) or vy > polyline_y_at_x(self.bot, vx):
                return True
        return False

    def edges_cross(self, polygon: Sequence[Sequence[float]]) -> bool:
        """Exact edge vs boundary-segment test, only over segments in the polygon's x range."""
        min_x = min(v[0] for v in polygon)
        max_x = max(v[0] for v in polygon)
        edges = polygon_edges(polygon)
        for wall in (self.top, self.bot):
            prev = None
            for q in wall:
                if prev is not None and q.x >= min_x and prev.x <= max_x:
                    a = (prev.x, prev.y)
                    b = (q.x, q.y)
                    for e0, e1 in edges:
                        if segments_intersect(e0, e1, a, b):
                            return True
                prev = q
        return False

    # -------------------- Rendering --------------------

    def draw(self, surf: pygame.Surface, color: Color, edge_color: Color = COLOR_EDGE):
        """Fill both walls out to the screen edges and outline the boundaries."""
        if len(self.top) < 2:
            return
        top_line = [(p.x, p.y) for p in self.top]
        bot_line = [(p.x, p.y) for p in self.bot]
        left, right = top_line[0][0], top_line[-1][0]

        pygame.draw.polygon(surf, color, top_line + [(right, 0), (left, 0)])
        pygame.draw.polygon(surf, color, bot_line + [(right, self.height), (left, self.height)])
        pygame.draw.lines(surf, edge_color, False, top_line, 2)
        pygame.draw.lines(surf, edge_color, False, bot_line, 2)
