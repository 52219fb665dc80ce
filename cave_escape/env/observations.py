# cave_escape/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from cave_escape.game.cave import Cave
from cave_escape.game.config import HEIGHT, MAX_VY
from cave_escape.game.rocket import Rocket

# Probe positions ahead of the rocket (screen space)
PROBE_OFFSETS: Tuple[int, ...] = (0, 120, 240, 360)
OBS_SIZE = 2 + 2 * len(PROBE_OFFSETS)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def build_observation(rocket: Rocket, cave: Cave,
                      probe_offsets: Tuple[int, ...] = PROBE_OFFSETS) -> np.ndarray:
    """
    Returns a (2 + 2*len(probe_offsets),) float32 vector:
      [ y_norm, vy_norm,
        ceil@0, floor@0, ceil@120, floor@120, ceil@240, floor@240, ceil@360, floor@360 ]
    - y_norm in [0,1] (rocket centre over screen height)
    - vy_norm in [-1,1]
    - ceil/floor are the boundary heights at each probe, normalized by HEIGHT
    """
    feats: List[float] = [
        _clamp01(rocket.y / HEIGHT),
        max(-1.0, min(1.0, rocket.vy / MAX_VY)),
    ]
    for dx in probe_offsets:
        px = rocket.x + dx
        feats.append(_clamp01(cave.y_at_x("top", px) / HEIGHT))
        feats.append(_clamp01(cave.y_at_x("bot", px) / HEIGHT))
    return np.asarray(feats, dtype=np.float32)
