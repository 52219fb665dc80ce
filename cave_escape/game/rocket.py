# cave_escape/game/rocket.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import List, Tuple
from .config import (
    ROCKET_X, ROCKET_W, ROCKET_H, GRAVITY, THRUST, MAX_VY
)


@dataclass
class Rocket:
    """
    Craft with constant gravity and a held thrust:
    - y is the centre of the hull (screen space, +y down)
    - x stays fixed, the cave scrolls instead
    """
    x: float = float(ROCKET_X)
    y: float = 0.0
    vy: float = 0.0
    thrusting: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x - ROCKET_W / 2), int(self.y - ROCKET_H / 2), ROCKET_W, ROCKET_H)

    def reset(self, y: float):
        self.y = float(y)
        self.vy = 0.0
        self.thrusting = False

    def update_physics(self, dt: float, thrust: bool):
        """Integrate vertical motion, clamp velocity."""
        self.thrusting = bool(thrust)
        ay = GRAVITY - (THRUST if self.thrusting else 0.0)
        self.vy += ay * dt

        if self.vy > MAX_VY: self.vy = MAX_VY
        if self.vy < -MAX_VY: self.vy = -MAX_VY

        self.y += self.vy * dt

    def polygon(self) -> List[Tuple[float, float]]:
        """Hull outline, nose pointing right (direction of travel)."""
        hw, hh = ROCKET_W / 2, ROCKET_H / 2
        x, y = self.x, self.y
        return [
            (x - hw, y - hh),
            (x + hw / 3, y - hh),
            (x + hw, y),
            (x + hw / 3, y + hh),
            (x - hw, y + hh),
        ]
