# cave_escape/game/render.py
from __future__ import annotations
from typing import List
import pygame

from .config import (
    WIDTH, HEIGHT, PX_PER_KM, COLOR_BG, COLOR_FG, COLOR_ACCENT, COLOR_DANGER, COLOR_PANEL
)
from .geometry import format_km
from .session import Session, TITLE, PAUSED, GAMEOVER, STAGECLEAR, ALLCLEAR


def draw_world(surf: pygame.Surface, session: Session):
    """Walls + rocket for the current tick."""
    params = session.params
    surf.fill(COLOR_BG)
    session.cave.draw(surf, params.wall_color)
    color = COLOR_ACCENT if session.alive else COLOR_DANGER
    pygame.draw.polygon(surf, color, session.rocket.polygon())
    if session.rocket.thrusting and session.alive:
        r = session.rocket.rect
        flame = [(r.left, r.top + 4), (r.left - 10, r.centery), (r.left, r.bottom - 4)]
        pygame.draw.polygon(surf, COLOR_DANGER, flame)


def draw_hud(surf: pygame.Surface, session: Session, font: pygame.font.Font):
    hud = (f"Stage {session.stage}   Dist: {format_km(session.total_distance, PX_PER_KM)} km   "
           f"Best: {format_km(session.best_distance, PX_PER_KM)} km   Seed: {session.seed:.3f}")
    surf.blit(font.render(hud, True, COLOR_FG), (12, 10))
    surf.blit(font.render("SPACE thrust | P pause | ESC title", True, (160, 180, 210)), (12, 32))


def _overlay_lines(session: Session) -> List[str]:
    km = format_km(session.total_distance, PX_PER_KM)
    if session.state == TITLE:
        return ["CAVE ESCAPE", f"Stage {session.stage}: {session.params.description}", "SPACE to start"]
    if session.state == PAUSED:
        return ["PAUSED", "P to resume"]
    if session.state == GAMEOVER:
        return ["GAME OVER", f"{km} km  (stage {session.stage})", "R restart | N new seed"]
    if session.state == STAGECLEAR:
        return [f"STAGE {session.stage} CLEAR", f"{km} km", "SPACE next stage"]
    if session.state == ALLCLEAR:
        return ["ALL CLEAR", f"Total {km} km", "R play again"]
    return []


def draw_overlay(surf: pygame.Surface, session: Session, font: pygame.font.Font):
    lines = _overlay_lines(session)
    if not lines:
        return
    panel_w, panel_h = 360, 28 * (len(lines) + 1)
    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    panel.fill(COLOR_PANEL)
    x0, y0 = (WIDTH - panel_w) // 2, (HEIGHT - panel_h) // 2
    surf.blit(panel, (x0, y0))
    for i, msg in enumerate(lines):
        txt = font.render(msg, True, COLOR_FG)
        surf.blit(txt, (WIDTH // 2 - txt.get_width() // 2, y0 + 14 + i * 28))
