# minirunner/game/render.py
from __future__ import annotations
from typing import Optional
import pygame
from .config import (
    WIDTH, HEIGHT, GROUND_Y,
    COLOR_BG, COLOR_FG, COLOR_OBSTACLE, COLOR_DUST, COLOR_OVERLAY
)
from .world import Phase, Snapshot


class Renderer:
    """Draws a Snapshot onto a WIDTH x HEIGHT surface. Holds fonts only."""

    def __init__(self):
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.SysFont("trebuchetms", 20)
        self.font_mid = pygame.font.SysFont("trebuchetms", 22)
        self.font_big = pygame.font.SysFont("trebuchetms", 42, bold=True)
        self.font_start = pygame.font.SysFont("trebuchetms", 34, bold=True)

    def restart_rect(self) -> pygame.Rect:
        btn_w, btn_h = 180, 44
        return pygame.Rect((WIDTH - btn_w) // 2, HEIGHT // 2 + 44, btn_w, btn_h)

    def draw(self, surf: pygame.Surface, snap: Snapshot, seed: Optional[int] = None):
        surf.fill(COLOR_BG)
        pygame.draw.line(surf, COLOR_FG, (0, GROUND_Y), (WIDTH, GROUND_Y), 3)

        for x, y, w, h in snap.obstacles:
            pygame.draw.rect(surf, COLOR_OBSTACLE, pygame.Rect(int(x), int(y), int(w), int(h)))

        x, y, w, h = snap.player
        pygame.draw.rect(surf, COLOR_FG, pygame.Rect(int(x), int(y), int(w), int(h)))

        # per-particle alpha needs its own surface
        for p in snap.particles:
            size = max(1, int(p.size))
            dot = pygame.Surface((size, size), pygame.SRCALPHA)
            dot.fill((*COLOR_DUST, int(255 * p.alpha)))
            surf.blit(dot, (int(p.x), int(p.y)))

        self._draw_hud(surf, snap, seed)
        if snap.phase is Phase.NOT_STARTED:
            self._center_text(surf, self.font_start, "Press Space to Start", HEIGHT // 2)
        elif snap.phase is Phase.OVER:
            self._draw_game_over(surf, snap)

    def _draw_hud(self, surf: pygame.Surface, snap: Snapshot, seed: Optional[int]):
        surf.blit(self.font.render(f"Score: {snap.display_score}", True, COLOR_FG), (16, 12))
        surf.blit(self.font.render(f"High: {snap.best_score}", True, COLOR_FG), (16, 38))
        if seed is not None:
            txt = self.font.render(f"Seed: {seed}", True, COLOR_OBSTACLE)
            surf.blit(txt, (WIDTH - txt.get_width() - 16, 12))

    def _center_text(self, surf: pygame.Surface, font: pygame.font.Font, msg: str, cy: int):
        txt = font.render(msg, True, COLOR_FG)
        surf.blit(txt, (WIDTH // 2 - txt.get_width() // 2, cy - txt.get_height() // 2))

    def _draw_game_over(self, surf: pygame.Surface, snap: Snapshot):
        veil = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        veil.fill(COLOR_OVERLAY)
        surf.blit(veil, (0, 0))
        self._center_text(surf, self.font_big, "Game Over", HEIGHT // 2 - 20)
        self._center_text(surf, self.font_mid, "Press R or click Restart", HEIGHT // 2 + 20)

        if snap.show_restart:
            rect = self.restart_rect()
            pygame.draw.rect(surf, COLOR_FG, rect, border_radius=10)
            btn_txt = self.font_mid.render("Restart", True, COLOR_BG)
            surf.blit(btn_txt, (rect.centerx - btn_txt.get_width() // 2,
                                rect.centery - btn_txt.get_height() // 2))
