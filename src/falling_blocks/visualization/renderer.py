from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import PIECE_COLORS, BlockGame, TetrominoType, preview_mask


BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    token = abs(int(v))
    if token == 0:
        return EMPTY_CELL
    c = pygame.Color(PIECE_COLORS.get(token, "#C8C8C8"))
    return c.r, c.g, c.b


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells

    def window_size(self, game: BlockGame) -> Tuple[int, int]:
        width = self.margin * 3 + (game.grid.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + game.grid.height * self.cell_size
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _preview_surface(self, kind: Optional[TetrominoType]) -> pygame.Surface:
        size = self.cell_size * 2 // 3
        surf = pygame.Surface((4 * size, 4 * size))
        surf.fill(BACKGROUND)
        if kind is None:
            return surf
        mask = preview_mask(kind)
        color = _color_for_value(int(kind))
        for r in range(4):
            for c in range(4):
                if mask[r, c]:
                    pygame.draw.rect(surf, color, pygame.Rect(c * size, r * size, size - 1, size - 1))
        return surf

    def draw(self, screen: pygame.Surface, game: BlockGame, font: pygame.font.Font) -> None:
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(game.get_state()), (self.margin, self.margin))

        x0 = self.margin * 2 + game.grid.width * self.cell_size
        y = self.margin
        hold = game.hold_piece
        for label, kind in (("Next", game.next_piece), ("Hold", None if hold is None else hold.kind)):
            screen.blit(font.render(label, True, TEXT), (x0, y))
            y += 20
            screen.blit(self._preview_surface(kind), (x0, y))
            y += self.cell_size * 3

        for txt in (f"Score: {game.score}", f"Level: {game.level}", f"Lines: {game.lines}"):
            screen.blit(font.render(txt, True, TEXT), (x0, y))
            y += 22

        if game.game_over:
            self._overlay(screen, font, f"Game Over - score {game.score} - R to retry")
        elif game.paused:
            self._overlay(screen, font, "Paused - P to resume")
        pygame.display.flip()

    def _overlay(self, screen: pygame.Surface, font: pygame.font.Font, message: str) -> None:
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        screen.blit(shade, (0, 0))
        text = font.render(message, True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
