from __future__ import annotations

from typing import Optional, Tuple

import pygame

from blockfall.game import GameState, Piece
from blockfall.game.constants import EMPTY
from blockfall.game.stats import format_time

BACKGROUND = (10, 10, 14)
BOARD = (30, 30, 36)
EMPTY_CELL = (20, 20, 26)
TEXT = (235, 235, 235)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, state: GameState) -> Tuple[int, int]:
        h, w = state.grid.shape
        return (
            w * self.cell_size + self.margin * 3 + self.panel_width,
            h * self.cell_size + self.margin * 2,
        )

    def _cell(self, surf: pygame.Surface, x: int, y: int, color) -> None:
        rect = pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )
        pygame.draw.rect(surf, color, rect)

    def _grid_surface(self, state: GameState) -> pygame.Surface:
        h, w = state.grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BOARD)
        for y in range(h):
            for x in range(w):
                token = state.grid[x, y]
                self._cell(surf, x, y, pygame.Color(token) if token != EMPTY else EMPTY_CELL)
        piece = state.current_piece
        if piece is not None and not state.is_game_over:
            for x, y in piece.cells():
                if state.grid.is_inside(x, y):
                    self._cell(surf, x, y, pygame.Color(piece.color))
        return surf

    def _preview(self, piece: Optional[Piece]) -> pygame.Surface:
        surf = pygame.Surface((4 * self.cell_size, 4 * self.cell_size))
        surf.fill(BOARD)
        if piece is None:
            return surf
        h, w = piece.shape.shape
        off_x, off_y = (4 - w) // 2, (4 - h) // 2
        for dy in range(h):
            for dx in range(w):
                if piece.shape[dy, dx]:
                    self._cell(surf, dx + off_x, dy + off_y, pygame.Color(piece.color))
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        screen.blit(self._font.render(text, True, TEXT), pos)

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        screen.fill(BACKGROUND)
        grid_surf = self._grid_surface(state)
        screen.blit(grid_surf, (self.margin, self.margin))

        px = self.margin * 2 + grid_surf.get_width()
        self._text(screen, "Next", (px, self.margin))
        screen.blit(self._preview(state.next_piece), (px, self.margin + 22))
        hold_y = self.margin + 40 + 4 * self.cell_size
        self._text(screen, "Hold", (px, hold_y))
        screen.blit(self._preview(state.hold_piece), (px, hold_y + 22))

        lines = [
            f"Mode: {state.game_mode.value}",
            f"Score: {state.score}",
            f"Level: {state.level}",
            f"Combo: {state.combo}",
        ]
        if state.target_score is not None:
            lines.append(f"Target: {state.target_score}")
        if state.time_remaining is not None:
            lines.append(f"Time: {format_time(state.time_remaining)}")
        if state.is_paused:
            lines.append("PAUSED")
        if state.is_game_completed:
            lines.append("COMPLETED - N for next")
        if state.is_game_over:
            lines.append("GAME OVER - R / U")
        y = hold_y + 40 + 4 * self.cell_size
        for line in lines:
            self._text(screen, line, (px, y))
            y += 24
        pygame.display.flip()
