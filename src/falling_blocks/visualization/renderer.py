from __future__ import annotations

from typing import List, Optional

import pygame

from falling_blocks.game import COLORS, HIGHLIGHT_COLORS, FallingBlocksGame, TetrominoType


BACKGROUND = (10, 10, 14)
EMPTY = (20, 20, 26)
GRID_LINE = (31, 31, 31)
OUTLINE = (17, 17, 17)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> pygame.Color:
    try:
        return pygame.Color(COLORS[TetrominoType(abs(v))])
    except ValueError:
        return pygame.Color(200, 200, 200)


class Renderer:
    """Read-only view of a FallingBlocksGame: board, falling piece and side panel."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width

    def window_size(self, game: FallingBlocksGame) -> tuple[int, int]:
        width = game.board.cols * self.cell_size + self.margin * 3 + self.panel_width
        height = game.board.rows * self.cell_size + self.margin * 2
        return width, height

    def _draw_cell(self, surf: pygame.Surface, x: int, y: int, color) -> None:
        rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)
        pygame.draw.rect(surf, color, rect)
        pygame.draw.rect(surf, OUTLINE, rect, 1)

    def _board_surface(self, game: FallingBlocksGame) -> pygame.Surface:
        board = game.board
        surf = pygame.Surface((board.cols * self.cell_size, board.rows * self.cell_size))
        surf.fill(EMPTY)
        flashing = set(game.clearing_rows) if game.highlight is not None else set()
        for y in range(board.rows):
            for x in range(board.cols):
                if y in flashing:
                    self._draw_cell(surf, x, y, pygame.Color(HIGHLIGHT_COLORS[game.highlight]))
                    continue
                v = int(board.cells[y, x])
                if v:
                    self._draw_cell(surf, x, y, _color_for_value(v))
        piece = game.current_piece
        if piece is not None and not game.game_over:
            color = pygame.Color(piece.color)
            for x, y in piece.cells():
                if board.is_inside(x, y):
                    self._draw_cell(surf, x, y, color)
        self._draw_grid(surf, board.rows, board.cols)
        return surf

    def _draw_grid(self, surf: pygame.Surface, rows: int, cols: int) -> None:
        for x in range(cols + 1):
            px = x * self.cell_size
            pygame.draw.line(surf, GRID_LINE, (px, 0), (px, rows * self.cell_size))
        for y in range(rows + 1):
            py = y * self.cell_size
            pygame.draw.line(surf, GRID_LINE, (0, py), (cols * self.cell_size, py))

    def panel_lines(self, game: FallingBlocksGame) -> List[str]:
        lines = [
            f"Score: {game.score}",
            f"High score: {game.high_score}",
            f"Lines: {game.lines_cleared_total}",
            f"Speed: {game.speed:g}",
            "",
            "Arrows: move / rotate",
            "P: pause  R: restart",
            "1/2/3: easy/medium/hard",
            "+/-: speed",
        ]
        if game.paused:
            lines.append("PAUSED")
        if game.game_over:
            lines.append("GAME OVER")
        return lines

    def draw(self, screen: pygame.Surface, game: FallingBlocksGame, font: Optional[pygame.font.Font] = None) -> None:
        screen.fill(BACKGROUND)
        screen.blit(self._board_surface(game), (self.margin, self.margin))
        if font is not None:
            x_text = self.margin * 2 + game.board.cols * self.cell_size
            for i, txt in enumerate(self.panel_lines(game)):
                img = font.render(txt, True, TEXT)
                screen.blit(img, (x_text, self.margin + i * 22))
        pygame.display.flip()
