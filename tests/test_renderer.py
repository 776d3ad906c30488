import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from falling_blocks.game import (
    COLORS,
    HIGHLIGHT_COLORS,
    FallingBlocksGame,
    GameConfig,
    Piece,
    TetrominoType,
)
from falling_blocks.visualization.renderer import EMPTY, Renderer

CELL = 10


def _center(surf, x, y):
    return surf.get_at((x * CELL + CELL // 2, y * CELL + CELL // 2))


def _clearing_game():
    game = FallingBlocksGame(GameConfig(random_seed=1))
    game.board.cells[19, :6] = int(TetrominoType.J)
    game.current_piece = Piece(TetrominoType.I, x=6, y=19)
    game.update(401)
    return game


def test_rows_show_piece_colors_before_first_flash():
    game = _clearing_game()
    surf = Renderer(cell_size=CELL)._board_surface(game)
    assert _center(surf, 0, 19) == pygame.Color(COLORS[TetrominoType.J])
    assert _center(surf, 9, 19) == pygame.Color(COLORS[TetrominoType.I])
    assert _center(surf, 0, 18) == pygame.Color(*EMPTY)


def test_flashing_rows_alternate_highlight_colors():
    game = _clearing_game()
    renderer = Renderer(cell_size=CELL)
    game.update(50)
    surf = renderer._board_surface(game)
    assert _center(surf, 3, 19) == pygame.Color(HIGHLIGHT_COLORS[0])
    game.update(50)
    surf = renderer._board_surface(game)
    assert _center(surf, 3, 19) == pygame.Color(HIGHLIGHT_COLORS[1])
    assert _center(surf, 3, 18) == pygame.Color(*EMPTY)


def test_falling_piece_is_drawn():
    game = FallingBlocksGame(GameConfig(random_seed=1))
    game.current_piece = Piece(TetrominoType.T, x=4, y=5)
    surf = Renderer(cell_size=CELL)._board_surface(game)
    assert _center(surf, 5, 5) == pygame.Color(COLORS[TetrominoType.T])
    assert _center(surf, 4, 5) == pygame.Color(*EMPTY)


def test_panel_lines():
    game = FallingBlocksGame(GameConfig(random_seed=1))
    game.score = 30
    game.lines_cleared_total = 3
    renderer = Renderer()
    lines = renderer.panel_lines(game)
    assert lines[:4] == ["Score: 30", "High score: 0", "Lines: 3", "Speed: 2.5"]
    assert "PAUSED" not in lines
    game.pause()
    assert "PAUSED" in renderer.panel_lines(game)
    game.resume()
    game.board.cells[2, 4] = 1
    game.current_piece = Piece(TetrominoType.O, x=4, y=0)
    game.update(401)
    assert renderer.panel_lines(game)[-1] == "GAME OVER"
