from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from .board import Board


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def rotate_cw(shape: Shape) -> Shape:
    """Transpose then reverse each row."""
    return np.rot90(shape, 1, axes=(1, 0)).copy()


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
    TetrominoType.O: "#f0f000",
    TetrominoType.S: "#00f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.Z: "#f00000",
}


@dataclass(eq=False)
class Piece:
    """A falling piece: catalog kind, current shape and board anchor.

    The anchor `(x, y)` is the board coordinate of the shape matrix's top-left
    cell. `move` and `rotate` only ever commit states that do not collide.
    """

    kind: TetrominoType
    x: int = 0
    y: int = 0
    shape: Optional[Shape] = field(default=None)

    def __post_init__(self) -> None:
        base = BASE_SHAPES[self.kind] if self.shape is None else self.shape
        self.shape = np.array(base, dtype=np.int8)

    @property
    def token(self) -> int:
        return int(self.kind)

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def cells_at(self, origin_x: int, origin_y: int, shape: Optional[Shape] = None) -> List[Tuple[int, int]]:
        s = self.shape if shape is None else shape
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def collides(self, board: "Board") -> bool:
        return board.collides(self.cells())

    def move(self, board: "Board", dx: int, dy: int) -> bool:
        self.x += dx
        self.y += dy
        if self.collides(board):
            self.x -= dx
            self.y -= dy
            return False
        return True

    def rotate(self, board: "Board") -> bool:
        # No wall kicks: a blocked rotation leaves the piece untouched.
        rotated = rotate_cw(self.shape)
        if board.collides(self.cells_at(self.x, self.y, rotated)):
            return False
        self.shape = rotated
        return True
