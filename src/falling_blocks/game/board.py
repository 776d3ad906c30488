from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from .pieces import Piece


Coordinate = Tuple[int, int]


class Board:
    """Fixed-size grid of falling-block cells.

    The grid uses 0 for empty cells and positive integers for occupied cells.
    Integer values are the token of the piece kind that filled the cell, so
    renderers can color them. Row 0 is the top of the board; coordinates with
    a negative y lie above the visible board and are never occupied.
    """

    def __init__(self, rows: int = 20, cols: int = 10) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"board dimensions must be positive, got {rows}x{cols}")
        self.rows = int(rows)
        self.cols = int(cols)
        self.cells = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self) -> None:
        self.cells.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_occupied(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.cols or y >= self.rows:
            return True
        if y < 0:
            return False
        return self.cells[y, x] != 0

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        return any(self.is_occupied(x, y) for x, y in cells)

    def place(self, cells: Iterable[Coordinate], token: int) -> None:
        """Write `token` into the given cells. Cells must already be collision-checked."""
        for x, y in cells:
            if self.is_inside(x, y):
                self.cells[y, x] = token

    def lock(self, piece: "Piece") -> List[int]:
        """Write `piece` into the board and return the rows it left full."""
        self.place(piece.cells(), piece.token)
        return self.find_full_rows()

    def find_full_rows(self) -> List[int]:
        full_rows = np.where(np.all(self.cells != 0, axis=1))[0]
        return [int(r) for r in full_rows]

    def remove_rows(self, rows: Sequence[int]) -> None:
        """Remove `rows` (pre-removal indices) and push empty rows in from the top."""
        doomed = sorted({int(r) for r in rows if 0 <= int(r) < self.rows})
        if not doomed:
            return
        kept = np.delete(self.cells, doomed, axis=0)
        new_rows = np.zeros((len(doomed), self.cols), dtype=np.int8)
        self.cells = np.vstack((new_rows, kept))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.cells != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.rows - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.cols):
            seen_block = False
            for cell in self.cells[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def filled_ratio(self) -> float:
        return float(np.count_nonzero(self.cells)) / float(self.rows * self.cols)

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
