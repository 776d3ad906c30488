from __future__ import annotations

import random
from typing import Optional

from .pieces import Piece, TetrominoType


class PieceFactory:
    """Uniform random piece source spawning at the top-center of the board."""

    def __init__(self, cols: int, rng: Optional[random.Random] = None, spawn_y: int = 0) -> None:
        self.cols = cols
        self.rng = rng or random.Random()
        self.spawn_y = spawn_y

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def spawn(self, kind: TetrominoType) -> Piece:
        piece = Piece(kind=kind)
        piece.x = self.cols // 2 - piece.width // 2
        piece.y = self.spawn_y
        return piece

    def next_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return self.spawn(kind)
