"""Game module for Falling Blocks.

Exports the simulation engine and supporting classes:
- Board: Grid representation, collision surface and row removal
- Piece: Tetromino piece with movement and rotation
- TetrominoType: Enum of available piece types
- PieceFactory: Random piece source
- ClearAnimator: Delayed, flashing line clears
- ScoringRules: Simple scoring configuration and helpers
- FallingBlocksGame: Simulation controller and state management
"""

from .board import Board
from .pieces import COLORS, Piece, TetrominoType
from .factory import PieceFactory
from .clear import HIGHLIGHT_COLORS, ClearAnimator, ClearPhase, PendingClear
from .rules import DIFFICULTY_INTERVALS, DIFFICULTY_SPEEDS, ScoringRules
from .core import Action, FallingBlocksGame, GameConfig, GameState

__all__ = [
    "Board",
    "COLORS",
    "Piece",
    "TetrominoType",
    "PieceFactory",
    "HIGHLIGHT_COLORS",
    "ClearAnimator",
    "ClearPhase",
    "PendingClear",
    "DIFFICULTY_INTERVALS",
    "DIFFICULTY_SPEEDS",
    "ScoringRules",
    "Action",
    "FallingBlocksGame",
    "GameConfig",
    "GameState",
]
