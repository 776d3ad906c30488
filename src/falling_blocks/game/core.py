from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from falling_blocks.storage import HighScoreStore, InMemoryHighScoreStore

from .board import Board
from .clear import ClearAnimator
from .factory import PieceFactory
from .pieces import Piece
from .rules import (
    DIFFICULTY_SPEEDS,
    ScoringRules,
    clamp_speed,
    interval_for_difficulty,
    interval_for_speed,
)

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    NONE = 4


class GameState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    rows: int = 20
    cols: int = 10
    drop_interval_ms: float = 400.0
    random_seed: Optional[int] = None
    spawn_y: int = 0
    flash_count: int = 3
    flash_interval_ms: float = 50.0
    settle_delay_ms: float = 100.0


GameOverListener = Callable[["FallingBlocksGame"], None]


class FallingBlocksGame:
    """Simulation controller: owns the board, the falling piece and the score.

    Time is pushed in from outside through `update(dt_ms)`. Gravity moves the
    piece one row each time the accumulated time exceeds the drop interval; a
    piece that cannot move down is locked into the board. Full rows go through
    the clear animator before they are removed, and no new piece spawns until
    the clear has settled. Locking a piece whose anchor is still on the spawn
    row ends the game.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        high_scores: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.high_scores = high_scores if high_scores is not None else InMemoryHighScoreStore()
        self.high_score = self.high_scores.load()
        self.rng = random.Random(self.config.random_seed)
        self.factory = PieceFactory(self.config.cols, self.rng, spawn_y=self.config.spawn_y)
        self.board = Board(self.config.rows, self.config.cols)
        self.animator = ClearAnimator(
            flash_count=self.config.flash_count,
            flash_interval_ms=self.config.flash_interval_ms,
            settle_delay_ms=self.config.settle_delay_ms,
        )
        self.drop_interval_ms = 0.0
        self.speed = 0.0
        self.set_drop_interval(self.config.drop_interval_ms)
        self.score = 0
        self.lines_cleared_total = 0
        self.drop_counter = 0.0
        self.state = GameState.RUNNING
        self.current_piece: Optional[Piece] = None
        self._game_over_listeners: List[GameOverListener] = []
        self.reset()

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def clearing(self) -> bool:
        return self.animator.active

    @property
    def clearing_rows(self) -> Tuple[int, ...]:
        return self.animator.rows

    @property
    def highlight(self) -> Optional[int]:
        return self.animator.highlight

    def add_game_over_listener(self, listener: GameOverListener) -> None:
        self._game_over_listeners.append(listener)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.factory.seed(seed)
        self.animator.cancel()
        self.board.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.drop_counter = 0.0
        self.state = GameState.RUNNING
        self._spawn_piece()
        logger.info("New game started")

    # Drop interval

    def set_drop_interval(self, interval_ms: float) -> None:
        if not math.isfinite(interval_ms) or interval_ms <= 0:
            raise ValueError(f"drop interval must be a positive finite number, got {interval_ms}")
        self.drop_interval_ms = float(interval_ms)
        self.speed = 1000.0 / self.drop_interval_ms

    def set_difficulty(self, name: str) -> None:
        self.set_drop_interval(interval_for_difficulty(name))
        self.speed = DIFFICULTY_SPEEDS[name]
        logger.debug(f"Difficulty set to {name} ({self.drop_interval_ms:.0f}ms)")

    def set_speed(self, speed: float) -> None:
        self.set_drop_interval(interval_for_speed(speed))
        self.speed = clamp_speed(speed)

    # State machine

    def pause(self) -> None:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED

    def resume(self) -> None:
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING

    def toggle_pause(self) -> None:
        if self.state is GameState.PAUSED:
            self.resume()
        else:
            self.pause()

    def update(self, dt_ms: float) -> None:
        """Advance the simulation by `dt_ms` milliseconds of running time."""
        if self.state is not GameState.RUNNING:
            return
        if self.animator.active:
            rows = self.animator.advance(dt_ms)
            if rows:
                self._commit_clear(rows)
                self._spawn_piece()
            return
        self.drop_counter += dt_ms
        if self.drop_counter > self.drop_interval_ms:
            self.drop_counter = 0.0
            self._apply_gravity()

    def handle(self, action: Action) -> bool:
        """Apply a discrete input event immediately. Returns whether the piece changed."""
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        piece = self.current_piece
        if action == Action.LEFT:
            return piece.move(self.board, -1, 0)
        if action == Action.RIGHT:
            return piece.move(self.board, 1, 0)
        if action == Action.SOFT_DROP:
            moved = piece.move(self.board, 0, 1)
            if moved:
                self.drop_counter = 0.0
            return moved
        if action == Action.ROTATE:
            return piece.rotate(self.board)
        return False

    def step(self, action: Action) -> Tuple[np.ndarray, bool, dict]:
        """One discrete step: apply `action`, drop once and settle any clear at once."""
        if self.state is GameState.RUNNING:
            self.handle(action)
            self.drop_counter = 0.0
            self._apply_gravity()
            if self.animator.active:
                self._commit_clear(self.animator.finish())
                self._spawn_piece()
        return self.get_state(), self.game_over, self.get_info()

    # Internals

    def _spawn_piece(self) -> None:
        self.current_piece = self.factory.next_piece()
        logger.debug(f"Spawned {self.current_piece.kind.name} at x={self.current_piece.x}")

    def _apply_gravity(self) -> None:
        if self.current_piece is None:
            return
        if not self.current_piece.move(self.board, 0, 1):
            self._lock_piece()

    def _lock_piece(self) -> None:
        piece = self.current_piece
        assert piece is not None
        full_rows = self.board.lock(piece)
        self.current_piece = None
        logger.debug(f"Locked {piece.kind.name} at ({piece.x}, {piece.y}), full rows: {full_rows}")
        if piece.y == self.config.spawn_y:
            if full_rows:
                self._commit_clear(full_rows)
            self._end_game()
            return
        if full_rows:
            self.animator.start(full_rows)
        else:
            self._spawn_piece()

    def _commit_clear(self, rows: Sequence[int]) -> None:
        self.board.remove_rows(rows)
        cleared = len(rows)
        self.score += self.rules.score_for_lines(cleared)
        self.lines_cleared_total += cleared
        logger.debug(f"Cleared rows {list(rows)}, score={self.score}, lines={self.lines_cleared_total}")

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        logger.info(f"Game over: score={self.score}, lines={self.lines_cleared_total}")
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info(f"New high score {self.score}")
            try:
                self.high_scores.save(self.score)
            except OSError as e:
                logger.warning(f"Could not save high score {self.score}: {e}")
        for listener in self._game_over_listeners:
            listener(self)

    # Observation

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board; negative marks the falling piece
        state = self.board.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.board.is_inside(x, y):
                    state[y, x] = -self.current_piece.token
        return state

    def get_info(self) -> Dict[str, int]:
        return {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "high_score": self.high_score,
        }
