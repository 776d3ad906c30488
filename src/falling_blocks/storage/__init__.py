"""High score persistence for Falling Blocks."""

from .highscore import (
    HighScoreStore,
    InMemoryHighScoreStore,
    JsonHighScoreStore,
    default_highscore_path,
)

__all__ = [
    "HighScoreStore",
    "InMemoryHighScoreStore",
    "JsonHighScoreStore",
    "default_highscore_path",
]
