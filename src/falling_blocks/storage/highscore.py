from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


def default_highscore_path() -> Path:
    return Path.home() / ".falling_blocks" / "highscore.json"


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class InMemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, high_score: int = 0) -> None:
        self.high_score = int(high_score)

    def load(self) -> int:
        return self.high_score

    def save(self, score: int) -> None:
        self.high_score = int(score)


class JsonHighScoreStore:
    """High score persisted as `{"high_score": n}` in a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_highscore_path()

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = float(data.get("high_score", 0))
            if not math.isfinite(value):
                raise ValueError(f"high score {value} is not finite")
            return max(0, int(value))
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning(f"Ignoring unreadable high score file {self.path}: {e}")
            return 0

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": int(score)}, indent=2), encoding="utf-8")
        logger.debug(f"Saved high score {score} to {self.path}")
