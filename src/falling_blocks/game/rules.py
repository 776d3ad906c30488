from __future__ import annotations

import math
from dataclasses import dataclass


DIFFICULTY_INTERVALS = {
    "easy": 400.0,
    "medium": 200.0,
    "hard": 50.0,
}

# Speed slider positions matching each difficulty (1000 / v == interval)
DIFFICULTY_SPEEDS = {
    "easy": 2.5,
    "medium": 5.0,
    "hard": 20.0,
}

SPEED_MIN = 1.0
SPEED_MAX = 20.0


@dataclass
class ScoringRules:
    points_per_line: int = 10

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return self.points_per_line * lines


def interval_for_difficulty(name: str) -> float:
    try:
        return DIFFICULTY_INTERVALS[name]
    except KeyError:
        raise ValueError(f"unknown difficulty {name!r}, expected one of {sorted(DIFFICULTY_INTERVALS)}") from None


def clamp_speed(speed: float) -> float:
    if math.isnan(speed):
        raise ValueError("speed must be a number, got nan")
    return max(SPEED_MIN, min(SPEED_MAX, float(speed)))


def interval_for_speed(speed: float) -> float:
    """Drop interval in milliseconds for a slider speed, clamped to the slider range."""
    return 1000.0 / clamp_speed(speed)
