from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


HIGHLIGHT_COLORS: Tuple[str, str] = ("#ff5555", "#ffaaaa")


class ClearPhase(Enum):
    FLASHING = "flashing"
    SETTLING = "settling"


@dataclass
class PendingClear:
    rows: Tuple[int, ...]
    phase: ClearPhase
    remaining_ms: float
    flashes_shown: int = 0


class ClearAnimator:
    """Delays the removal of full rows behind a short flashing phase.

    `start` records the rows found at lock time; `advance` is fed elapsed
    milliseconds by the controller and returns the rows once the flashes and
    the settle delay have run out. Flash state never touches the board.
    """

    def __init__(self, flash_count: int = 3, flash_interval_ms: float = 50.0, settle_delay_ms: float = 100.0) -> None:
        self.flash_count = flash_count
        self.flash_interval_ms = flash_interval_ms
        self.settle_delay_ms = settle_delay_ms
        self.pending: Optional[PendingClear] = None

    @property
    def active(self) -> bool:
        return self.pending is not None

    @property
    def rows(self) -> Tuple[int, ...]:
        return self.pending.rows if self.pending is not None else ()

    @property
    def highlight(self) -> Optional[int]:
        """Index into HIGHLIGHT_COLORS for the flashing rows, None before the first flash."""
        if self.pending is None or self.pending.flashes_shown == 0:
            return None
        return (self.pending.flashes_shown - 1) % 2

    def start(self, rows: Sequence[int]) -> None:
        if self.flash_count > 0:
            self.pending = PendingClear(tuple(rows), ClearPhase.FLASHING, self.flash_interval_ms)
        else:
            self.pending = PendingClear(tuple(rows), ClearPhase.SETTLING, self.settle_delay_ms)

    def cancel(self) -> None:
        self.pending = None

    def advance(self, dt_ms: float) -> Optional[Tuple[int, ...]]:
        pending = self.pending
        if pending is None:
            return None
        pending.remaining_ms -= dt_ms
        while pending.remaining_ms <= 0:
            if pending.phase is ClearPhase.FLASHING:
                pending.flashes_shown += 1
                if pending.flashes_shown >= self.flash_count:
                    pending.phase = ClearPhase.SETTLING
                    pending.remaining_ms += self.settle_delay_ms
                else:
                    pending.remaining_ms += self.flash_interval_ms
            else:
                self.pending = None
                return pending.rows
        return None

    def finish(self) -> Tuple[int, ...]:
        """Skip the remaining animation and hand back the rows."""
        rows = self.rows
        self.pending = None
        return rows
