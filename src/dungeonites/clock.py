from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    """Source of wall-clock timestamps in epoch milliseconds."""

    def now_ms(self) -> int:  # pragma: no cover - protocol method
        ...


class SystemClock:
    """Clock backed by :func:`time.time`."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


@dataclass
class ManualClock:
    """
    Deterministic clock for tests. Time only moves when advanced explicitly.
    """

    current_ms: int = 0

    def now_ms(self) -> int:
        return self.current_ms

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self.current_ms += ms
        return self.current_ms
