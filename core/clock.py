"""
Time sources for query construction.

The builder asks a Clock for the creation timestamp instead of reading the
wall clock directly, so construction can be made deterministic in tests.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """
    Protocol for time source.

    Can be real time or frozen for deterministic testing.
    """
    def now_ms(self) -> int:
        """Milliseconds since the Unix epoch."""
        ...


class RealClock:
    """Wall-clock implementation."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FrozenClock:
    """
    Frozen clock for deterministic testing.

    Always returns the same time until moved.
    """

    def __init__(self, frozen_ms: int = 1_767_225_600_000) -> None:
        # default: 2026-01-01T00:00:00Z
        self._ms = frozen_ms

    def now_ms(self) -> int:
        return self._ms

    def advance(self, ms: int) -> None:
        self._ms += ms
