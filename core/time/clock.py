"""
ERP Core Time — Clock
=====================
Services never call datetime.now(). The request layer reads the injected
Clock once and passes the timestamp down explicitly, so document
numbering and receive timestamps are reproducible in tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock returning a fixed timestamp.

        clock = FixedClock(datetime(2026, 4, 1, tzinfo=timezone.utc))
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta) -> None:
        """Move the clock forward, e.g. advance(days=1)."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)
