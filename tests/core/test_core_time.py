"""
Tests for core.time — injectable clocks.
"""

import pytest
from datetime import datetime, timezone, timedelta

from core.time.clock import FixedClock, SystemClock


class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2026, 4, 1, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2026, 1, 1))

    def test_advance(self):
        fixed = datetime(2026, 3, 31, 23, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(hours=2)
        assert clock.now_utc() == fixed + timedelta(hours=2)
