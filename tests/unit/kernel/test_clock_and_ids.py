"""Unit tests for kernel clocks and job identifiers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from mp_jobs.kernel.errors import ValidationError
from mp_jobs.kernel.time import Clock, FrozenClock, SystemClock, utc_now
from mp_jobs.kernel.types import JobId


# ---------------------------------------------------------------------------
# Clocks
# ---------------------------------------------------------------------------


class TestSystemClock:
    def test_now_is_utc_aware(self) -> None:
        now = SystemClock().now()
        assert now.tzinfo is UTC

    def test_utc_now_close_to_clock(self) -> None:
        assert abs(utc_now() - SystemClock().now()) < timedelta(seconds=5)


class TestFrozenClock:
    def test_fixed_instant(self) -> None:
        fixed = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == clock.now()

    def test_normalizes_to_utc(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2))))
        assert clock.now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        assert clock.now().tzinfo is UTC

    def test_rejects_naive(self) -> None:
        with pytest.raises(ValidationError, match="timezone-aware"):
            FrozenClock(datetime(2026, 1, 1))

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.advance(hours=1, minutes=30)
        assert clock.now() == datetime(2026, 1, 1, 1, 30, tzinfo=UTC)

    def test_set(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.set(datetime(2030, 5, 5, tzinfo=UTC))
        assert clock.now().year == 2030
        with pytest.raises(ValidationError):
            clock.set(datetime(2030, 5, 5))

    def test_satisfies_clock_protocol(self) -> None:
        clock: Clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        assert clock.now().year == 2026


# ---------------------------------------------------------------------------
# JobId
# ---------------------------------------------------------------------------


class TestJobId:
    def test_generate_is_unique(self) -> None:
        assert len({JobId.generate() for _ in range(100)}) == 100

    def test_str(self) -> None:
        assert str(JobId("abc")) == "abc"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_rejects_blank(self, value: str) -> None:
        with pytest.raises(ValidationError):
            JobId(value)

    def test_value_equality(self) -> None:
        assert JobId("x") == JobId("x")
