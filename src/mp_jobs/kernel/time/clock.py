"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol

from mp_jobs.kernel.errors import ValidationError


class Clock(Protocol):
    """Port: source of the current instant, injectable for deterministic tests."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


def _require_aware(value: datetime) -> None:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError("FrozenClock requires a timezone-aware datetime")


class FrozenClock:
    """Test clock pinned to a fixed instant until advanced."""

    def __init__(self, fixed: datetime) -> None:
        _require_aware(fixed)
        self._fixed = fixed.astimezone(UTC)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)

    def set(self, instant: datetime) -> None:
        """Jump to *instant* (must be aware)."""
        _require_aware(instant)
        self._fixed = instant.astimezone(UTC)


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
