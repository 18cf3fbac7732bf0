"""Cron – helpers that build common expressions."""
from __future__ import annotations

from mp_jobs.kernel.errors import ValidationError


def _check(name: str, value: int, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{name} must be an integer in {low}-{high}, got {value!r}")
    return value


class Cron:
    """Readable constructors for five-field cron expressions.

    Example::

        scheduler.schedule_recurringly(send_digest, Cron.daily(hour=7, minute=30))
    """

    @staticmethod
    def minutely() -> str:
        return "* * * * *"

    @staticmethod
    def every_minutes(interval: int) -> str:
        """Every *interval* minutes, aligned to the top of the hour."""
        return f"*/{_check('interval', interval, 1, 59)} * * * *"

    @staticmethod
    def hourly(minute: int = 0) -> str:
        return f"{_check('minute', minute, 0, 59)} * * * *"

    @staticmethod
    def daily(hour: int = 0, minute: int = 0) -> str:
        return f"{_check('minute', minute, 0, 59)} {_check('hour', hour, 0, 23)} * * *"

    @staticmethod
    def weekly(day_of_week: int = 1, hour: int = 0, minute: int = 0) -> str:
        """Once a week; *day_of_week* counts from Sunday = 0 (default Monday)."""
        return (
            f"{_check('minute', minute, 0, 59)} {_check('hour', hour, 0, 23)} "
            f"* * {_check('day_of_week', day_of_week, 0, 6)}"
        )

    @staticmethod
    def monthly(day: int = 1, hour: int = 0, minute: int = 0) -> str:
        return (
            f"{_check('minute', minute, 0, 59)} {_check('hour', hour, 0, 23)} "
            f"{_check('day', day, 1, 31)} * *"
        )

    @staticmethod
    def yearly(month: int = 1, day: int = 1, hour: int = 0, minute: int = 0) -> str:
        return (
            f"{_check('minute', minute, 0, 59)} {_check('hour', hour, 0, 23)} "
            f"{_check('day', day, 1, 31)} {_check('month', month, 1, 12)} *"
        )


__all__ = ["Cron"]
