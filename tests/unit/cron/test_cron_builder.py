"""Unit tests for the Cron expression builder."""
from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mp_jobs.application.cron import Cron, next_occurrence, parse
from mp_jobs.kernel.errors import ValidationError


class TestCronBuilder:
    def test_minutely(self) -> None:
        assert Cron.minutely() == "* * * * *"

    def test_every_minutes(self) -> None:
        assert Cron.every_minutes(5) == "*/5 * * * *"

    def test_hourly(self) -> None:
        assert Cron.hourly() == "0 * * * *"
        assert Cron.hourly(minute=45) == "45 * * * *"

    def test_daily(self) -> None:
        assert Cron.daily(hour=7, minute=30) == "30 7 * * *"

    def test_weekly_defaults_to_monday_midnight(self) -> None:
        assert Cron.weekly() == "0 0 * * 1"

    def test_monthly(self) -> None:
        assert Cron.monthly(day=15, hour=6) == "0 6 15 * *"

    def test_yearly(self) -> None:
        assert Cron.yearly(month=12, day=25, hour=8) == "0 8 25 12 *"

    def test_output_parses_and_resolves(self) -> None:
        schedule = parse(Cron.weekly(day_of_week=0, hour=9))
        assert next_occurrence(schedule, datetime(2026, 1, 1, tzinfo=UTC), "UTC") == datetime(
            2026, 1, 4, 9, tzinfo=UTC
        )


class TestCronBuilderValidation:
    @pytest.mark.parametrize(
        "build",
        [
            lambda: Cron.every_minutes(0),
            lambda: Cron.every_minutes(60),
            lambda: Cron.hourly(minute=60),
            lambda: Cron.daily(hour=24),
            lambda: Cron.weekly(day_of_week=7),
            lambda: Cron.monthly(day=0),
            lambda: Cron.yearly(month=13),
            lambda: Cron.daily(hour=True),
            lambda: Cron.daily(hour="7"),
        ],
    )
    def test_out_of_range_arguments(self, build) -> None:
        with pytest.raises(ValidationError):
            build()
