"""Unit tests for cron expression parsing."""
from __future__ import annotations

from datetime import date

import pytest
from hypothesis import given

from mp_jobs.application.cron import CronSchedule, parse
from mp_jobs.kernel.errors import InvalidScheduleExpression
from mp_jobs.testing.strategies import cron_expression_strategy


# ---------------------------------------------------------------------------
# Field syntax
# ---------------------------------------------------------------------------


class TestParseFields:
    def test_five_fields_default_seconds_to_zero(self) -> None:
        schedule = parse("30 9 * * *")
        assert schedule.seconds == frozenset({0})
        assert schedule.minutes == frozenset({30})
        assert schedule.hours == frozenset({9})
        assert schedule.days_of_month == frozenset(range(1, 32))
        assert schedule.months == frozenset(range(1, 13))
        assert schedule.days_of_week == frozenset(range(7))

    def test_six_fields_with_question_mark(self) -> None:
        schedule = parse("0 0 12 * * ?")
        assert schedule.seconds == frozenset({0})
        assert schedule.minutes == frozenset({0})
        assert schedule.hours == frozenset({12})
        assert schedule.days_of_week == frozenset(range(7))
        assert schedule.day_of_week_restricted is False

    def test_lists(self) -> None:
        assert parse("1,15,30 * * * *").minutes == frozenset({1, 15, 30})

    def test_ranges(self) -> None:
        assert parse("0 9-17 * * *").hours == frozenset(range(9, 18))

    def test_star_step(self) -> None:
        assert parse("*/15 * * * *").minutes == frozenset({0, 15, 30, 45})

    def test_range_step(self) -> None:
        assert parse("0-30/10 * * * *").minutes == frozenset({0, 10, 20, 30})

    def test_value_step_runs_to_field_maximum(self) -> None:
        assert parse("5/20 * * * *").minutes == frozenset({5, 25, 45})

    def test_month_and_day_names(self) -> None:
        schedule = parse("0 9 * JAN-MAR MON-FRI")
        assert schedule.months == frozenset({1, 2, 3})
        assert schedule.days_of_week == frozenset({1, 2, 3, 4, 5})

    def test_names_are_case_insensitive(self) -> None:
        assert parse("0 9 * dec sun").days_of_week == frozenset({0})

    def test_sunday_is_zero(self) -> None:
        assert parse("0 0 * * 0").days_of_week == frozenset({0})

    def test_surrounding_whitespace_is_ignored(self) -> None:
        schedule = parse("  0 12 * * *  ")
        assert schedule.expression == "0 12 * * *"
        assert str(schedule) == "0 12 * * *"


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------


class TestAliases:
    @pytest.mark.parametrize(
        ("alias", "expected"),
        [
            ("@yearly", "0 0 1 1 *"),
            ("@annually", "0 0 1 1 *"),
            ("@monthly", "0 0 1 * *"),
            ("@weekly", "0 0 * * 0"),
            ("@daily", "0 0 * * *"),
            ("@midnight", "0 0 * * *"),
            ("@HOURLY", "0 * * * *"),
        ],
    )
    def test_alias_expands(self, alias: str, expected: str) -> None:
        aliased, plain = parse(alias), parse(expected)
        assert aliased.expression == alias
        assert (aliased.minutes, aliased.hours, aliased.days_of_month, aliased.months, aliased.days_of_week) == (
            plain.minutes,
            plain.hours,
            plain.days_of_month,
            plain.months,
            plain.days_of_week,
        )

    def test_unknown_alias(self) -> None:
        with pytest.raises(InvalidScheduleExpression, match="unrecognized alias"):
            parse("@fortnightly")


# ---------------------------------------------------------------------------
# Day-field combination
# ---------------------------------------------------------------------------


class TestDayMatching:
    def test_both_day_fields_restricted_match_either(self) -> None:
        schedule = parse("0 0 13 * 5")
        assert schedule.day_of_month_restricted and schedule.day_of_week_restricted
        assert schedule.matches_day(date(2026, 1, 13))  # Tuesday the 13th
        assert schedule.matches_day(date(2026, 1, 16))  # Friday the 16th
        assert not schedule.matches_day(date(2026, 1, 14))

    def test_single_restricted_day_field_requires_both(self) -> None:
        schedule = parse("0 0 * * 1")
        assert not schedule.day_of_month_restricted
        assert schedule.matches_day(date(2026, 1, 5))
        assert not schedule.matches_day(date(2026, 1, 6))

    def test_star_step_counts_as_unrestricted(self) -> None:
        schedule = parse("0 0 */2 * 1")
        assert schedule.day_of_month_restricted is False
        assert schedule.day_of_week_restricted is True
        assert schedule.matches_day(date(2026, 1, 5))  # odd Monday
        assert not schedule.matches_day(date(2026, 1, 12))  # even Monday


# ---------------------------------------------------------------------------
# Rejected expressions
# ---------------------------------------------------------------------------


class TestInvalidExpressions:
    @pytest.mark.parametrize(
        "expression",
        [
            "",
            "* * * *",
            "* * * * * * *",
            "a * * * *",
            "1,,2 * * * *",
            "*/0 * * * *",
            "5-1 * * * *",
            "1-2-3 * * * *",
            "? * * * *",
            "0 0 ?/2 * *",
            "٣ * * * *",
        ],
    )
    def test_rejected(self, expression: str) -> None:
        with pytest.raises(InvalidScheduleExpression) as excinfo:
            parse(expression)
        assert excinfo.value.expression == expression

    @pytest.mark.parametrize(
        ("expression", "field"),
        [
            ("60 * * * *", "minute"),
            ("0 24 * * *", "hour"),
            ("0 0 0 * *", "day_of_month"),
            ("0 0 32 * *", "day_of_month"),
            ("0 0 * 13 *", "month"),
            ("0 0 * * 7", "day_of_week"),
            ("60 0 0 * * *", "second"),
        ],
    )
    def test_out_of_range_names_the_field(self, expression: str, field: str) -> None:
        with pytest.raises(InvalidScheduleExpression) as excinfo:
            parse(expression)
        assert excinfo.value.field == field

    def test_non_string(self) -> None:
        with pytest.raises(InvalidScheduleExpression):
            parse(42)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestParseProperties:
    @given(cron_expression_strategy())
    def test_generated_expressions_parse_within_ranges(self, expression: str) -> None:
        schedule = parse(expression)
        assert isinstance(schedule, CronSchedule)
        assert schedule.seconds and schedule.seconds <= frozenset(range(60))
        assert schedule.minutes and schedule.minutes <= frozenset(range(60))
        assert schedule.hours and schedule.hours <= frozenset(range(24))
        assert schedule.days_of_month and schedule.days_of_month <= frozenset(range(1, 32))
        assert schedule.months and schedule.months <= frozenset(range(1, 13))
        assert schedule.days_of_week and schedule.days_of_week <= frozenset(range(7))
