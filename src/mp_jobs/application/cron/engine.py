"""Cron – next-occurrence computation in an explicit time zone."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime, time, timedelta, tzinfo

from mp_jobs.application.cron.expression import CronSchedule
from mp_jobs.kernel.errors import ScheduleUnreachable
from mp_jobs.kernel.time import (
    TimeValue,
    ZoneHint,
    first_instant_after_gap,
    resolve_zone,
    to_local,
    to_utc_instant,
    wall_clock_instants,
)

DEFAULT_LOOKAHEAD_YEARS = 5


def next_occurrence(
    schedule: CronSchedule,
    after: TimeValue,
    zone: ZoneHint = None,
    *,
    lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
) -> datetime:
    """Return the first UTC instant strictly after *after* matching *schedule*.

    Matching happens on wall-clock fields in *zone* (system zone when
    omitted). A match that falls into a spring-forward gap fires at the first
    valid instant after the gap; a match inside a fall-back overlap fires at
    the earliest of its instants that is still after *after*.

    Raises:
        ScheduleUnreachable: no match within *lookahead_years* years.
    """
    tz = resolve_zone(zone)
    after_utc = to_utc_instant(after, tz)
    local = to_local(after_utc, tz).replace(microsecond=0) + timedelta(seconds=1)
    last_year = local.year + lookahead_years

    while True:
        candidate = _next_local_match(schedule, local, last_year)
        if candidate is None:
            raise ScheduleUnreachable(schedule.expression, lookahead_years)
        instant = _first_instant_after(candidate, tz, after_utc)
        if instant is not None:
            return instant
        local = candidate + timedelta(seconds=1)


def occurrences(
    schedule: CronSchedule,
    after: TimeValue,
    zone: ZoneHint = None,
    *,
    lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
) -> Iterator[datetime]:
    """Lazily yield successive occurrences of *schedule* after *after*."""
    tz = resolve_zone(zone)
    current = to_utc_instant(after, tz)
    while True:
        current = next_occurrence(schedule, current, tz, lookahead_years=lookahead_years)
        yield current


def _first_instant_after(local: datetime, zone: tzinfo, after: datetime) -> datetime | None:
    instants = wall_clock_instants(local, zone)
    if not instants:
        instants = (first_instant_after_gap(local, zone),)
    return next((instant for instant in instants if instant > after), None)


def _next_local_match(schedule: CronSchedule, start: datetime, last_year: int) -> datetime | None:
    """Advance *start* field by field to the first wall-clock time that matches.

    Each mismatching field moves to its next allowed value, resetting the
    smaller fields to their minimum; running past the last allowed value
    carries into the next larger field.
    """
    first_second = min(schedule.seconds)
    first_minute = min(schedule.minutes)
    t = start
    while t.year <= last_year:
        if t.month not in schedule.months:
            month = _next_allowed(schedule.months, t.month)
            if month is None:
                t = datetime(t.year + 1, min(schedule.months), 1)
            else:
                t = datetime(t.year, month, 1)
            continue
        if not schedule.matches_day(t.date()):
            t = _start_of_next_day(t)
            continue
        if t.hour not in schedule.hours:
            hour = _next_allowed(schedule.hours, t.hour)
            if hour is None:
                t = _start_of_next_day(t)
            else:
                t = t.replace(hour=hour, minute=first_minute, second=first_second)
            continue
        if t.minute not in schedule.minutes:
            minute = _next_allowed(schedule.minutes, t.minute)
            if minute is None:
                t = t.replace(minute=0, second=0) + timedelta(hours=1)
            else:
                t = t.replace(minute=minute, second=first_second)
            continue
        if t.second not in schedule.seconds:
            second = _next_allowed(schedule.seconds, t.second)
            if second is None:
                t = t.replace(second=0) + timedelta(minutes=1)
            else:
                t = t.replace(second=second)
            continue
        return t
    return None


def _next_allowed(allowed: Iterable[int], current: int) -> int | None:
    return min((value for value in allowed if value > current), default=None)


def _start_of_next_day(t: datetime) -> datetime:
    return datetime.combine(t.date() + timedelta(days=1), time())


__all__ = ["DEFAULT_LOOKAHEAD_YEARS", "next_occurrence", "occurrences"]
