"""Cron – expression parsing into an immutable :class:`CronSchedule`.

Supports standard five-field syntax plus an optional leading seconds field::

    minute hour day_of_month month day_of_week
    second minute hour day_of_month month day_of_week

Each field accepts ``*``, literals, ranges ``a-b``, lists ``a,b,c`` and steps
``*/n``, ``a/n`` and ``a-b/n``. ``?`` is accepted in the two day fields and
means "no specific value". Months and weekdays may be written by name
(``JAN``, ``MON``); weekday ``0`` is Sunday.

Examples:

- ``"0 * * * *"``: every hour
- ``"*/15 9-17 * * MON-FRI"``: every quarter hour during office hours
- ``"0 0 12 * * ?"``: every day at noon (six-field form)
- ``"@daily"``: every day at midnight
"""
from __future__ import annotations

import dataclasses
from datetime import date

from mp_jobs.kernel.errors import InvalidScheduleExpression

_ALIASES: dict[str, str] = {
    "@yearly": "0 0 1 1 *",
    "@annually": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@midnight": "0 0 * * *",
    "@hourly": "0 * * * *",
}

_MONTH_NAMES: dict[str, int] = {
    name: number
    for number, name in enumerate(
        ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"),
        start=1,
    )
}
_DAY_NAMES: dict[str, int] = {
    name: number for number, name in enumerate(("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"))
}


@dataclasses.dataclass(frozen=True)
class _FieldSpec:
    name: str
    low: int
    high: int
    names: dict[str, int] = dataclasses.field(default_factory=dict)
    allows_question: bool = False


_FIELDS: tuple[_FieldSpec, ...] = (
    _FieldSpec("second", 0, 59),
    _FieldSpec("minute", 0, 59),
    _FieldSpec("hour", 0, 23),
    _FieldSpec("day_of_month", 1, 31, allows_question=True),
    _FieldSpec("month", 1, 12, names=_MONTH_NAMES),
    _FieldSpec("day_of_week", 0, 6, names=_DAY_NAMES, allows_question=True),
)


@dataclasses.dataclass(frozen=True)
class CronSchedule:
    """Parsed cron expression: the allowed values of every calendar field.

    Every set is non-empty and within its field's range. The two
    ``*_restricted`` flags record whether a day field was written as
    something other than ``*``/``?``; when both are restricted a day matches
    if *either* field matches (classic cron semantics).
    """

    expression: str
    seconds: frozenset[int]
    minutes: frozenset[int]
    hours: frozenset[int]
    days_of_month: frozenset[int]
    months: frozenset[int]
    days_of_week: frozenset[int]
    day_of_month_restricted: bool = False
    day_of_week_restricted: bool = False

    def matches_day(self, day: date) -> bool:
        dom_ok = day.day in self.days_of_month
        dow_ok = (day.weekday() + 1) % 7 in self.days_of_week
        if self.day_of_month_restricted and self.day_of_week_restricted:
            return dom_ok or dow_ok
        return dom_ok and dow_ok

    def __str__(self) -> str:
        return self.expression


def parse(expression: str) -> CronSchedule:
    """Parse *expression* into a :class:`CronSchedule`.

    Raises:
        InvalidScheduleExpression: wrong field count, out-of-range value,
            malformed element or unknown ``@alias``.
    """
    if not isinstance(expression, str):
        raise InvalidScheduleExpression(repr(expression), "expression must be a string")
    text = expression.strip()
    if text.startswith("@"):
        expanded = _ALIASES.get(text.lower())
        if expanded is None:
            raise InvalidScheduleExpression(expression, f"unrecognized alias {text!r}")
        fields = expanded.split()
    else:
        fields = text.split()

    if len(fields) == 5:
        fields = ["0", *fields]
    elif len(fields) != 6:
        raise InvalidScheduleExpression(expression, f"expected 5 or 6 fields, got {len(fields)}")

    seconds, minutes, hours, dom, months, dow = (
        _parse_field(expression, spec, raw) for spec, raw in zip(_FIELDS, fields)
    )
    return CronSchedule(
        expression=text,
        seconds=seconds,
        minutes=minutes,
        hours=hours,
        days_of_month=dom,
        months=months,
        days_of_week=dow,
        day_of_month_restricted=not fields[3].startswith(("*", "?")),
        day_of_week_restricted=not fields[5].startswith(("*", "?")),
    )


def _parse_field(expression: str, spec: _FieldSpec, raw: str) -> frozenset[int]:
    values: set[int] = set()
    for part in raw.split(","):
        if not part:
            raise InvalidScheduleExpression(expression, "empty list element", field=spec.name)
        values.update(_parse_part(expression, spec, part))
    return frozenset(values)


def _parse_part(expression: str, spec: _FieldSpec, part: str) -> range:
    base, has_step, step_text = part.partition("/")
    step = 1
    if has_step:
        step = _parse_number(expression, spec, step_text)
        if step < 1:
            raise InvalidScheduleExpression(expression, f"step must be positive, got {step_text!r}", field=spec.name)

    if base == "?":
        if not spec.allows_question or has_step:
            raise InvalidScheduleExpression(expression, "'?' is only allowed alone in day fields", field=spec.name)
        return range(spec.low, spec.high + 1)
    if base == "*":
        return range(spec.low, spec.high + 1, step)
    if "-" in base:
        first, _, last = base.partition("-")
        start, end = _parse_value(expression, spec, first), _parse_value(expression, spec, last)
        if start > end:
            raise InvalidScheduleExpression(expression, f"descending range {base!r}", field=spec.name)
        return range(start, end + 1, step)
    start = _parse_value(expression, spec, base)
    return range(start, (spec.high if has_step else start) + 1, step)


def _parse_value(expression: str, spec: _FieldSpec, text: str) -> int:
    named = spec.names.get(text.upper())
    value = named if named is not None else _parse_number(expression, spec, text)
    if not spec.low <= value <= spec.high:
        raise InvalidScheduleExpression(
            expression,
            f"{spec.name} value {value} outside {spec.low}-{spec.high}",
            field=spec.name,
        )
    return value


def _parse_number(expression: str, spec: _FieldSpec, text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise InvalidScheduleExpression(expression, f"unrecognized value {text!r}", field=spec.name)
    return int(text)


__all__ = ["CronSchedule", "parse"]
