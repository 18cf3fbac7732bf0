"""Kernel time – normalization of point-in-time values to UTC instants.

Every time value that enters the scheduler goes through :func:`to_utc_instant`
so that storage and comparison only ever deal with aware UTC datetimes.

Accepted representations:

* aware :class:`~datetime.datetime` carrying a :class:`~zoneinfo.ZoneInfo`
  (a *zoned* time) or a fixed :class:`~datetime.timezone` (an *offset* time);
* naive :class:`~datetime.datetime` (a *local* time), interpreted in a zone
  hint that defaults to the system zone;
* ``int`` / ``float`` POSIX timestamps (a raw instant).

The module also exposes the wall-clock helpers the cron engine uses to map
local calendar readings back to instants across DST transitions.
"""
from __future__ import annotations

import functools
import io
import os
import re
import struct
from datetime import UTC, datetime, timedelta, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

from mp_jobs.kernel.errors import ValidationError

TimeValue = Union[datetime, int, float]
ZoneHint = Union[str, tzinfo, None]

# std name (alphabetic or <quoted>) followed by a mandatory offset
_POSIX_RULE = re.compile(r"^(?:[A-Za-z]{3,}|<[A-Za-z0-9+\-]+>)[+-]?\d")
_UTC_OFFSET = re.compile(r"^UTC([+-])(\d{2}):(\d{2})(?::(\d{2}))?$")


@functools.lru_cache(maxsize=64)
def _rule_zone(rule: str) -> ZoneInfo:
    """Zone whose every transition follows the POSIX TZ *rule*.

    The rule becomes the footer of an otherwise empty TZif v2 payload, which
    :mod:`zoneinfo` applies for all instants. Cached so one rule maps to one
    zone object.
    """
    counts = struct.pack(">6l", 0, 0, 0, 0, 1, 4)
    block = struct.pack(">lbb", 0, 0, 0) + b"LMT\x00"
    header = b"TZif2" + b"\x00" * 15 + counts
    payload = header + block + header + block + b"\n" + rule.encode("ascii") + b"\n"
    return ZoneInfo.from_file(io.BytesIO(payload), key=rule)


@functools.lru_cache(maxsize=16)
def _file_zone(path: str) -> ZoneInfo:
    with open(path, "rb") as fh:
        return ZoneInfo.from_file(fh, key=path)


def _zone_from_key(key: str) -> tzinfo | None:
    if key.upper() == "UTC":
        return UTC
    offset = _UTC_OFFSET.match(key)
    if offset:
        sign, hours, minutes, seconds = offset.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes), seconds=int(seconds or 0))
        try:
            return timezone(-delta if sign == "-" else delta)
        except ValueError:
            return None
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, OSError, ValueError):
        pass
    if os.path.isabs(key) and os.path.isfile(key):
        try:
            return _file_zone(key)
        except (OSError, ValueError):
            return None
    if _POSIX_RULE.match(key):
        try:
            return _rule_zone(key)
        except (UnicodeEncodeError, ValueError):
            return None
    return None


def local_zone() -> tzinfo:
    """Return the system's configured local zone, DST rules included.

    ``TZ`` wins when set: an IANA key, a path to a TZif file or a POSIX rule
    such as ``CET-1CEST,M3.5.0,M10.5.0/3``. A ``TZ`` that is none of these
    reads as UTC, like the C library does. Without ``TZ`` the zone comes from
    the operating system configuration through :mod:`tzlocal`.
    """
    key = os.environ.get("TZ", "").lstrip(":")
    if key:
        zone = _zone_from_key(key)
        return zone if zone is not None else UTC
    return tzlocal.get_localzone()


def resolve_zone(zone: ZoneHint = None) -> tzinfo:
    """Turn a zone hint into a ``tzinfo``.

    Strings may be ``UTC``, an IANA key, a ``UTC+HH:MM`` fixed offset, a TZif
    file path or a POSIX TZ rule; every :func:`zone_id` result resolves back
    to an equivalent zone.
    """
    if zone is None or zone == "":
        return local_zone()
    if isinstance(zone, tzinfo):
        return zone
    if isinstance(zone, str):
        resolved = _zone_from_key(zone)
        if resolved is None:
            raise ValidationError(f"Unknown time zone {zone!r}")
        return resolved
    raise ValidationError(f"Unsupported zone hint of type {type(zone).__name__}")


def _offset_id(offset: timedelta) -> str:
    sign = "-" if offset < timedelta(0) else "+"
    seconds = int(abs(offset).total_seconds())
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"UTC{sign}{hours:02d}:{minutes:02d}"
    return f"{text}:{seconds:02d}" if seconds else text


def zone_id(zone: tzinfo) -> str:
    """Stable textual identifier of *zone* that :func:`resolve_zone` accepts.

    Raises:
        ValidationError: *zone* has DST rules but no portable identifier.
    """
    if zone is UTC:
        return "UTC"
    if isinstance(zone, ZoneInfo):
        return zone.key
    if isinstance(zone, timezone):
        return _offset_id(zone.utcoffset(None))
    key = getattr(zone, "key", None) or getattr(zone, "zone", None)
    if isinstance(key, str) and _zone_from_key(key) is not None:
        return key
    fixed = zone.utcoffset(None)
    if fixed is not None:
        return _offset_id(fixed)
    raise ValidationError(f"Time zone {zone!r} has no portable identifier")


def to_utc_instant(value: TimeValue | None, zone: ZoneHint = None) -> datetime:
    """Normalize *value* to an aware datetime in UTC.

    Zoned and offset values convert without loss. A naive value is read as
    wall-clock time in *zone*; when that reading is ambiguous (fall-back) the
    earlier instant is chosen, and when it falls in a spring-forward gap it is
    shifted forward by the length of the gap.

    Raises:
        ValidationError: *value* is ``None`` or of an unsupported type.
    """
    if value is None:
        raise ValidationError("A time value is required")
    if isinstance(value, bool):
        raise ValidationError("Booleans are not time values")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, UTC)
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return value.astimezone(UTC)
        return value.replace(tzinfo=resolve_zone(zone), fold=0).astimezone(UTC)
    raise ValidationError(f"Unsupported time value of type {type(value).__name__}")


def to_local(instant: datetime, zone: tzinfo) -> datetime:
    """Wall-clock reading of *instant* in *zone*, as a naive datetime."""
    return instant.astimezone(zone).replace(tzinfo=None, fold=0)


def wall_clock_instants(local: datetime, zone: tzinfo) -> tuple[datetime, ...]:
    """All UTC instants whose wall-clock reading in *zone* is *local*.

    Returns one instant normally, two (earliest first) inside a fall-back
    overlap and none inside a spring-forward gap.
    """
    found: list[datetime] = []
    for fold in (0, 1):
        instant = local.replace(tzinfo=zone, fold=fold).astimezone(UTC)
        if to_local(instant, zone) == local and instant not in found:
            found.append(instant)
    return tuple(sorted(found))


def first_instant_after_gap(local: datetime, zone: tzinfo) -> datetime:
    """First valid UTC instant once the spring-forward gap holding *local* ends."""
    bounds = sorted(
        local.replace(tzinfo=zone, fold=fold).astimezone(UTC) for fold in (0, 1)
    )
    lo, hi = int(bounds[0].timestamp()), int(bounds[1].timestamp())
    after_offset = datetime.fromtimestamp(hi, zone).utcoffset()
    # lo still carries the pre-transition offset, hi the post-transition one
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if datetime.fromtimestamp(mid, zone).utcoffset() == after_offset:
            hi = mid
        else:
            lo = mid
    return datetime.fromtimestamp(hi, UTC)


__all__ = [
    "TimeValue",
    "ZoneHint",
    "first_instant_after_gap",
    "local_zone",
    "resolve_zone",
    "to_local",
    "to_utc_instant",
    "wall_clock_instants",
    "zone_id",
]
