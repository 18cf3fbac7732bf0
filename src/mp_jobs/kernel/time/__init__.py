"""Kernel time – Clock port and UTC normalization."""
from mp_jobs.kernel.time.clock import Clock, FrozenClock, SystemClock, utc_now
from mp_jobs.kernel.time.normalizer import (
    TimeValue,
    ZoneHint,
    first_instant_after_gap,
    local_zone,
    resolve_zone,
    to_local,
    to_utc_instant,
    wall_clock_instants,
    zone_id,
)

__all__ = [
    "Clock",
    "FrozenClock",
    "SystemClock",
    "TimeValue",
    "ZoneHint",
    "first_instant_after_gap",
    "local_zone",
    "resolve_zone",
    "to_local",
    "to_utc_instant",
    "utc_now",
    "wall_clock_instants",
    "zone_id",
]
