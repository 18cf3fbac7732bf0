"""APScheduler adapter – trigger driven by the mp-jobs cron engine."""
from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Any

from apscheduler.triggers.base import BaseTrigger

from mp_jobs.application.cron import DEFAULT_LOOKAHEAD_YEARS, CronSchedule, next_occurrence, parse
from mp_jobs.kernel.errors import ScheduleUnreachable
from mp_jobs.kernel.time import resolve_zone, zone_id
from mp_jobs.observability.logging import get_logger

__all__ = ["CronScheduleTrigger"]

log = get_logger(__name__)


class CronScheduleTrigger(BaseTrigger):
    """APScheduler 3 trigger that fires on a parsed :class:`CronSchedule`.

    Using this instead of APScheduler's own ``CronTrigger`` keeps the
    day-of-week numbering, day-field OR rule and DST handling identical to
    what the registry validated at registration time.

    Pickles as its expression and zone id, so persistent job stores can
    hold it whatever kind of zone it runs in.
    """

    def __init__(
        self,
        schedule: CronSchedule,
        zone: tzinfo,
        *,
        lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
    ) -> None:
        self.schedule = schedule
        self.zone = zone
        self.lookahead_years = lookahead_years

    def get_next_fire_time(self, previous_fire_time: datetime | None, now: datetime) -> datetime | None:
        after = previous_fire_time if previous_fire_time is not None else now - timedelta(microseconds=1)
        try:
            return next_occurrence(self.schedule, after, self.zone, lookahead_years=self.lookahead_years)
        except ScheduleUnreachable:
            log.warning("cron_trigger.exhausted", cron=self.schedule.expression, zone=zone_id(self.zone))
            return None

    def __getstate__(self) -> dict[str, Any]:
        return {
            "version": 1,
            "expression": self.schedule.expression,
            "zone": zone_id(self.zone),
            "lookahead_years": self.lookahead_years,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        if state.get("version", 1) > 1:
            raise ValueError(
                f"Got serialized data for version {state['version']} of {type(self).__name__}, "
                "but only version 1 can be handled"
            )
        self.schedule = parse(state["expression"])
        self.zone = resolve_zone(state["zone"])
        self.lookahead_years = state["lookahead_years"]

    def __str__(self) -> str:
        return f"cron[{self.schedule.expression}, zone={zone_id(self.zone)}]"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ({self.schedule.expression!r}, zone={zone_id(self.zone)!r})>"
