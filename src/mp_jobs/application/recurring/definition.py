"""Recurring – RecurringJobDefinition value object."""
from __future__ import annotations

import dataclasses
from datetime import datetime, tzinfo
from typing import Any

from mp_jobs.application.cron import DEFAULT_LOOKAHEAD_YEARS, CronSchedule, next_occurrence, parse
from mp_jobs.application.jobs import JobDefinition
from mp_jobs.kernel.errors import BaseError, SerializationError
from mp_jobs.kernel.time import TimeValue, resolve_zone, zone_id


@dataclasses.dataclass(frozen=True)
class RecurringJobDefinition:
    """A job definition re-triggered on every occurrence of a cron schedule."""

    id: str
    job: JobDefinition
    schedule: CronSchedule
    zone: tzinfo

    @property
    def cron(self) -> str:
        return self.schedule.expression

    @property
    def zone_id(self) -> str:
        return zone_id(self.zone)

    def next_run(self, after: TimeValue, *, lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS) -> datetime:
        """Next UTC instant, strictly after *after*, at which the job is due."""
        return next_occurrence(self.schedule, after, self.zone, lookahead_years=lookahead_years)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "job": self.job.to_dict(),
            "cron": self.cron,
            "zone": self.zone_id,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RecurringJobDefinition":
        try:
            return cls(
                id=payload["id"],
                job=JobDefinition.from_dict(payload["job"]),
                schedule=parse(payload["cron"]),
                zone=resolve_zone(payload["zone"]),
            )
        except SerializationError:
            raise
        except (KeyError, TypeError, BaseError) as exc:
            raise SerializationError(
                f"Malformed recurring job payload: {exc}",
                payload_type="recurring_job",
                cause=exc,
            ) from exc


__all__ = ["RecurringJobDefinition"]
