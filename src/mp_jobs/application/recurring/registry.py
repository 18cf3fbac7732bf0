"""Recurring – RecurringJobRegistry: idempotent named recurring jobs."""
from __future__ import annotations

import threading
from datetime import datetime
from typing import TYPE_CHECKING

from mp_jobs.application.cron import DEFAULT_LOOKAHEAD_YEARS, parse
from mp_jobs.application.jobs import JobDefinition
from mp_jobs.application.recurring.definition import RecurringJobDefinition
from mp_jobs.kernel.errors import ValidationError
from mp_jobs.kernel.time import Clock, SystemClock, TimeValue, ZoneHint, resolve_zone
from mp_jobs.observability.logging import bound_job_context, get_logger

if TYPE_CHECKING:
    from mp_jobs.application.scheduler.storage import JobStorage

log = get_logger(__name__)


def derive_recurring_id(job: JobDefinition) -> str:
    """Default recurring id: the job's target path plus its argument types.

    ``reports.jobs:send_digest(str)`` is the same for every call made from
    one call site, so re-registering without an explicit id replaces the
    earlier registration instead of adding another.
    """
    return job.signature


class RecurringJobRegistry:
    """Owns the mapping from recurring id to :class:`RecurringJobDefinition`.

    Upserts and deletes are serialized by one lock, and the optional storage
    sink is called inside it: a reader sees either the previous or the new
    definition for an id, and when the sink raises the in-memory view is left
    untouched and the error propagates to the caller.

    Parameters
    ----------
    storage:
        Sink that persists recurring definitions; ``None`` keeps them in memory only.
    clock:
        Source of "now" for the reachability check at registration.
    default_zone:
        Zone used when a registration does not name one (system zone if ``None``).
    lookahead_years:
        Horizon after which a cron expression counts as unreachable.
    """

    def __init__(
        self,
        storage: JobStorage | None = None,
        *,
        clock: Clock | None = None,
        default_zone: ZoneHint = None,
        lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
    ) -> None:
        self._storage = storage
        self._clock = clock or SystemClock()
        self._default_zone = default_zone
        self._lookahead_years = lookahead_years
        self._definitions: dict[str, RecurringJobDefinition] = {}
        self._lock = threading.RLock()

    def schedule_recurringly(
        self,
        job: JobDefinition,
        cron: str,
        *,
        recurring_id: str | None = None,
        zone: ZoneHint = None,
    ) -> str:
        """Create or replace the recurring job *recurring_id*; return its id.

        Raises:
            InvalidScheduleExpression: *cron* does not parse.
            ScheduleUnreachable: *cron* never fires within the lookahead.
            ValidationError: empty id or unknown zone.
        """
        rid = derive_recurring_id(job) if recurring_id is None else recurring_id
        if not isinstance(rid, str) or not rid.strip():
            raise ValidationError("Recurring job id must be a non-empty string")

        schedule = parse(cron)
        tz = resolve_zone(self._default_zone if zone is None else zone)
        definition = RecurringJobDefinition(id=rid, job=job, schedule=schedule, zone=tz)
        next_run = definition.next_run(self._clock.now(), lookahead_years=self._lookahead_years)

        with bound_job_context(recurring_id=rid):
            with self._lock:
                if self._storage is not None:
                    self._storage.persist_recurring(definition)
                replaced = rid in self._definitions
                self._definitions[rid] = definition
            log.info(
                "recurring_job.registered",
                job=job.describe(),
                cron=schedule.expression,
                zone=definition.zone_id,
                next_run=next_run.isoformat(),
                replaced=replaced,
            )
        return rid

    def delete_recurringly(self, recurring_id: str) -> None:
        """Remove *recurring_id*; unknown ids are ignored."""
        with self._lock:
            if self._storage is not None:
                self._storage.remove_recurring(recurring_id)
            existed = self._definitions.pop(recurring_id, None) is not None
        log.info("recurring_job.deleted", recurring_id=recurring_id, existed=existed)

    def get(self, recurring_id: str) -> RecurringJobDefinition | None:
        with self._lock:
            return self._definitions.get(recurring_id)

    def ids(self) -> list[str]:
        with self._lock:
            return sorted(self._definitions)

    def definitions(self) -> list[RecurringJobDefinition]:
        with self._lock:
            return [self._definitions[rid] for rid in sorted(self._definitions)]

    def next_runs(self, after: TimeValue | None = None) -> dict[str, datetime]:
        """Next run of every registered job, computed from *after* (default: now)."""
        reference = self._clock.now() if after is None else after
        return {
            definition.id: definition.next_run(reference, lookahead_years=self._lookahead_years)
            for definition in self.definitions()
        }

    def __contains__(self, recurring_id: object) -> bool:
        with self._lock:
            return recurring_id in self._definitions

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)


__all__ = ["RecurringJobRegistry", "derive_recurring_id"]
