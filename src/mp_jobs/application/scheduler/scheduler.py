"""Application scheduler – JobScheduler, the injectable scheduling handle."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
from typing import Any

from mp_jobs.application.jobs import JobDefinition, ScheduledJob, Work, capture, capture_for_each
from mp_jobs.application.recurring import RecurringJobRegistry
from mp_jobs.application.scheduler.storage import JobStorage
from mp_jobs.config import JobSchedulerSettings
from mp_jobs.kernel.time import Clock, SystemClock, TimeValue, ZoneHint, to_utc_instant
from mp_jobs.kernel.types import JobId
from mp_jobs.observability.logging import get_logger

__all__ = ["JobScheduler"]

log = get_logger(__name__)


class JobScheduler:
    """Turns calls into job definitions and hands them to a :class:`JobStorage`.

    Example::

        scheduler = JobScheduler(InMemoryJobStorage())
        scheduler.enqueue(send_welcome_mail, user_id)
        scheduler.schedule(send_reminder, datetime(2026, 1, 5, 9, 0), user_id, zone="Europe/Brussels")
        scheduler.schedule_recurringly(purge_sessions, "0 3 * * *", recurring_id="purge-sessions")

    Nothing here blocks or retries; errors raised by the storage sink reach
    the caller unchanged.
    """

    def __init__(
        self,
        storage: JobStorage,
        *,
        settings: JobSchedulerSettings | None = None,
        clock: Clock | None = None,
        registry: RecurringJobRegistry | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings or JobSchedulerSettings()
        self._clock = clock or SystemClock()
        self._zone = self._settings.zone
        self._registry = registry or RecurringJobRegistry(
            storage,
            clock=self._clock,
            default_zone=self._zone,
            lookahead_years=self._settings.cron_lookahead_years,
        )

    @property
    def storage(self) -> JobStorage:
        return self._storage

    @property
    def registry(self) -> RecurringJobRegistry:
        return self._registry

    @property
    def settings(self) -> JobSchedulerSettings:
        return self._settings

    def enqueue(self, work: Work, *args: Any) -> JobId:
        """Fire-and-forget: run ``work(*args)`` as soon as a worker is free."""
        return self._persist(ScheduledJob(capture(work, *args), self._clock.now()), "job.enqueued")

    def enqueue_for_each(self, items: Iterable[Any], work: Work) -> list[JobId]:
        """Enqueue ``work(item)`` once per element of *items*, in order.

        An empty *items* enqueues nothing.
        """
        now = self._clock.now()
        return [
            self._persist(ScheduledJob(definition, now), "job.enqueued")
            for definition in capture_for_each(items, work)
        ]

    def schedule(self, work: Work, when: TimeValue | timedelta, *args: Any, zone: ZoneHint = None) -> JobId:
        """Run ``work(*args)`` once, no earlier than *when*.

        *when* is any value :func:`~mp_jobs.kernel.time.to_utc_instant`
        accepts (naive datetimes are read in *zone*, else the configured
        default zone) or a :class:`~datetime.timedelta` from now.
        """
        if isinstance(when, timedelta):
            run_at = self._clock.now() + when
        else:
            run_at = to_utc_instant(when, self._zone if zone is None else zone)
        return self._persist(ScheduledJob(capture(work, *args), run_at), "job.scheduled")

    def schedule_recurringly(
        self,
        work: Work,
        cron: str,
        *args: Any,
        recurring_id: str | None = None,
        zone: ZoneHint = None,
    ) -> str:
        """Create or replace a recurring job; returns its (possibly derived) id."""
        definition: JobDefinition = capture(work, *args)
        return self._registry.schedule_recurringly(definition, cron, recurring_id=recurring_id, zone=zone)

    def delete_recurringly(self, recurring_id: str) -> None:
        self._registry.delete_recurringly(recurring_id)

    def _persist(self, job: ScheduledJob, event: str) -> JobId:
        job_id = self._storage.persist(job)
        log.info(event, job_id=str(job_id), job=job.definition.describe(), run_at=job.run_at.isoformat())
        return job_id
