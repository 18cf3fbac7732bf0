"""Application scheduler – process-wide facade over one bound JobScheduler.

Bind once during startup, then call the module functions from anywhere::

    from mp_jobs import background

    background.configure(PostgresJobStorage(dsn))   # or background.bind(scheduler)
    background.enqueue(send_welcome_mail, user_id)

Every operation raises :class:`~mp_jobs.kernel.errors.SchedulerNotInitialized`
until a scheduler is bound.
"""
from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import timedelta
from typing import Any

from mp_jobs.application.jobs import Work
from mp_jobs.application.scheduler.in_memory import InMemoryJobStorage
from mp_jobs.application.scheduler.scheduler import JobScheduler
from mp_jobs.application.scheduler.storage import JobStorage
from mp_jobs.config import EnvSettingsLoader, JobSchedulerSettings
from mp_jobs.kernel.errors import SchedulerAlreadyInitialized, SchedulerNotInitialized
from mp_jobs.kernel.time import Clock, TimeValue, ZoneHint, zone_id
from mp_jobs.kernel.types import JobId
from mp_jobs.observability.logging import JsonLoggerFactory, get_logger

log = get_logger(__name__)


class SchedulerBinding:
    """Holds at most one :class:`JobScheduler`, assigned once and then read-only.

    Readers never take the lock: they see either ``None`` or the bound
    scheduler, because the reference is replaced in a single assignment.
    """

    def __init__(self) -> None:
        self._scheduler: JobScheduler | None = None
        self._lock = threading.Lock()

    def bind(self, scheduler: JobScheduler) -> None:
        with self._lock:
            if self._scheduler is not None and self._scheduler is not scheduler:
                raise SchedulerAlreadyInitialized()
            self._scheduler = scheduler

    def unbind(self) -> JobScheduler | None:
        """Release the bound scheduler (application teardown, tests)."""
        with self._lock:
            scheduler, self._scheduler = self._scheduler, None
        return scheduler

    @property
    def is_bound(self) -> bool:
        return self._scheduler is not None

    def get(self) -> JobScheduler:
        scheduler = self._scheduler
        if scheduler is None:
            raise SchedulerNotInitialized()
        return scheduler


_binding = SchedulerBinding()


def configure(
    storage: JobStorage | None = None,
    *,
    settings: JobSchedulerSettings | None = None,
    clock: Clock | None = None,
    configure_logging: bool = False,
) -> JobScheduler:
    """Build a :class:`JobScheduler` and bind it process-wide.

    *settings* default to ``MP_JOBS_*`` environment variables and *storage*
    to an :class:`InMemoryJobStorage`. With *configure_logging* the root
    logger is set up through :class:`JsonLoggerFactory` from the settings,
    only once the scheduler is bound.

    Raises:
        SchedulerAlreadyInitialized: another scheduler is already bound; the
            logging setup is left untouched.
    """
    settings = settings or EnvSettingsLoader().load(JobSchedulerSettings)
    scheduler = JobScheduler(
        storage if storage is not None else InMemoryJobStorage(),
        settings=settings,
        clock=clock,
    )
    _binding.bind(scheduler)
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level, json=settings.log_json)
    log.info(
        "scheduler.configured",
        storage=type(scheduler.storage).__name__,
        default_zone=zone_id(settings.zone),
    )
    return scheduler


def bind(scheduler: JobScheduler) -> None:
    _binding.bind(scheduler)


def unbind() -> JobScheduler | None:
    return _binding.unbind()


def is_configured() -> bool:
    return _binding.is_bound


def current() -> JobScheduler:
    """The bound scheduler; raises ``SchedulerNotInitialized`` when there is none."""
    return _binding.get()


def enqueue(work: Work, *args: Any) -> JobId:
    return _binding.get().enqueue(work, *args)


def enqueue_for_each(items: Iterable[Any], work: Work) -> list[JobId]:
    return _binding.get().enqueue_for_each(items, work)


def schedule(work: Work, when: TimeValue | timedelta, *args: Any, zone: ZoneHint = None) -> JobId:
    return _binding.get().schedule(work, when, *args, zone=zone)


def schedule_recurringly(
    work: Work,
    cron: str,
    *args: Any,
    recurring_id: str | None = None,
    zone: ZoneHint = None,
) -> str:
    return _binding.get().schedule_recurringly(work, cron, *args, recurring_id=recurring_id, zone=zone)


def delete_recurringly(recurring_id: str) -> None:
    _binding.get().delete_recurringly(recurring_id)


__all__ = [
    "SchedulerBinding",
    "bind",
    "configure",
    "current",
    "delete_recurringly",
    "enqueue",
    "enqueue_for_each",
    "is_configured",
    "schedule",
    "schedule_recurringly",
    "unbind",
]
