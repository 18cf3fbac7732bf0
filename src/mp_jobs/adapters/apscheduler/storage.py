"""APScheduler adapter – JobStorage that dispatches through APScheduler 3."""
from __future__ import annotations

from typing import Any

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from mp_jobs.adapters.apscheduler.trigger import CronScheduleTrigger
from mp_jobs.application.cron import DEFAULT_LOOKAHEAD_YEARS
from mp_jobs.application.jobs import DefaultServiceResolver, JobDefinition, ScheduledJob, ServiceResolver
from mp_jobs.application.recurring import RecurringJobDefinition
from mp_jobs.kernel.types import JobId
from mp_jobs.observability.logging import get_logger

__all__ = ["APSchedulerJobStorage", "PERFORM_REF", "RECURRING_PREFIX", "perform", "use_resolver"]

log = get_logger(__name__)

RECURRING_PREFIX = "recurring:"
# Textual reference so persistent job stores can pickle the job
PERFORM_REF = f"{__name__}:perform"

_resolver: ServiceResolver = DefaultServiceResolver()


def use_resolver(resolver: ServiceResolver) -> None:
    """Set the resolver :func:`perform` uses for service-method jobs."""
    global _resolver
    _resolver = resolver


def perform(payload: dict[str, Any]) -> Any:
    """Execute a job payload: decode, resolve the target, call it."""
    definition = JobDefinition.from_dict(payload)
    log.info("job.started", job=definition.describe())
    return definition.load(_resolver)()


class APSchedulerJobStorage:
    """Hands scheduled and recurring jobs to an APScheduler scheduler.

    Jobs are registered as :data:`PERFORM_REF` with their definition as a
    plain-dict argument, so any APScheduler job store can hold them; the
    target is only resolved when the job fires. The default scheduler is a
    ``BackgroundScheduler`` in UTC with APScheduler's in-memory job store.
    A *resolver* replaces the process-wide one :func:`perform` uses.
    """

    def __init__(
        self,
        scheduler: BaseScheduler | None = None,
        *,
        resolver: ServiceResolver | None = None,
        lookahead_years: int = DEFAULT_LOOKAHEAD_YEARS,
    ) -> None:
        self._scheduler = scheduler if scheduler is not None else BackgroundScheduler(timezone="UTC")
        self._lookahead_years = lookahead_years
        if resolver is not None:
            use_resolver(resolver)

    def persist(self, job: ScheduledJob) -> JobId:
        job_id = JobId.generate()
        self._scheduler.add_job(
            PERFORM_REF,
            trigger=DateTrigger(run_date=job.run_at),
            args=(job.definition.to_dict(),),
            id=str(job_id),
            name=job.definition.describe(),
        )
        return job_id

    def persist_recurring(self, definition: RecurringJobDefinition) -> None:
        self._scheduler.add_job(
            PERFORM_REF,
            trigger=CronScheduleTrigger(
                definition.schedule,
                definition.zone,
                lookahead_years=self._lookahead_years,
            ),
            args=(definition.job.to_dict(),),
            id=f"{RECURRING_PREFIX}{definition.id}",
            name=definition.job.describe(),
            replace_existing=True,
        )

    def remove_recurring(self, recurring_id: str) -> None:
        try:
            self._scheduler.remove_job(f"{RECURRING_PREFIX}{recurring_id}")
        except JobLookupError:
            log.debug("recurring_job.absent", recurring_id=recurring_id)

    def start(self, paused: bool = False) -> None:
        self._scheduler.start(paused=paused)
        log.info("apscheduler.started", paused=paused)

    def shutdown(self, wait: bool = True) -> None:
        self._scheduler.shutdown(wait=wait)
        log.info("apscheduler.stopped")

    @property
    def running(self) -> bool:
        return self._scheduler.running
