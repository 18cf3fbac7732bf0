"""Application scheduler – JobStorage port consumed by the scheduler."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from mp_jobs.application.jobs import ScheduledJob
from mp_jobs.application.recurring import RecurringJobDefinition
from mp_jobs.kernel.types import JobId

__all__ = ["JobStorage"]


@runtime_checkable
class JobStorage(Protocol):
    """Port: durable store / dispatch sink for jobs.

    Implementations must tolerate repeated calls with the same recurring id;
    the scheduler never retries on their behalf and lets their errors through.
    """

    def persist(self, job: ScheduledJob) -> JobId: ...
    def persist_recurring(self, definition: RecurringJobDefinition) -> None: ...
    def remove_recurring(self, recurring_id: str) -> None: ...
