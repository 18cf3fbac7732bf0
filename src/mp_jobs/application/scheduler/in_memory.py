"""Application scheduler – InMemoryJobStorage for unit tests and local runs."""
from __future__ import annotations

import threading
from datetime import datetime

from mp_jobs.application.jobs import ScheduledJob
from mp_jobs.application.recurring import RecurringJobDefinition
from mp_jobs.kernel.types import JobId

__all__ = ["InMemoryJobStorage"]


class InMemoryJobStorage:
    """Storage sink that keeps jobs in dicts; ``due`` lists eligible one-shot jobs."""

    def __init__(self) -> None:
        self._jobs: dict[JobId, ScheduledJob] = {}
        self._recurring: dict[str, RecurringJobDefinition] = {}
        self._lock = threading.Lock()

    def persist(self, job: ScheduledJob) -> JobId:
        job_id = JobId.generate()
        with self._lock:
            self._jobs[job_id] = job
        return job_id

    def persist_recurring(self, definition: RecurringJobDefinition) -> None:
        with self._lock:
            self._recurring[definition.id] = definition

    def remove_recurring(self, recurring_id: str) -> None:
        with self._lock:
            self._recurring.pop(recurring_id, None)

    def get(self, job_id: JobId) -> ScheduledJob | None:
        with self._lock:
            return self._jobs.get(job_id)

    def scheduled_jobs(self) -> dict[JobId, ScheduledJob]:
        with self._lock:
            return dict(self._jobs)

    def recurring_jobs(self) -> dict[str, RecurringJobDefinition]:
        with self._lock:
            return dict(self._recurring)

    def due(self, now: datetime) -> list[tuple[JobId, ScheduledJob]]:
        """One-shot jobs whose ``run_at`` is at or before *now*, oldest first."""
        with self._lock:
            ready = [(job_id, job) for job_id, job in self._jobs.items() if job.is_due(now)]
        return sorted(ready, key=lambda item: item[1].run_at)

    def clear(self) -> None:
        with self._lock:
            self._jobs.clear()
            self._recurring.clear()
