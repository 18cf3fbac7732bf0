"""Application scheduler – JobScheduler handle, storage port and in-memory sink."""
from mp_jobs.application.scheduler.in_memory import InMemoryJobStorage
from mp_jobs.application.scheduler.scheduler import JobScheduler
from mp_jobs.application.scheduler.storage import JobStorage

__all__ = [
    "InMemoryJobStorage",
    "JobScheduler",
    "JobStorage",
]
