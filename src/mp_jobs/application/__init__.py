"""Application – job capture, cron resolution, recurring registry and scheduler."""

from mp_jobs.application.cron import Cron, CronSchedule, next_occurrence, occurrences, parse
from mp_jobs.application.jobs import (
    JobDefinition,
    ScheduledJob,
    ServiceInvocation,
    StaticInvocation,
    capture,
    capture_for_each,
    service_method,
)
from mp_jobs.application.recurring import RecurringJobDefinition, RecurringJobRegistry
from mp_jobs.application.scheduler import InMemoryJobStorage, JobScheduler, JobStorage

__all__ = [
    "Cron",
    "CronSchedule",
    "InMemoryJobStorage",
    "JobDefinition",
    "JobScheduler",
    "JobStorage",
    "RecurringJobDefinition",
    "RecurringJobRegistry",
    "ScheduledJob",
    "ServiceInvocation",
    "StaticInvocation",
    "capture",
    "capture_for_each",
    "next_occurrence",
    "occurrences",
    "parse",
    "service_method",
]
