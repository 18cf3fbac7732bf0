"""APScheduler adapter – dispatch jobs through APScheduler 3 (``apscheduler`` extra)."""
from mp_jobs.adapters.apscheduler.storage import (
    PERFORM_REF,
    RECURRING_PREFIX,
    APSchedulerJobStorage,
    perform,
    use_resolver,
)
from mp_jobs.adapters.apscheduler.trigger import CronScheduleTrigger

__all__ = [
    "APSchedulerJobStorage",
    "CronScheduleTrigger",
    "PERFORM_REF",
    "RECURRING_PREFIX",
    "perform",
    "use_resolver",
]
