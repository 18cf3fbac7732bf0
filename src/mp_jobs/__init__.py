"""
mp_jobs – deferred and recurring job scheduling.

Import path convention::

    from mp_jobs import background
    from mp_jobs.application.cron import Cron, parse, next_occurrence
    from mp_jobs.application.scheduler import JobScheduler, InMemoryJobStorage
    from mp_jobs.kernel.errors import InvalidScheduleExpression
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
