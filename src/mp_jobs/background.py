"""Process-wide job scheduling entry point.

Usage::

    from mp_jobs import background

    background.configure()
    background.enqueue(send_welcome_mail, user_id)
    background.schedule_recurringly(purge_sessions, "0 3 * * *", recurring_id="purge")
"""
from mp_jobs.application.scheduler.facade import (
    SchedulerBinding,
    bind,
    configure,
    current,
    delete_recurringly,
    enqueue,
    enqueue_for_each,
    is_configured,
    schedule,
    schedule_recurringly,
    unbind,
)

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
