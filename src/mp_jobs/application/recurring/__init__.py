"""Recurring – named cron-driven job definitions."""
from mp_jobs.application.recurring.definition import RecurringJobDefinition
from mp_jobs.application.recurring.registry import RecurringJobRegistry, derive_recurring_id

__all__ = ["RecurringJobDefinition", "RecurringJobRegistry", "derive_recurring_id"]
