"""Cron – expression parsing and next-occurrence resolution."""
from mp_jobs.application.cron.builder import Cron
from mp_jobs.application.cron.engine import DEFAULT_LOOKAHEAD_YEARS, next_occurrence, occurrences
from mp_jobs.application.cron.expression import CronSchedule, parse

__all__ = [
    "Cron",
    "CronSchedule",
    "DEFAULT_LOOKAHEAD_YEARS",
    "next_occurrence",
    "occurrences",
    "parse",
]
