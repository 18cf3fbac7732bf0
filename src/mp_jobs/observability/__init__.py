"""Observability – structured logging for the scheduler."""
from mp_jobs.observability.logging import JsonLoggerFactory, bound_job_context, get_logger

__all__ = ["JsonLoggerFactory", "bound_job_context", "get_logger"]
