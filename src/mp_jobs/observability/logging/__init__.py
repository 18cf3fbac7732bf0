"""Observability – structured logging helpers."""
from mp_jobs.observability.logging.factory import JsonLoggerFactory
from mp_jobs.observability.logging.processors import bound_job_context, get_logger

__all__ = ["JsonLoggerFactory", "bound_job_context", "get_logger"]
