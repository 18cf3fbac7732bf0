"""Observability – get_logger helper and job-context binding."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger named *name* with *initial_values* bound.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def bound_job_context(**values: Any) -> Any:
    """Context manager binding *values* to every log event in the block.

    Usage::

        with bound_job_context(recurring_id="nightly-report"):
            log.info("recurring_job.registered")
    """
    return structlog.contextvars.bound_contextvars(**values)


__all__ = ["bound_job_context", "get_logger"]
