"""Application-layer errors — scheduler lifecycle."""

from __future__ import annotations

from mp_jobs.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class SchedulerNotInitialized(ApplicationError):
    """A facade operation ran before a scheduler was bound."""

    default_code = "scheduler_not_initialized"

    def __init__(
        self,
        message: str = (
            "The job scheduler has not been initialized. "
            "Call mp_jobs.background.configure() during application startup."
        ),
    ) -> None:
        super().__init__(message)


class SchedulerAlreadyInitialized(ApplicationError):
    """A second scheduler was bound without unbinding the first."""

    default_code = "scheduler_already_initialized"

    def __init__(self, message: str = "A job scheduler is already bound; call unbind() first") -> None:
        super().__init__(message)


__all__ = [
    "ApplicationError",
    "SchedulerAlreadyInitialized",
    "SchedulerNotInitialized",
]
