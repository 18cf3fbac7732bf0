"""Domain errors — invalid job definitions and unsatisfiable schedules."""

from __future__ import annotations

from typing import Any

from mp_jobs.kernel.errors.base import BaseError


class DomainError(BaseError):
    """A job or schedule violates a rule of the scheduling model."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Caller-supplied input does not meet validation rules."""

    default_code = "validation_error"


class InvalidScheduleExpression(ValidationError):
    """A cron expression could not be parsed.

    ``expression`` is the original text; ``field`` names the cron field that
    failed, when the failure is field-specific.
    """

    default_code = "invalid_schedule_expression"

    def __init__(
        self,
        expression: str,
        reason: str,
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        detail: dict[str, Any] = {"expression": expression}
        if field is not None:
            detail["field"] = field
        super().__init__(f"Invalid cron expression {expression!r}: {reason}", detail=detail, **kwargs)
        self.expression = expression
        self.reason = reason
        self.field = field


class ScheduleUnreachable(DomainError):
    """A syntactically valid cron expression never fires within the lookahead."""

    default_code = "schedule_unreachable"

    def __init__(self, expression: str, lookahead_years: int, **kwargs: Any) -> None:
        super().__init__(
            f"Cron expression {expression!r} has no occurrence within {lookahead_years} years",
            detail={"expression": expression, "lookahead_years": lookahead_years},
            **kwargs,
        )
        self.expression = expression
        self.lookahead_years = lookahead_years


class InvalidJobTarget(ValidationError):
    """The unit of work cannot be described as importable, serializable data."""

    default_code = "invalid_job_target"


class EmptyWorkItemCollection(DomainError):
    """A batch call site required at least one work item but got none."""

    default_code = "empty_work_item_collection"

    def __init__(self, message: str = "At least one work item is required", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "DomainError",
    "EmptyWorkItemCollection",
    "InvalidJobTarget",
    "InvalidScheduleExpression",
    "ScheduleUnreachable",
    "ValidationError",
]
