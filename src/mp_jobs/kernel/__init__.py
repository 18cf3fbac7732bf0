"""Kernel – framework-agnostic building blocks: errors, time, identifiers."""

from mp_jobs.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    EmptyWorkItemCollection,
    InfrastructureError,
    InvalidJobTarget,
    InvalidScheduleExpression,
    ScheduleUnreachable,
    SchedulerAlreadyInitialized,
    SchedulerNotInitialized,
    SerializationError,
    ValidationError,
)
from mp_jobs.kernel.types import JobId

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "EmptyWorkItemCollection",
    "InfrastructureError",
    "InvalidJobTarget",
    "InvalidScheduleExpression",
    "JobId",
    "ScheduleUnreachable",
    "SchedulerAlreadyInitialized",
    "SchedulerNotInitialized",
    "SerializationError",
    "ValidationError",
]
