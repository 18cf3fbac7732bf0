"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   ├── ValidationError
    │   │   ├── InvalidScheduleExpression
    │   │   └── InvalidJobTarget
    │   ├── ScheduleUnreachable
    │   └── EmptyWorkItemCollection
    ├── ApplicationError             (application.py)
    │   ├── SchedulerNotInitialized
    │   └── SchedulerAlreadyInitialized
    └── InfrastructureError          (infrastructure.py)
        └── SerializationError
"""

from mp_jobs.kernel.errors.application import (
    ApplicationError,
    SchedulerAlreadyInitialized,
    SchedulerNotInitialized,
)
from mp_jobs.kernel.errors.base import BaseError
from mp_jobs.kernel.errors.domain import (
    DomainError,
    EmptyWorkItemCollection,
    InvalidJobTarget,
    InvalidScheduleExpression,
    ScheduleUnreachable,
    ValidationError,
)
from mp_jobs.kernel.errors.infrastructure import InfrastructureError, SerializationError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "EmptyWorkItemCollection",
    "InfrastructureError",
    "InvalidJobTarget",
    "InvalidScheduleExpression",
    "ScheduleUnreachable",
    "SchedulerAlreadyInitialized",
    "SchedulerNotInitialized",
    "SerializationError",
    "ValidationError",
]
