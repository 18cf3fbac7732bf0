"""Infrastructure errors — payload (de)serialization."""

from __future__ import annotations

from typing import Any

from mp_jobs.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O or serialization failure that is not a scheduling rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """A job payload could not be decoded, or its target could not be imported."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


__all__ = ["InfrastructureError", "SerializationError"]
