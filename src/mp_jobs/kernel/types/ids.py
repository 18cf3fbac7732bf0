"""String-based identifier value objects."""

from __future__ import annotations

import dataclasses

import uuid_utils

from mp_jobs.kernel.errors.domain import ValidationError


@dataclasses.dataclass(frozen=True, slots=True)
class _StrId:
    """Base for string-typed identifiers."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError(f"{type(self).__name__} must not be empty")

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class JobId(_StrId):
    """Identifier a storage sink assigns to a persisted one-shot job.

    Generated ids are UUIDv7, so they sort by creation time::

        jid = JobId.generate()
        jid = JobId("0190c9f2-...")
    """

    @classmethod
    def generate(cls) -> "JobId":
        """Return a new time-ordered ``JobId``."""
        return cls(str(uuid_utils.uuid7()))


__all__ = ["JobId"]
