"""Kernel types – identifier value objects."""
from mp_jobs.kernel.types.ids import JobId

__all__ = ["JobId"]
