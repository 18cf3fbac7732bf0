"""Testing fixtures – pytest fixtures for scheduler tests.

Enable in a ``conftest.py``::

    pytest_plugins = ["mp_jobs.testing.fixtures"]
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from mp_jobs import background
from mp_jobs.application.scheduler import InMemoryJobStorage, JobScheduler
from mp_jobs.config import JobSchedulerSettings
from mp_jobs.kernel.time import FrozenClock
from mp_jobs.testing.fakes import FakeClock


@pytest.fixture
def fake_clock() -> FrozenClock:
    """A FrozenClock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def job_storage() -> InMemoryJobStorage:
    return InMemoryJobStorage()


@pytest.fixture
def job_scheduler(job_storage: InMemoryJobStorage, fake_clock: FrozenClock) -> JobScheduler:
    """A scheduler over ``job_storage`` with UTC as its default zone."""
    return JobScheduler(job_storage, settings=JobSchedulerSettings(default_zone="UTC"), clock=fake_clock)


@pytest.fixture
def bound_scheduler(job_scheduler: JobScheduler) -> Iterator[JobScheduler]:
    """``job_scheduler`` bound to :mod:`mp_jobs.background` for the test's duration."""
    background.unbind()
    background.bind(job_scheduler)
    try:
        yield job_scheduler
    finally:
        background.unbind()


__all__ = ["bound_scheduler", "fake_clock", "job_scheduler", "job_storage"]
