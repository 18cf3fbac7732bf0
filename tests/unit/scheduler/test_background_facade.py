"""Unit tests for the process-wide scheduling facade."""
from __future__ import annotations

import threading
from collections.abc import Iterator
from datetime import timedelta
from typing import Any

import pytest

from mp_jobs import background
from mp_jobs.application.scheduler import InMemoryJobStorage, JobScheduler
from mp_jobs.application.scheduler import facade
from mp_jobs.config import JobSchedulerSettings
from mp_jobs.kernel.errors import SchedulerAlreadyInitialized, SchedulerNotInitialized
from mp_jobs.kernel.time import FrozenClock


def deliver(order_id: int) -> None:
    pass


@pytest.fixture(autouse=True)
def _unbound() -> Iterator[None]:
    background.unbind()
    yield
    background.unbind()


# ---------------------------------------------------------------------------
# Before binding
# ---------------------------------------------------------------------------


class TestUnbound:
    @pytest.mark.parametrize(
        "call",
        [
            lambda: background.enqueue(deliver, 1),
            lambda: background.enqueue_for_each([1, 2], deliver),
            lambda: background.schedule(deliver, timedelta(minutes=1), 1),
            lambda: background.schedule_recurringly(deliver, "@daily", 1),
            lambda: background.delete_recurringly("x"),
            background.current,
        ],
    )
    def test_operations_fail(self, call: Any) -> None:
        with pytest.raises(SchedulerNotInitialized):
            call()

    def test_not_configured(self) -> None:
        assert background.is_configured() is False


# ---------------------------------------------------------------------------
# Bound
# ---------------------------------------------------------------------------


class TestBound:
    def test_enqueue_reaches_bound_storage(self, bound_scheduler: JobScheduler, job_storage: InMemoryJobStorage) -> None:
        job_id = background.enqueue(deliver, 5)
        assert job_storage.get(job_id).definition.args == (5,)  # type: ignore[union-attr]

    def test_all_operations(self, bound_scheduler: JobScheduler, job_storage: InMemoryJobStorage) -> None:
        assert len(background.enqueue_for_each([1, 2, 3], deliver)) == 3
        background.schedule(deliver, timedelta(hours=1), 4)
        rid = background.schedule_recurringly(deliver, "0 6 * * *", 9, recurring_id="morning")
        assert rid == "morning"
        assert len(job_storage.scheduled_jobs()) == 4
        background.delete_recurringly("morning")
        assert job_storage.recurring_jobs() == {}

    def test_current(self, bound_scheduler: JobScheduler) -> None:
        assert background.current() is bound_scheduler
        assert background.is_configured() is True

    def test_second_bind_rejected(self, bound_scheduler: JobScheduler) -> None:
        with pytest.raises(SchedulerAlreadyInitialized):
            background.bind(JobScheduler(InMemoryJobStorage()))
        assert background.current() is bound_scheduler

    def test_rebinding_same_scheduler_is_allowed(self, bound_scheduler: JobScheduler) -> None:
        background.bind(bound_scheduler)
        assert background.current() is bound_scheduler

    def test_unbind_returns_scheduler(self, bound_scheduler: JobScheduler) -> None:
        assert background.unbind() is bound_scheduler
        with pytest.raises(SchedulerNotInitialized):
            background.enqueue(deliver, 1)


# ---------------------------------------------------------------------------
# configure()
# ---------------------------------------------------------------------------


class TestConfigure:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MP_JOBS_DEFAULT_ZONE", raising=False)
        scheduler = background.configure()
        assert background.current() is scheduler
        assert isinstance(scheduler.storage, InMemoryJobStorage)

    def test_explicit_storage_and_settings(self, fake_clock: FrozenClock) -> None:
        storage = InMemoryJobStorage()
        settings = JobSchedulerSettings(default_zone="Europe/Brussels")
        scheduler = background.configure(storage, settings=settings, clock=fake_clock)
        assert scheduler.storage is storage
        assert scheduler.settings is settings

    def test_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MP_JOBS_DEFAULT_ZONE", "Asia/Tokyo")
        monkeypatch.setenv("MP_JOBS_CRON_LOOKAHEAD_YEARS", "3")
        scheduler = background.configure()
        assert scheduler.settings.default_zone == "Asia/Tokyo"
        assert scheduler.settings.cron_lookahead_years == 3

    def test_configure_twice_rejected(self) -> None:
        background.configure(settings=JobSchedulerSettings(default_zone="UTC"))
        with pytest.raises(SchedulerAlreadyInitialized):
            background.configure(settings=JobSchedulerSettings(default_zone="UTC"))

    def test_configure_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[Any, bool]] = []

        def record(level: Any, *, json: bool = True) -> None:
            calls.append((level, json))

        monkeypatch.setattr(facade.JsonLoggerFactory, "configure", record)
        background.configure(
            settings=JobSchedulerSettings(default_zone="UTC", log_level="DEBUG", log_json=False),
            configure_logging=True,
        )
        assert calls == [("DEBUG", False)]

    def test_rejected_configure_leaves_logging_alone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = background.configure(settings=JobSchedulerSettings(default_zone="UTC"))
        calls: list[Any] = []
        monkeypatch.setattr(facade.JsonLoggerFactory, "configure", lambda *a, **kw: calls.append((a, kw)))
        with pytest.raises(SchedulerAlreadyInitialized):
            background.configure(
                settings=JobSchedulerSettings(default_zone="UTC", log_level="DEBUG", log_json=False),
                configure_logging=True,
            )
        assert calls == []
        assert background.current() is first


# ---------------------------------------------------------------------------
# SchedulerBinding
# ---------------------------------------------------------------------------


class TestSchedulerBinding:
    def test_concurrent_binds_have_one_winner(self) -> None:
        binding = background.SchedulerBinding()
        schedulers = [JobScheduler(InMemoryJobStorage()) for _ in range(8)]
        barrier = threading.Barrier(len(schedulers))
        failures: list[Exception] = []

        def attempt(scheduler: JobScheduler) -> None:
            barrier.wait()
            try:
                binding.bind(scheduler)
            except SchedulerAlreadyInitialized as exc:
                failures.append(exc)

        threads = [threading.Thread(target=attempt, args=(s,)) for s in schedulers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(failures) == len(schedulers) - 1
        assert binding.get() in schedulers

    def test_get_unbound(self) -> None:
        with pytest.raises(SchedulerNotInitialized):
            background.SchedulerBinding().get()
