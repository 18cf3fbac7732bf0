"""Jobs – capture callables as :class:`JobDefinition` values.

Supported units of work:

* module-level functions, staticmethods and classmethods → :class:`StaticInvocation`;
* bound methods and callable instances → :class:`ServiceInvocation` of the
  instance's *type* (the instance itself is never captured);
* :func:`functools.partial` wrappers (positional arguments only);
* targets built explicitly, e.g. with :func:`service_method`.

Lambdas and nested functions cannot be imported by name and are rejected.
"""
from __future__ import annotations

import functools
import inspect
from collections.abc import Collection, Iterable, Iterator
from typing import Any, Callable, Union

from mp_jobs.application.jobs.definition import (
    JobDefinition,
    JobTarget,
    ServiceInvocation,
    StaticInvocation,
)
from mp_jobs.kernel.errors import EmptyWorkItemCollection, InvalidJobTarget, ValidationError

Work = Union[Callable[..., Any], StaticInvocation, ServiceInvocation]


def _importable_path(obj: Any) -> str:
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if not module or not qualname or "<lambda>" in qualname or "<locals>" in qualname:
        raise InvalidJobTarget(
            f"{obj!r} cannot be imported by name; use a module-level function or a method"
        )
    return f"{module}:{qualname}"


def service_method(service_type: type, method: str) -> ServiceInvocation:
    """Target that resolves *service_type* when the job runs and calls *method*.

    Example::

        scheduler.enqueue(service_method(ReportService, "rebuild"), report_id)
    """
    if not isinstance(service_type, type):
        raise InvalidJobTarget(f"Expected a service type, got {service_type!r}")
    if not callable(getattr(service_type, method, None)):
        raise InvalidJobTarget(f"{service_type.__qualname__} has no method {method!r}")
    return ServiceInvocation(_importable_path(service_type), method)


def to_target(work: Work) -> tuple[JobTarget, tuple[Any, ...]]:
    """Describe *work* as a target plus any arguments it already binds."""
    if isinstance(work, (StaticInvocation, ServiceInvocation)):
        return work, ()
    if isinstance(work, functools.partial):
        if work.keywords:
            raise InvalidJobTarget("functools.partial keyword arguments cannot be captured")
        target, bound = to_target(work.func)
        return target, bound + tuple(work.args)
    if inspect.ismethod(work):
        owner = work.__self__
        if isinstance(owner, type):
            return StaticInvocation(f"{_importable_path(owner)}.{work.__name__}"), ()
        return service_method(type(owner), work.__name__), ()
    if inspect.isfunction(work) or inspect.isbuiltin(work) or isinstance(work, type):
        return StaticInvocation(_importable_path(work)), ()
    if callable(work):
        return service_method(type(work), "__call__"), ()
    raise InvalidJobTarget(f"Cannot capture {work!r}: expected a callable or a job target")


def capture(work: Work, *args: Any) -> JobDefinition:
    """Capture *work* called with *args* as a :class:`JobDefinition`."""
    target, bound = to_target(work)
    return JobDefinition(target=target, args=bound + args)


def capture_for_each(
    items: Iterable[Any],
    work: Work,
    *,
    require_non_empty: bool = False,
) -> Iterable[JobDefinition]:
    """One definition per element of *items*, the element bound as last argument.

    Materialized collections are consumed eagerly and a list is returned;
    any other iterable (generators, iterators) is consumed lazily, once.
    The target is validated before any element is read.

    Raises:
        EmptyWorkItemCollection: *items* is empty and *require_non_empty* is set.
            For lazy input this surfaces when the returned iterator is exhausted.
    """
    if items is None:
        raise ValidationError("A work item collection is required")
    target, bound = to_target(work)
    if isinstance(items, Collection):
        definitions = [JobDefinition(target=target, args=(*bound, item)) for item in items]
        if require_non_empty and not definitions:
            raise EmptyWorkItemCollection()
        return definitions
    return _capture_lazily(items, target, bound, require_non_empty)


def _capture_lazily(
    items: Iterable[Any],
    target: JobTarget,
    bound: tuple[Any, ...],
    require_non_empty: bool,
) -> Iterator[JobDefinition]:
    produced = 0
    for item in items:
        produced += 1
        yield JobDefinition(target=target, args=(*bound, item))
    if require_non_empty and not produced:
        raise EmptyWorkItemCollection()


__all__ = ["Work", "capture", "capture_for_each", "service_method", "to_target"]
