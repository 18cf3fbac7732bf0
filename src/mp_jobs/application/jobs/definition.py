"""Jobs – serializable job definitions.

A :class:`JobDefinition` never holds a live object. Its target is one of two
plain-data variants:

* :class:`StaticInvocation`: call an importable function by path;
* :class:`ServiceInvocation`: resolve a service *type* through a
  :class:`ServiceResolver` when the job runs, then call one of its methods.

Paths use the ``"package.module:Qualified.name"`` form.
"""
from __future__ import annotations

import dataclasses
import functools
import importlib
from datetime import datetime
from typing import Any, Callable, ClassVar, Protocol, TypeVar, Union, runtime_checkable

from mp_jobs.kernel.errors import InvalidJobTarget, SerializationError, ValidationError

T = TypeVar("T")


def _check_path(path: str) -> None:
    module, sep, qualname = path.partition(":") if isinstance(path, str) else ("", "", "")
    if not (sep and module and qualname):
        raise InvalidJobTarget(f"Expected a 'module:qualname' path, got {path!r}")


def import_path(path: str) -> Any:
    """Import the object named by a ``"module:qualname"`` *path*."""
    module_name, _, qualname = path.partition(":")
    try:
        obj: Any = importlib.import_module(module_name)
        for attr in qualname.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as exc:
        raise SerializationError(f"Cannot import job target {path!r}", payload_type="job_target", cause=exc) from exc
    return obj


@runtime_checkable
class ServiceResolver(Protocol):
    """Port: resolve a service instance from its type when a job executes."""

    def resolve(self, service_type: type[T]) -> T: ...


class DefaultServiceResolver:
    """Resolver that instantiates the service type with no arguments."""

    def resolve(self, service_type: type[T]) -> T:
        return service_type()


@dataclasses.dataclass(frozen=True)
class StaticInvocation:
    """Call the importable function at ``function_path``."""

    function_path: str
    kind: ClassVar[str] = "static"

    def __post_init__(self) -> None:
        _check_path(self.function_path)

    def describe(self) -> str:
        return self.function_path

    def load(self, resolver: ServiceResolver) -> Callable[..., Any]:  # noqa: ARG002
        return import_path(self.function_path)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "function": self.function_path}


@dataclasses.dataclass(frozen=True)
class ServiceInvocation:
    """Resolve the type at ``service_path`` at execution time, then call ``method``."""

    service_path: str
    method: str
    kind: ClassVar[str] = "service"

    def __post_init__(self) -> None:
        _check_path(self.service_path)
        if not self.method or not self.method.isidentifier():
            raise InvalidJobTarget(f"Invalid method name {self.method!r}")

    def describe(self) -> str:
        return f"{self.service_path}.{self.method}"

    def load(self, resolver: ServiceResolver) -> Callable[..., Any]:
        service = resolver.resolve(import_path(self.service_path))
        return getattr(service, self.method)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "service": self.service_path, "method": self.method}


JobTarget = Union[StaticInvocation, ServiceInvocation]


def target_from_dict(payload: dict[str, Any]) -> JobTarget:
    try:
        kind = payload["kind"]
        if kind == StaticInvocation.kind:
            return StaticInvocation(payload["function"])
        if kind == ServiceInvocation.kind:
            return ServiceInvocation(payload["service"], payload["method"])
    except (KeyError, TypeError, InvalidJobTarget) as exc:
        raise SerializationError(f"Malformed job target {payload!r}", payload_type="job_target", cause=exc) from exc
    raise SerializationError(f"Unknown job target kind {kind!r}", payload_type="job_target")


@dataclasses.dataclass(frozen=True)
class JobDefinition:
    """What to run: a target plus the arguments captured for it."""

    target: JobTarget
    args: tuple[Any, ...] = ()

    @property
    def parameter(self) -> Any:
        """The single captured argument, or ``None`` when nothing was captured."""
        return self.args[0] if self.args else None

    @property
    def signature(self) -> str:
        """Target plus argument *types*; identical for every call of one call site."""
        arg_types = ",".join(type(arg).__name__ for arg in self.args)
        return f"{self.target.describe()}({arg_types})"

    def describe(self) -> str:
        return f"{self.target.describe()}({', '.join(repr(arg) for arg in self.args)})"

    def load(self, resolver: ServiceResolver | None = None) -> Callable[[], Any]:
        """Bind the target to its arguments; the dispatch side calls the result."""
        fn = self.target.load(resolver or DefaultServiceResolver())
        return functools.partial(fn, *self.args)

    def to_dict(self) -> dict[str, Any]:
        return {"target": self.target.to_dict(), "args": list(self.args)}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "JobDefinition":
        if not isinstance(payload, dict) or "target" not in payload:
            raise SerializationError(f"Malformed job definition {payload!r}", payload_type="job_definition")
        args = payload.get("args", [])
        if not isinstance(args, (list, tuple)):
            raise SerializationError("Job arguments must be a list", payload_type="job_definition")
        return cls(target=target_from_dict(payload["target"]), args=tuple(args))


@dataclasses.dataclass(frozen=True)
class ScheduledJob:
    """A definition paired with the earliest UTC instant it may run."""

    definition: JobDefinition
    run_at: datetime

    def __post_init__(self) -> None:
        if self.run_at.tzinfo is None or self.run_at.utcoffset() is None:
            raise ValidationError("ScheduledJob.run_at must be timezone-aware")

    def is_due(self, now: datetime) -> bool:
        return self.run_at <= now

    def to_dict(self) -> dict[str, Any]:
        return {"definition": self.definition.to_dict(), "run_at": self.run_at.isoformat()}


__all__ = [
    "DefaultServiceResolver",
    "JobDefinition",
    "JobTarget",
    "ScheduledJob",
    "ServiceInvocation",
    "ServiceResolver",
    "StaticInvocation",
    "import_path",
    "target_from_dict",
]
