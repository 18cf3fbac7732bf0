"""Jobs – job definitions and their capture from callables."""
from mp_jobs.application.jobs.capture import Work, capture, capture_for_each, service_method, to_target
from mp_jobs.application.jobs.definition import (
    DefaultServiceResolver,
    JobDefinition,
    JobTarget,
    ScheduledJob,
    ServiceInvocation,
    ServiceResolver,
    StaticInvocation,
    import_path,
    target_from_dict,
)

__all__ = [
    "DefaultServiceResolver",
    "JobDefinition",
    "JobTarget",
    "ScheduledJob",
    "ServiceInvocation",
    "ServiceResolver",
    "StaticInvocation",
    "Work",
    "capture",
    "capture_for_each",
    "import_path",
    "service_method",
    "target_from_dict",
    "to_target",
]
