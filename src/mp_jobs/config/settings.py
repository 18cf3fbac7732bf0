"""Config – settings dataclasses for the job scheduler."""
from __future__ import annotations

import dataclasses
import logging
from datetime import tzinfo
from typing import ClassVar

from mp_jobs.config.errors import InvalidSettingValueError
from mp_jobs.kernel.errors import ValidationError
from mp_jobs.kernel.time import resolve_zone


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    ``_prefix`` names the environment-variable prefix used by
    :class:`~mp_jobs.config.loaders.EnvSettingsLoader`; ``_validate`` runs
    on construction.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class JobSchedulerSettings(Settings):
    """Scheduler configuration, read from ``MP_JOBS_*`` variables.

    Attributes:
        default_zone: IANA zone used when a call omits one; empty means the
            system's local zone.
        cron_lookahead_years: How far ahead a cron expression may look for its
            next occurrence before it is declared unreachable.
        log_level: Level handed to :class:`~mp_jobs.observability.JsonLoggerFactory`.
        log_json: Render logs as JSON (``False`` for console output).
    """

    _prefix = "MP_JOBS"

    default_zone: str = ""
    cron_lookahead_years: int = 5
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.cron_lookahead_years < 1:
            raise InvalidSettingValueError(
                "cron_lookahead_years", self.cron_lookahead_years, "must be at least 1"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        try:
            resolve_zone(self.default_zone or None)
        except ValidationError as exc:
            raise InvalidSettingValueError("default_zone", self.default_zone, "unknown time zone") from exc

    @property
    def zone(self) -> tzinfo:
        """The default zone as a ``tzinfo``."""
        return resolve_zone(self.default_zone or None)


__all__ = ["JobSchedulerSettings", "Settings"]
