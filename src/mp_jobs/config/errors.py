"""Config errors raised while loading or validating scheduler settings."""
from __future__ import annotations

from mp_jobs.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Configuration could not be loaded or is inconsistent."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default was not supplied by any source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting {setting_name!r} is missing", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting {setting_name!r}={value!r} is invalid: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
