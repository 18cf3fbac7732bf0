"""Config – 12-factor settings for the job scheduler."""

from mp_jobs.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_jobs.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_jobs.config.settings import JobSchedulerSettings, Settings

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "JobSchedulerSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
