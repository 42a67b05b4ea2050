"""
Application configuration for lwg.
"""

from .manager import (
    APP_DIR_NAME,
    CONFIG_FILE_NAME,
    Config,
    PathsConfig,
    Preferences,
    RunnerPreferences,
    config_home,
)
from .validator import validate_config

__all__ = [
    'APP_DIR_NAME',
    'CONFIG_FILE_NAME',
    'Config',
    'PathsConfig',
    'Preferences',
    'RunnerPreferences',
    'config_home',
    'validate_config',
]
