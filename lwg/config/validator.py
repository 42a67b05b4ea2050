"""Configuration validation."""

import logging
from typing import List

from lwg.config.manager import Config
from lwg.errors import ValidationError

logger = logging.getLogger(__name__)


def validate_config(config: Config) -> None:
    """
    Validate configuration values.

    Args:
        config: Loaded or default configuration

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    errors.extend(_validate_paths(config))
    errors.extend(_validate_runner_preferences(config))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_paths(config: Config) -> List[str]:
    """Validate paths section."""
    errors = []
    paths = config.paths

    for key in ('main_dir', 'games', 'runners'):
        path = getattr(paths, key)
        if not path.is_absolute():
            errors.append(f"paths.{key} must be an absolute path: {path}")

    # Game files are loaded from every file under the games directory, so
    # runner files or config.yaml must not end up inside it
    if paths.games == paths.main_dir:
        errors.append("paths.games must not be the same directory as paths.main_dir")
    if paths.games == paths.runners:
        errors.append("paths.games and paths.runners must be different directories")
    elif paths.games in paths.runners.parents:
        errors.append("paths.runners must not be inside paths.games")

    return errors


def _validate_runner_preferences(config: Config) -> List[str]:
    """Validate preferences.runners section."""
    errors = []
    runners = config.preferences.runners

    if runners.default_path and not runners.default_friendly_name:
        # Not fatal, the launcher falls back to the path for display
        logger.warning("preferences.runners.default_path is set without a friendly name")

    if runners.default_friendly_name and not runners.default_path:
        errors.append(
            "preferences.runners.default_friendly_name is set but default_path is empty"
        )

    return errors
