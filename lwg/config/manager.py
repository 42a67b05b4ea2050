"""
Application configuration: defaults, loading and saving.

The configuration lives in ``<main_dir>/config.yaml``. The first save
scaffolds ``main_dir`` and its games/runners subdirectories; later saves
replace the file with the current in-memory state.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
from uuid import UUID

from lwg.errors import (
    ConfigFileMissingError,
    DecodeError,
    NotDirectoryError,
    NotFoundError,
)
from lwg.games.game import NIL_UUID, parse_uuid
from lwg.utils import fs

logger = logging.getLogger(__name__)

APP_DIR_NAME = "lwg"
CONFIG_FILE_NAME = "config.yaml"
CONFIG_DIR_MODE = 0o755


def config_home() -> Path:
    """
    Resolve the platform configuration home.

    Linux/BSD follow the XDG Base Directory spec (``$XDG_CONFIG_HOME`` or
    ``~/.config``); macOS uses ``~/Library/Application Support`` and Windows
    ``%LOCALAPPDATA%``.
    """
    if sys.platform == "win32":
        return Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    if env := os.environ.get("XDG_CONFIG_HOME"):
        return Path(env)
    return Path.home() / ".config"


@dataclass
class PathsConfig:
    """Root directory and the games/runners directories beneath it."""
    main_dir: Path
    games: Path
    runners: Path


@dataclass
class RunnerPreferences:
    """Default runner; the nil UUID in ``default_id`` means none is set."""
    default_friendly_name: str = ""
    default_path: str = ""
    default_id: UUID = NIL_UUID


@dataclass
class Preferences:
    runners: RunnerPreferences = field(default_factory=RunnerPreferences)


@dataclass
class Config:
    """
    The application configuration record.

    Example:
        config = Config.default()
        config.preferences.runners.default_path = "/usr/bin/wine"
        config.save()

        # Later, in another process
        config = Config.load(config_home() / "lwg")
    """
    paths: PathsConfig
    preferences: Preferences = field(default_factory=Preferences)

    @property
    def config_file(self) -> Path:
        return self.paths.main_dir / CONFIG_FILE_NAME

    @classmethod
    def default(cls, home: Optional[Union[str, Path]] = None) -> 'Config':
        """
        Build the default configuration.

        Args:
            home: Configuration home to root the directories in. Defaults
                to the platform configuration home (see config_home()).

        Returns:
            Config with ``<home>/lwg`` and its games/runners subdirectories
            and no default runner
        """
        main_dir = Path(home if home is not None else config_home()) / APP_DIR_NAME
        return cls(
            paths=PathsConfig(
                main_dir=main_dir,
                games=main_dir / "games",
                runners=main_dir / "runners",
            ),
        )

    @classmethod
    def load(cls, directory: Union[str, Path]) -> 'Config':
        """
        Load configuration from a directory holding ``config.yaml``.

        Args:
            directory: The configuration directory, not the file itself

        Returns:
            Loaded Config

        Raises:
            NotFoundError: If the directory or config.yaml does not exist
            NotDirectoryError: If ``directory`` is not a directory
            DecodeError: If config.yaml is malformed
            StorageError: If config.yaml cannot be read
        """
        directory = Path(directory)

        if not fs.exists(directory):
            raise NotFoundError(f"Config directory does not exist: {directory}")
        if not directory.is_dir():
            raise NotDirectoryError(f"Config path is not a directory: {directory}")

        config_file = directory / CONFIG_FILE_NAME
        data = fs.read_yaml(config_file)

        try:
            config = cls.from_dict(data)
        except DecodeError as e:
            raise DecodeError(f"Config file {config_file}: {e}") from e

        logger.debug(f"Loaded configuration from {config_file}")
        return config

    def save(self) -> Path:
        """
        Write the configuration to ``<main_dir>/config.yaml``.

        If ``main_dir`` does not exist yet, it is created along with the
        games and runners directories and the file is written fresh.
        Otherwise the existing file is replaced with the current state.

        The document is rendered before anything touches the disk, so later
        changes to this object do not affect what was written.

        Returns:
            Path of the config file

        Raises:
            ConfigFileMissingError: If ``main_dir`` exists but config.yaml
                does not. Save only creates the file while scaffolding a new
                directory tree.
            StorageError: If a directory or the file cannot be written
        """
        config_file = self.config_file
        document = self.to_dict()

        if not fs.exists(self.paths.main_dir):
            self._scaffold()
            fs.write_yaml(config_file, document)
            logger.info(f"Created configuration: {config_file}")
            return config_file

        if not fs.exists(config_file):
            logger.error(f"Config directory {self.paths.main_dir} has no {CONFIG_FILE_NAME}")
            raise ConfigFileMissingError(
                f"Attempted to update {config_file} but it does not exist"
            )

        fs.write_yaml(config_file, document)
        logger.info(f"Saved configuration: {config_file}")
        return config_file

    def _scaffold(self) -> None:
        """Create main, games and runners directories."""
        for directory in (self.paths.main_dir, self.paths.games, self.paths.runners):
            fs.ensure_dir(directory, mode=CONFIG_DIR_MODE)
        logger.info(f"Scaffolded config directory: {self.paths.main_dir}")

    def to_dict(self) -> Dict[str, Any]:
        """Render the configuration as the mapping stored in config.yaml."""
        runners = self.preferences.runners
        return {
            'paths': {
                'main_dir': str(self.paths.main_dir),
                'games': str(self.paths.games),
                'runners': str(self.paths.runners),
            },
            'preferences': {
                'runners': {
                    'default_friendly_name': runners.default_friendly_name,
                    'default_path': runners.default_path,
                    'default_id': str(runners.default_id),
                },
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'Config':
        """
        Build a configuration from a decoded config.yaml document.

        All three paths are required. Missing preferences fall back to
        their defaults.

        Raises:
            DecodeError: If the document shape or a value is invalid
        """
        if not isinstance(data, dict):
            raise DecodeError("Configuration file must contain a YAML dictionary")

        paths = _section(data, 'paths')
        values = {}
        for key in ('main_dir', 'games', 'runners'):
            raw = paths.get(key)
            if not isinstance(raw, str) or not raw:
                raise DecodeError(f"paths.{key} is required and must be a string")
            values[key] = Path(raw)

        runners = _section(_section(data, 'preferences'), 'runners', prefix='preferences.')
        friendly_name = runners.get('default_friendly_name') or ""
        default_path = runners.get('default_path') or ""
        for key, value in (('default_friendly_name', friendly_name), ('default_path', default_path)):
            if not isinstance(value, str):
                raise DecodeError(f"preferences.runners.{key} must be a string")

        return cls(
            paths=PathsConfig(**values),
            preferences=Preferences(
                runners=RunnerPreferences(
                    default_friendly_name=friendly_name,
                    default_path=default_path,
                    default_id=parse_uuid(
                        runners.get('default_id'), 'preferences.runners.default_id'
                    ),
                ),
            ),
        )


def _section(data: Dict[str, Any], key: str, prefix: str = "") -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"{prefix}{key} must be a mapping")
    return value
