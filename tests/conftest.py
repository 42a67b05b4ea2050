"""
Shared pytest fixtures and utilities for the lwg test suite.
"""

from pathlib import Path
from typing import Any, Callable, Dict
from uuid import UUID

import pytest
import yaml

from lwg.config.manager import Config
from lwg.games.game import Game


@pytest.fixture
def config_home(tmp_path: Path) -> Path:
    """
    Stand-in for the user's configuration home (e.g. ~/.config).
    """
    return tmp_path / "home" / ".config"


@pytest.fixture
def config(config_home: Path) -> Config:
    """
    Default configuration rooted in the temp configuration home, not saved.
    """
    return Config.default(config_home)


@pytest.fixture
def games_dir(tmp_path: Path) -> Path:
    path = tmp_path / "games"
    path.mkdir()
    return path


@pytest.fixture
def runner_id() -> UUID:
    return UUID("0b9a1d3e-5b4f-4c4e-9d8e-2f6a7c1b3e55")


@pytest.fixture
def sample_game(runner_id: UUID) -> Game:
    """A game with every field filled in and a fresh id."""
    return Game.with_new_id(Game(
        name="Doom",
        executable_path="/games/doom/doom.exe",
        prefix_path="/home/u/.wine-doom",
        extra_args="-nosound -skill 4",
        runner_id=runner_id,
    ))


@pytest.fixture
def write_game_file(games_dir: Path) -> Callable[..., Path]:
    """
    Write a raw game YAML document into the games directory.

    Usage:
        path = write_game_file("anything", {"name": "Doom", "id": "..."})
    """

    def _writer(filename: str, document: Dict[str, Any]) -> Path:
        path = games_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(document, sort_keys=False))
        return path

    return _writer
