"""
Game store backed by one YAML file per game.

The in-memory mapping is keyed by game id. Every change is written to disk
before the mapping is touched, so the mapping never holds a game whose file
failed to write. The store also remembers which file backs each game, since
files may be named anything.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union
from uuid import UUID

from lwg.errors import DecodeError, NotDirectoryError, NotFoundError, StorageError
from lwg.games.game import Game
from lwg.utils import fs

logger = logging.getLogger(__name__)

# Characters that would split the name into path components
_UNSAFE_NAME_CHARS = {'/', '\\', '\0', os.sep} | ({os.altsep} if os.altsep else set())


def game_filename(game: Game) -> str:
    """
    File name for a game: ``<name>_<id>``.

    The name part is only a hint for humans browsing the directory; the
    game's identity is read from the file content. Separators and NUL in
    the name are replaced with ``_`` so the file always lands directly in
    the games directory.
    """
    safe_name = ''.join('_' if c in _UNSAFE_NAME_CHARS else c for c in game.name)
    return f"{safe_name}_{game.id}"


class GameStore:
    """
    Collection of games keyed by id.

    Example:
        store = GameStore.load(config.paths.games)
        game = Game.with_new_id(Game(name="Doom", executable_path="/bin/doom"))
        store.add(game, config.paths.games)
    """

    def __init__(self):
        self._games: Dict[UUID, Game] = {}
        self._paths: Dict[UUID, Path] = {}

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id: UUID) -> bool:
        return game_id in self._games

    def __iter__(self) -> Iterator[Game]:
        return iter(self._games.values())

    def ids(self) -> List[UUID]:
        return list(self._games)

    def get(self, game_id: UUID) -> Optional[Game]:
        return self._games.get(game_id)

    def path_of(self, game_id: UUID) -> Optional[Path]:
        """Return the file backing a game, or None if the id is unknown."""
        return self._paths.get(game_id)

    def find_by_name(self, name: str) -> List[Game]:
        """Return all games with the given display name (names may repeat)."""
        return [g for g in self._games.values() if g.name == name]

    def add(self, game: Game, games_dir: Union[str, Path]) -> Path:
        """
        Persist a game and register it in the store.

        Writes ``games_dir/<name>_<id>``, replacing any file already at that
        path, then inserts or overwrites the entry for ``game.id``. If the
        game was previously backed by a different file (it was renamed, or
        loaded from a hand-named file), that file is deleted once the new
        one is written.

        Args:
            game: Game with its id already assigned (see Game.with_new_id)
            games_dir: Directory holding game files, created if missing

        Returns:
            Path of the written file

        Raises:
            StorageError: If the directory or file cannot be written, in
                which case the store is left unchanged; or if the previous
                file cannot be deleted, in which case the game is already
                registered under its new file
        """
        games_dir = Path(games_dir)
        fs.ensure_dir(games_dir)

        game_path = games_dir / game_filename(game)
        if fs.exists(game_path):
            logger.debug(f"Replacing existing game file: {game_path}")

        try:
            fs.write_yaml(game_path, game.to_dict())
        except StorageError as e:
            logger.error(f"Failed to save game '{game.name}' ({game.id}): {e}")
            raise

        previous_path = self._paths.get(game.id)
        self._games[game.id] = game
        self._paths[game.id] = game_path
        logger.info(f"Added game '{game.name}' ({game.id})")

        if previous_path is not None and previous_path != game_path:
            logger.debug(f"Removing previous game file: {previous_path}")
            _unlink(previous_path)

        return game_path

    def remove(self, game_id: UUID) -> None:
        """
        Delete a game's file and drop it from the store.

        The file removed is the one the game was loaded from or last written
        to. The entry is only dropped once the file is gone. A file that is
        already missing is not an error.

        Args:
            game_id: Id of the game to remove

        Raises:
            NotFoundError: If no game with this id is in the store
            StorageError: If the file cannot be deleted
        """
        game = self._games.get(game_id)
        if game is None:
            raise NotFoundError(f"No game with id {game_id}")

        _unlink(self._paths[game_id])

        del self._games[game_id]
        del self._paths[game_id]
        logger.info(f"Removed game '{game.name}' ({game_id})")

    @classmethod
    def load(cls, games_dir: Union[str, Path]) -> 'GameStore':
        """
        Load every game file found under a directory.

        Walks ``games_dir`` recursively in sorted order, skipping
        directories and staging files left by an interrupted
        write, and decoding each regular file as one game. Games are
        keyed by the id stored in the file, not by the file name.

        Loading is all-or-nothing: the first unreadable or malformed file
        aborts the load and nothing is returned.

        Args:
            games_dir: Directory holding game files

        Returns:
            GameStore holding every loaded game

        Raises:
            NotFoundError: If games_dir does not exist
            NotDirectoryError: If games_dir is not a directory
            DecodeError: If a file is not a valid game record
            StorageError: If a file cannot be read
        """
        games_dir = Path(games_dir)
        if not fs.exists(games_dir):
            raise NotFoundError(f"Games directory does not exist: {games_dir}")
        if not games_dir.is_dir():
            raise NotDirectoryError(f"Games path is not a directory: {games_dir}")

        store = cls()
        for game_path in sorted(games_dir.rglob('*')):
            if not game_path.is_file():
                continue
            if fs.is_temp_file(game_path):
                logger.debug(f"Skipping leftover temp file: {game_path}")
                continue

            try:
                game = Game.from_dict(fs.read_yaml(game_path))
            except DecodeError as e:
                logger.error(f"Corrupt game file {game_path}: {e}")
                raise DecodeError(f"Game file {game_path}: {e}") from e

            if game.id in store._games:
                logger.warning(
                    f"Duplicate game id {game.id} in {game_path}, "
                    f"replacing '{store._games[game.id].name}'"
                )
            store._games[game.id] = game
            store._paths[game.id] = game_path
            logger.debug(f"Loaded game '{game.name}' from {game_path.name}")

        logger.info(f"Loaded {len(store)} game(s) from {games_dir}")
        return store


def _unlink(game_path: Path) -> None:
    try:
        game_path.unlink(missing_ok=True)
    except OSError as e:
        raise StorageError(f"Failed to remove game file {game_path}: {e}") from e
