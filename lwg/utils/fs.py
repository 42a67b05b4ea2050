"""
Filesystem helpers for lwg's YAML-backed storage

Provides the existence check used to pick between create and replace paths,
directory scaffolding, and YAML read/write with staged (atomic) replacement.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

import yaml

from lwg.errors import DecodeError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

DIR_MODE = 0o755
FILE_MODE = 0o644

TEMP_SUFFIX = ".tmp"


def exists(path: PathLike) -> bool:
    """
    Check whether a filesystem path currently exists.

    Only a missing path answers False. Any other stat failure (permission
    denied, I/O error) is raised instead of being reported as missing.

    Args:
        path: Path to check

    Returns:
        True if the path exists (file, directory or anything else)

    Raises:
        StorageError: If the path cannot be stat-ed for another reason
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except (OSError, ValueError) as e:
        raise StorageError(f"Cannot check whether {path} exists: {e}") from e
    return True


def ensure_dir(path: PathLike, mode: int = DIR_MODE) -> None:
    """
    Create a directory and any missing parents.

    Args:
        path: Directory to create
        mode: Permission bits for newly created directories

    Raises:
        StorageError: If the directory cannot be created
    """
    try:
        Path(path).mkdir(mode=mode, parents=True, exist_ok=True)
    except (OSError, ValueError) as e:
        raise StorageError(f"Failed to create directory {path}: {e}") from e


def read_yaml(path: PathLike) -> Any:
    """
    Read a file holding exactly one YAML document.

    Args:
        path: File to read

    Returns:
        The decoded document (None for an empty file)

    Raises:
        NotFoundError: If the file does not exist
        StorageError: If the file cannot be opened or read
        DecodeError: If the content is not valid single-document YAML
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise NotFoundError(f"File not found: {path}") from e
    except yaml.YAMLError as e:
        raise DecodeError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"File {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise StorageError(f"Failed to read {path}: {e}") from e
    except ValueError as e:
        raise StorageError(f"Failed to read {path}: {e}") from e


def write_yaml(path: PathLike, data: Any) -> None:
    """
    Write data as a YAML document, replacing any existing file.

    The document is rendered in memory first, written to a temporary file
    next to the target, then renamed over it. Readers see either the old
    file or the complete new one, never a partial write.

    Args:
        path: Destination file
        data: Plain data (dicts, lists, strings) to serialize

    Raises:
        StorageError: If serialization, writing or the final rename fails
    """
    path = Path(path)

    try:
        text = yaml.safe_dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise StorageError(f"Failed to serialize {path}: {e}") from e

    try:
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX
        )
    except (OSError, ValueError) as e:
        raise StorageError(f"Failed to create {path}: {e}") from e

    temp_file = Path(temp_name)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.chmod(temp_file, FILE_MODE)
        # Atomic rename
        temp_file.replace(path)
    except OSError as e:
        temp_file.unlink(missing_ok=True)
        raise StorageError(f"Failed to write {path}: {e}") from e

    logger.debug(f"Wrote {path}")


def is_temp_file(path: PathLike) -> bool:
    """True for a staging file left behind by an interrupted write_yaml."""
    name = Path(path).name
    return name.startswith('.') and name.endswith(TEMP_SUFFIX)
