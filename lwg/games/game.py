"""
Game data structures.

Defines the game launch record and its on-disk YAML representation.
"""

import dataclasses
import uuid
from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID

from lwg.errors import DecodeError

NIL_UUID = UUID(int=0)

# Field name -> YAML key. "excecutable_path" is misspelt on disk and kept
# that way so existing game files keep loading.
_YAML_KEYS = {
    'name': 'name',
    'executable_path': 'excecutable_path',
    'prefix_path': 'wine_prefix_path',
    'extra_args': 'extra_args',
    'id': 'id',
    'runner_id': 'runner_id',
}


@dataclass
class Game:
    """
    A game launch record.

    ``id`` is the identity of the game; ``name`` only feeds the file name.
    Path and argument fields are passed through to the runner unvalidated.
    ``runner_id`` refers to a runner by identifier only and is never checked
    against the runner collection.
    """
    name: str = ""
    executable_path: str = ""
    prefix_path: str = ""  # Wine prefix, empty when the runner needs none
    extra_args: str = ""
    id: UUID = NIL_UUID
    runner_id: UUID = NIL_UUID

    @classmethod
    def with_new_id(cls, draft: 'Game') -> 'Game':
        """
        Create a game from a draft, always minting a fresh identifier.

        Every field is copied from ``draft`` except ``id``, which is replaced
        by a new random UUID whatever the draft carried. The result is not
        registered anywhere; pass it to ``GameStore.add`` to persist it.

        Args:
            draft: Game holding the desired field values

        Returns:
            New Game with a fresh id
        """
        return dataclasses.replace(draft, id=uuid.uuid4())

    def runner_for(self, default_id: UUID) -> UUID:
        """Return this game's runner id, or ``default_id`` when none is set."""
        if self.runner_id == NIL_UUID:
            return default_id
        return self.runner_id

    def to_dict(self) -> Dict[str, str]:
        """Render the game as the mapping stored in its YAML file."""
        return {
            'name': self.name,
            'excecutable_path': self.executable_path,
            'wine_prefix_path': self.prefix_path,
            'extra_args': self.extra_args,
            'id': str(self.id),
            'runner_id': str(self.runner_id),
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'Game':
        """
        Build a game from a decoded YAML document.

        Missing keys fall back to empty strings and the nil UUID, as an
        older or hand-written file may omit them.

        Args:
            data: Decoded YAML document

        Returns:
            Game instance

        Raises:
            DecodeError: If the document is not a mapping, a field holds a
                mapping or list, or an identifier is not a valid UUID
        """
        if not isinstance(data, dict):
            raise DecodeError(
                f"Game record must be a YAML mapping, got {type(data).__name__}"
            )

        values: Dict[str, Any] = {}
        for attr, key in _YAML_KEYS.items():
            raw = data.get(key)
            if attr in ('id', 'runner_id'):
                values[attr] = parse_uuid(raw, key)
            else:
                values[attr] = _as_text(raw, key)

        return cls(**values)


def parse_uuid(raw: Any, key: str) -> UUID:
    """
    Parse a UUID field value; empty or missing means the nil UUID.

    Raises:
        DecodeError: If the value is not a valid UUID
    """
    if raw is None or raw == "":
        return NIL_UUID
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError as e:
        raise DecodeError(f"{key}: invalid UUID {raw!r}") from e


def _as_text(raw: Any, key: str) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (dict, list)):
        raise DecodeError(f"{key}: expected a string, got {type(raw).__name__}")
    return str(raw)
