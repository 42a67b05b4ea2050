"""
Game records and their file-per-game store.
"""

from .game import Game, NIL_UUID
from .store import GameStore, game_filename

__all__ = [
    'Game',
    'NIL_UUID',
    'GameStore',
    'game_filename',
]
