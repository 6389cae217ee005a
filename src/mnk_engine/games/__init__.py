"""
Games module - game state contract and the m,n,k implementation.
"""

from mnk_engine.games.game_base import GameState
from mnk_engine.games.geometry import BoardGeometry, get_geometry, in_bounds, cell_bit, cells_of
from mnk_engine.games.mnk import MNKState

__all__ = [
    "GameState",
    "MNKState",
    "BoardGeometry",
    "get_geometry",
    "in_bounds",
    "cell_bit",
    "cells_of",
]
