"""
KEYMAZE Core Module
===================

Constants and type definitions shared by the grid model, the search engine
and the solution validator.

Usage:
    from keymaze.core import TileID, Action, ACTION_ORDER
"""

from keymaze.core.definitions import (
    TileID,
    Action,
    ID_TO_NAME,
    CHAR_TO_TILE,
    TILE_TO_CHAR,
    TILE_COSTS,
    ACTION_ORDER,
    ACTION_DELTAS,
    TOKEN_TO_ACTION,
)

__all__ = [
    'TileID',
    'Action',
    'ID_TO_NAME',
    'CHAR_TO_TILE',
    'TILE_TO_CHAR',
    'TILE_COSTS',
    'ACTION_ORDER',
    'ACTION_DELTAS',
    'TOKEN_TO_ACTION',
]
