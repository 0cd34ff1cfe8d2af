"""
KEYMAZE DEFINITIONS
===================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Tile palette (tile IDs)
- Character mappings for maze layouts
- Terrain costs
- Actions and their movement deltas

Import from here instead of duplicating constants across modules.

"""

from typing import Dict, Tuple
from enum import Enum, IntEnum

# ==========================================
# TILE PALETTE
# ==========================================

class TileID(IntEnum):
    """Tile IDs for the terrain grid representation."""
    WALL = 0            # Impassable
    OPEN = 1            # Ordinary floor
    MUD = 2             # Passable, costs more to enter
    KEY = 3             # Must be crossed before any goal counts
    GOAL = 4            # Any one of these ends the search
    INITIAL = 5         # Single start tile


# Reverse lookup for debugging
ID_TO_NAME: Dict[int, str] = {tile.value: tile.name for tile in TileID}

# ==========================================
# CHARACTER MAPPINGS (layout format)
# ==========================================

CHAR_TO_TILE: Dict[str, TileID] = {
    'X': TileID.WALL,
    '.': TileID.OPEN,
    'M': TileID.MUD,
    'K': TileID.KEY,
    'G': TileID.GOAL,
    'I': TileID.INITIAL,
}

TILE_TO_CHAR: Dict[int, str] = {tile.value: char for char, tile in CHAR_TO_TILE.items()}

# ==========================================
# TERRAIN COSTS
# ==========================================
# Cost of a move is charged on the DESTINATION tile

TILE_COSTS: Dict[int, int] = {
    TileID.OPEN: 1,
    TileID.INITIAL: 1,
    TileID.GOAL: 1,
    TileID.KEY: 1,
    TileID.MUD: 3,
}

# ==========================================
# ACTIONS (4-connected, no diagonals)
# ==========================================

class Action(str, Enum):
    """Move tokens as they appear in a solution."""
    UP = 'U'
    DOWN = 'D'
    LEFT = 'L'
    RIGHT = 'R'


# Fixed evaluation order; neighbor generation and tie-breaking depend on it
ACTION_ORDER: Tuple[Action, ...] = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)

# (dcol, drow)
ACTION_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}

TOKEN_TO_ACTION: Dict[str, Action] = {action.value: action for action in Action}
