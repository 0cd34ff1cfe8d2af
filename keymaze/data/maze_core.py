"""
KEYMAZE MAZE CORE
=================
Grid model for two-stage mazes: parse a textual layout once, then answer
terrain queries for the search engine and the solution validator.

LAYOUT FORMAT:
==============
- Rectangular block of equal-length rows, one character per cell
- 'X' wall, '.' open, 'M' mud (cost 3), 'I' initial (exactly one),
  'K' key (zero or one), 'G' goal (one or more)
- Anything else is a format error

The grid model is a read-only terrain oracle. Search bookkeeping (key flag,
exclusion set) lives in the solver's session, not here.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from keymaze.core.definitions import (
    TileID, Action, ID_TO_NAME, CHAR_TO_TILE, TILE_TO_CHAR, TILE_COSTS,
    ACTION_ORDER, ACTION_DELTAS,
)
from keymaze.exceptions import MazeFormatError

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """Grid address as (column, row)."""
    col: int
    row: int

    def step(self, action: Action) -> 'Position':
        """Neighbor in the given direction (no bounds check)."""
        dcol, drow = ACTION_DELTAS[action]
        return Position(self.col + dcol, self.row + drow)

    def manhattan(self, other: 'Position') -> int:
        return abs(self.col - other.col) + abs(self.row - other.row)

    def __str__(self) -> str:
        return f"({self.col}, {self.row})"


# ==========================================
# GRID MODEL
# ==========================================

class MazeGrid:
    """
    Immutable terrain/cost/goal/key facts for a single maze.

    Handles:
    - Layout parsing and validation
    - Legality queries (bounds, walls) and neighbor generation
    - Destination-charged move costs
    - Goal/key membership and the Manhattan heuristic
    """

    def __init__(self, layout: Sequence[str]):
        """
        Parse a maze layout.

        Args:
            layout: Rows of the maze, top to bottom, all the same length

        Raises:
            MazeFormatError: Empty or ragged layout, unknown symbol, missing or
                repeated initial tile, repeated key, no goal
        """
        rows = [str(line) for line in layout]
        if not rows or not rows[0]:
            raise MazeFormatError("Maze layout is empty")

        width = len(rows[0])
        for r, line in enumerate(rows):
            if len(line) != width:
                raise MazeFormatError(
                    f"Maze rows must have equal length: row {r} has {len(line)} "
                    f"characters, expected {width}"
                )

        terrain = np.empty((len(rows), width), dtype=np.int8)
        for r, line in enumerate(rows):
            for c, char in enumerate(line):
                tile = CHAR_TO_TILE.get(char)
                if tile is None:
                    raise MazeFormatError(
                        f"Maze formatted invalidly: unknown symbol {char!r} at row {r}, column {c}"
                    )
                terrain[r, c] = tile

        terrain.setflags(write=False)
        self.terrain = terrain
        self.rows, self.cols = terrain.shape

        initials = self._find_all_positions(TileID.INITIAL)
        if not initials:
            raise MazeFormatError("Maze has no initial tile 'I'")
        if len(initials) > 1:
            raise MazeFormatError(f"Maze has {len(initials)} initial tiles, expected exactly one")

        keys = self._find_all_positions(TileID.KEY)
        if len(keys) > 1:
            raise MazeFormatError(f"Maze has {len(keys)} key tiles, expected at most one")

        goals = self._find_all_positions(TileID.GOAL)
        if not goals:
            raise MazeFormatError("Maze has no goal tile 'G'")

        self.initial_position: Position = initials[0]
        self.key_position: Optional[Position] = keys[0] if keys else None
        self.goal_positions: FrozenSet[Position] = frozenset(goals)
        # Stable order for nearest-goal scans
        self._goal_list: List[Position] = goals

        logger.debug(
            "Parsed %dx%d maze: initial=%s key=%s goals=%d",
            self.rows, self.cols, self.initial_position, self.key_position, len(goals)
        )

    # ------------------------------------------
    # Construction helpers
    # ------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'MazeGrid':
        return cls(rows)

    @classmethod
    def from_text(cls, text: str) -> 'MazeGrid':
        """Build from a multi-line string; surrounding empty lines are ignored.

        Spaces and tabs are not maze symbols, so indentation or trailing
        whitespace inside a row raises MazeFormatError.
        """
        lines = text.strip('\r\n').split('\n')
        return cls([line.rstrip('\r') for line in lines])

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> 'MazeGrid':
        """Load a layout from a text file, one maze row per line."""
        text = Path(filepath).read_text(encoding='utf-8')
        return cls.from_text(text)

    def _find_all_positions(self, tile: TileID) -> List[Position]:
        """Find all occurrences of a tile ID in reading order."""
        rows, cols = np.where(self.terrain == tile)
        return [Position(int(c), int(r)) for r, c in zip(rows.tolist(), cols.tolist())]

    # ------------------------------------------
    # Terrain queries
    # ------------------------------------------

    @property
    def has_key(self) -> bool:
        return self.key_position is not None

    def in_bounds(self, position: Position) -> bool:
        col, row = position
        return 0 <= row < self.rows and 0 <= col < self.cols

    def tile_at(self, position: Position) -> TileID:
        col, row = position
        return TileID(int(self.terrain[row, col]))

    def is_wall(self, position: Position) -> bool:
        return self.tile_at(position) == TileID.WALL

    def is_goal(self, position: Position) -> bool:
        return position in self.goal_positions

    def is_key(self, position: Position) -> bool:
        return self.key_position is not None and position == self.key_position

    def move_cost(self, position: Position) -> int:
        """Cost of moving ONTO position: 3 for mud, 1 for any other passable tile."""
        tile = self.tile_at(position)
        if tile == TileID.WALL:
            raise ValueError(f"Asked cost of a wall cell {position}")
        return TILE_COSTS[tile]

    def transitions(self, position: Position,
                    excluded: Iterable[Position] = ()) -> Dict[Action, Position]:
        """
        Legal moves out of position.

        Args:
            position: Cell to move from
            excluded: Cells the caller has barred for the current search phase

        Returns:
            Mapping action -> destination, in ACTION_ORDER, keeping only
            destinations that are in bounds, not walls and not excluded
        """
        if not isinstance(excluded, (set, frozenset)):
            excluded = set(excluded)
        position = Position(*position)
        result: Dict[Action, Position] = {}
        for action in ACTION_ORDER:
            target = position.step(action)
            if (self.in_bounds(target)
                    and not self.is_wall(target)
                    and target not in excluded):
                result[action] = target
        return result

    def heuristic(self, position: Position, key_found: bool) -> int:
        """
        Manhattan estimate to the current target.

        Distance to the nearest goal once the key is found (or when the maze
        has no key), otherwise distance to the key. Mud is ignored, so the
        estimate is not admissible against true terrain cost.
        """
        position = Position(*position)
        if not key_found and self.key_position is not None:
            return position.manhattan(self.key_position)
        return min(position.manhattan(goal) for goal in self._goal_list)

    # ------------------------------------------
    # Debugging / console output
    # ------------------------------------------

    def count_tiles(self) -> Dict[str, int]:
        """Count occurrences of each tile type."""
        counts = {}
        values, freq = np.unique(self.terrain, return_counts=True)
        for value, count in zip(values.tolist(), freq.tolist()):
            counts[ID_TO_NAME[value]] = int(count)
        return counts

    def to_rows(self) -> List[str]:
        return [''.join(TILE_TO_CHAR[int(v)] for v in row) for row in self.terrain]

    def render(self, path_positions: Iterable[Position] = (), marker: str = '*',
               show_legend: bool = False) -> str:
        """
        Create ASCII rendering of the maze with an optional path overlay.

        Args:
            path_positions: Cells to mark; initial, key and goal tiles keep their symbol
            marker: Character used for path cells
            show_legend: Whether to include legend in output

        Returns:
            ASCII string representation of the grid
        """
        chars = [list(line) for line in self.to_rows()]
        for col, row in path_positions:
            if not (0 <= row < self.rows and 0 <= col < self.cols):
                continue
            if self.terrain[row, col] in (TileID.OPEN, TileID.MUD):
                chars[row][col] = marker

        result = '\n'.join(''.join(line) for line in chars)
        if show_legend:
            result += '\n\nLegend: X wall, . open, M mud (cost 3), I initial'
            result += f'\n        K key, G goal, {marker} path'
        return result

    def __repr__(self) -> str:
        return (f"MazeGrid(rows={self.rows}, cols={self.cols}, initial={self.initial_position}, "
                f"key={self.key_position}, goals={len(self.goal_positions)})")
