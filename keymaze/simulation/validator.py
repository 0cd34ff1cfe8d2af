"""
SOLUTION VALIDATOR
==================
Replays a candidate action sequence against a MazeGrid, independently of the
search engine, to confirm legality, key-before-goal ordering and total cost.

A failed check is a normal result, never an exception:
- Stepping into a wall or off the grid -> (False, -1)
- Unknown action token or no candidate at all -> (False, -1)
- Legal walk that does not end on a goal with the key crossed -> (False, cost)
"""

import logging
from typing import List, NamedTuple, Optional, Sequence

from keymaze.core.definitions import TOKEN_TO_ACTION
from keymaze.data.maze_core import MazeGrid, Position

logger = logging.getLogger(__name__)

INVALID_COST = -1


class SolutionCheck(NamedTuple):
    """Outcome of replaying a candidate: (is_solution, cost)."""
    is_solution: bool
    cost: int


class SolutionValidator:
    """Checks candidate solutions for one maze."""

    def __init__(self, grid: MazeGrid):
        self.grid = grid

    def check(self, actions: Optional[Sequence[str]]) -> SolutionCheck:
        """
        Replay actions from the initial tile.

        Args:
            actions: Sequence of tokens "U", "D", "L", "R"

        Returns:
            SolutionCheck; cost is the sum of destination move costs, or -1
            when the walk itself is illegal
        """
        if actions is None:
            return SolutionCheck(False, INVALID_COST)

        grid = self.grid
        position = grid.initial_position
        cost = 0
        has_key = not grid.has_key

        for step, token in enumerate(actions):
            action = TOKEN_TO_ACTION.get(getattr(token, 'value', token))
            if action is None:
                logger.warning("Unknown action %r at step %d", token, step)
                return SolutionCheck(False, INVALID_COST)

            position = position.step(action)
            if not grid.in_bounds(position) or grid.is_wall(position):
                logger.debug("Illegal move %s into %s at step %d", action.value, position, step)
                return SolutionCheck(False, INVALID_COST)

            if grid.is_key(position):
                has_key = True
            cost += grid.move_cost(position)

        return SolutionCheck(grid.is_goal(position) and has_key, cost)


def validate_solution(grid: MazeGrid, actions: Optional[Sequence[str]]) -> SolutionCheck:
    """Convenience wrapper around SolutionValidator(grid).check(actions)."""
    return SolutionValidator(grid).check(actions)


def trace_positions(grid: MazeGrid, actions: Sequence[str]) -> List[Position]:
    """
    Cells visited by an action sequence, initial tile first.

    Stops before the first move that is unknown, off the grid or into a wall.
    """
    position = grid.initial_position
    cells = [position]
    for token in actions:
        action = TOKEN_TO_ACTION.get(getattr(token, 'value', token))
        if action is None:
            break
        target = position.step(action)
        if not grid.in_bounds(target) or grid.is_wall(target):
            break
        position = target
        cells.append(position)
    return cells
