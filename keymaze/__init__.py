"""
KEYMAZE Source Package
======================

Minimum-cost routing through two-stage grid mazes: reach the key tile first,
then any goal tile, over walls and mud.

Submodules:
- core: Tile palette, actions and costs
- data: Layout parsing and the read-only grid model
- simulation: Two-phase search, solution validator, reachability analysis
"""

from keymaze.data.maze_core import MazeGrid, Position
from keymaze.simulation.solver import TwoPhaseSearch, SolverOptions, solve_maze
from keymaze.simulation.validator import validate_solution
from keymaze.exceptions import MazeFormatError, SearchStateError

__version__ = "1.0.0"

__all__ = [
    'MazeGrid',
    'Position',
    'TwoPhaseSearch',
    'SolverOptions',
    'solve_maze',
    'validate_solution',
    'MazeFormatError',
    'SearchStateError',
]
