"""
KEYMAZE Simulation Module
=========================
Search and validation components for two-stage mazes.

This module contains:
- search_node: Immutable search tree nodes
- solver: Two-phase weighted best-first search (key, then goal)
- validator: Independent replay of candidate solutions
- analysis: networkx reachability / optimal-cost oracle
"""

from .search_node import SearchNode
from .solver import (
    TwoPhaseSearch,
    SearchSession,
    SearchPhase,
    SolverOptions,
    SolverDiagnostics,
    solve_maze,
)
from .validator import (
    SolutionCheck,
    SolutionValidator,
    validate_solution,
    trace_positions,
    INVALID_COST,
)
from .analysis import MazeAnalyzer, ReachabilityReport

__all__ = [
    'SearchNode',
    'TwoPhaseSearch',
    'SearchSession',
    'SearchPhase',
    'SolverOptions',
    'SolverDiagnostics',
    'solve_maze',
    'SolutionCheck',
    'SolutionValidator',
    'validate_solution',
    'trace_positions',
    'INVALID_COST',
    'MazeAnalyzer',
    'ReachabilityReport',
]
