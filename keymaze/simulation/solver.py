"""
TWO-PHASE WEIGHTED BEST-FIRST SEARCH
====================================
Finds a cheap route through a maze that must be crossed in two ordered
stages: first reach the key tile, then reach any goal tile.

This module provides:
1. SEARCH SESSION - Per-run bookkeeping (phase, key flag, exclusion set)
2. SOLVER OPTIONS / DIAGNOSTICS - Configuration and run statistics
3. TWO-PHASE SEARCH - The frontier loop and the key -> goal phase switch

Frontier ordering:
    rank(node) = path_cost(node) + manhattan(node, target)
    target = key while the key phase is active, else the nearest goal.
    Ties are broken by insertion order (monotonic counter in the heap entry).

Mud is ignored by the Manhattan term, so the estimate is not admissible and
returned routes are best-effort rather than provably optimal. Goals are also
accepted as soon as they are generated. SolverOptions.cost_only() drops the
heuristic term; since entering a key or goal always costs 1, accepting on
generation then still yields the cheapest route for each phase.

A popped node whose position is already excluded is a stale duplicate and
is skipped, so each position is expanded at most once per phase.

"""

import heapq
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from keymaze.data.maze_core import MazeGrid, Position
from keymaze.exceptions import SearchStateError
from keymaze.simulation.search_node import SearchNode

# Configure logging for this module
logger = logging.getLogger(__name__)


# ==========================================
# DATA STRUCTURES
# ==========================================

class SearchPhase(Enum):
    """Ordered stages of a search run."""
    SEEKING_KEY = "seeking_key"
    SEEKING_GOAL = "seeking_goal"
    FINISHED = "finished"


@dataclass
class SearchSession:
    """Mutable search state for one run, kept apart from the read-only grid.

    The exclusion set holds positions that must not be re-entered during the
    current phase; it is emptied when the key is captured.
    """
    phase: SearchPhase
    key_found: bool
    excluded: Set[Position] = field(default_factory=set)
    key_segment: List[str] = field(default_factory=list)

    @classmethod
    def for_grid(cls, grid: MazeGrid) -> 'SearchSession':
        """Fresh session; mazes without a key start directly in the goal phase."""
        if grid.has_key:
            return cls(phase=SearchPhase.SEEKING_KEY, key_found=False)
        return cls(phase=SearchPhase.SEEKING_GOAL, key_found=True)

    def mark_key_found(self) -> None:
        if self.key_found:
            return
        self.key_found = True
        self.phase = SearchPhase.SEEKING_GOAL

    def exclude(self, position: Position) -> None:
        self.excluded.add(position)

    def clear_exclusions(self) -> None:
        self.excluded.clear()

    def is_fresh(self, grid: MazeGrid) -> bool:
        """True if nothing has been recorded yet for this grid."""
        return (
            self.phase is not SearchPhase.FINISHED and
            self.key_found == (not grid.has_key) and
            not self.excluded and
            not self.key_segment
        )


@dataclass
class SolverOptions:
    """Configuration options for the solver."""
    use_heuristic: bool = True

    @classmethod
    def cost_only(cls) -> 'SolverOptions':
        """Rank the frontier by accumulated terrain cost alone."""
        return cls(use_heuristic=False)


@dataclass
class SolverDiagnostics:
    """Detailed diagnostics from a solver run.

    Provides statistics for debugging and performance analysis.
    """
    success: bool = False
    nodes_expanded: int = 0
    nodes_generated: int = 0
    max_frontier_size: int = 0
    phase_reached: SearchPhase = SearchPhase.SEEKING_KEY
    key_segment_length: int = 0
    path_length: int = 0
    time_taken_ms: float = 0.0
    failure_reason: str = ""

    def summary(self) -> str:
        """Human-readable summary of solver performance."""
        status = "SUCCESS" if self.success else f"FAILED: {self.failure_reason}"
        return f"""
=== Solver Diagnostics ===
Status: {status}
Nodes Expanded: {self.nodes_expanded:,}
Nodes Generated: {self.nodes_generated:,}
Max Frontier Size: {self.max_frontier_size:,}
Phase Reached: {self.phase_reached.value}
Key Segment Length: {self.key_segment_length}
Path Length: {self.path_length}
Time Taken: {self.time_taken_ms:.1f}ms
=========================="""


# ==========================================
# TWO-PHASE SEARCH
# ==========================================

class TwoPhaseSearch:
    """
    Weighted best-first search that reaches the key, then a goal.

    The first phase searches from the initial tile toward the key. When the
    key is generated the frontier is thrown away, the exclusion set is
    cleared and a new tree is rooted on the key tile. The second phase ends
    as soon as a goal is generated. The returned route is the key segment
    followed by the goal segment.
    """

    def __init__(self, grid: MazeGrid, options: Optional[SolverOptions] = None):
        """
        Initialize the solver.

        Args:
            grid: MazeGrid to solve (never modified)
            options: SolverOptions; defaults to heuristic-guided ordering
        """
        self.grid = grid
        self.options = options or SolverOptions()

    def solve(self, session: Optional[SearchSession] = None) -> Optional[List[str]]:
        """
        Find a route through the maze.

        Args:
            session: Optional fresh SearchSession, e.g. to inspect the phase
                and exclusions afterwards

        Returns:
            List of action tokens ("U", "D", "L", "R"), or None if no route exists

        Raises:
            SearchStateError: session was already used for a search
        """
        path, _ = self.solve_with_diagnostics(session)
        return path

    def solve_with_diagnostics(self, session: Optional[SearchSession] = None
                               ) -> Tuple[Optional[List[str]], SolverDiagnostics]:
        """Like solve(), also returning SolverDiagnostics for the run."""
        if session is None:
            session = SearchSession.for_grid(self.grid)
        elif not session.is_fresh(self.grid):
            raise SearchStateError(
                f"Search session is stale (phase={session.phase.value}, "
                f"key_found={session.key_found}, excluded={len(session.excluded)}); "
                f"start each search with SearchSession.for_grid()"
            )

        diagnostics = SolverDiagnostics(phase_reached=session.phase)
        start_time = time.time()

        path = self._search(session, diagnostics)

        diagnostics.time_taken_ms = (time.time() - start_time) * 1000
        diagnostics.phase_reached = session.phase
        diagnostics.key_segment_length = len(session.key_segment)
        session.phase = SearchPhase.FINISHED

        if path is None:
            logger.info("No solution: %s (%d nodes expanded)",
                        diagnostics.failure_reason, diagnostics.nodes_expanded)
        else:
            diagnostics.success = True
            diagnostics.path_length = len(path)
            logger.info("Solution found: %d actions, %d nodes expanded",
                        len(path), diagnostics.nodes_expanded)
        return path, diagnostics

    def _rank(self, node: SearchNode, session: SearchSession) -> int:
        return node.total_cost(self.grid, session.key_found, self.options.use_heuristic)

    def _search(self, session: SearchSession, diagnostics: SolverDiagnostics) -> Optional[List[str]]:
        grid = self.grid

        # Priority queue: (rank, counter, node); counter keeps equal ranks FIFO
        root = SearchNode.root(grid.initial_position)
        frontier = [(self._rank(root, session), 0, root)]
        counter = 1

        while frontier:
            diagnostics.max_frontier_size = max(diagnostics.max_frontier_size, len(frontier))
            _, _, node = heapq.heappop(frontier)
            # Stale duplicate of a position already expanded in this phase
            if node.position in session.excluded:
                continue
            diagnostics.nodes_expanded += 1

            for action, target in grid.transitions(node.position, session.excluded).items():
                child = node.child(action, target, grid.move_cost(target))
                diagnostics.nodes_generated += 1

                if session.phase is SearchPhase.SEEKING_KEY and grid.is_key(target):
                    # Phase switch: restart from the key with a clean slate
                    session.key_segment = child.path()
                    session.mark_key_found()
                    session.clear_exclusions()
                    key_root = SearchNode.root(target)
                    frontier = [(self._rank(key_root, session), counter, key_root)]
                    counter += 1
                    logger.debug("Key captured at %s after %d actions (cost %d)",
                                 target, len(session.key_segment), child.path_cost)
                    break

                if session.key_found and grid.is_goal(target):
                    logger.debug("Goal reached at %s", target)
                    return session.key_segment + child.path()

                if not grid.is_key(target):
                    session.exclude(node.position)

                heapq.heappush(frontier, (self._rank(child, session), counter, child))
                counter += 1

        if session.phase is SearchPhase.SEEKING_KEY:
            diagnostics.failure_reason = "key unreachable"
        elif grid.has_key:
            diagnostics.failure_reason = "no goal reachable after key"
        else:
            diagnostics.failure_reason = "no goal reachable"
        return None


def solve_maze(grid: MazeGrid, options: Optional[SolverOptions] = None) -> Optional[List[str]]:
    """
    Convenience function to solve a maze with TwoPhaseSearch.

    Args:
        grid: MazeGrid to solve
        options: Optional SolverOptions

    Returns:
        List of action tokens, or None if no route exists
    """
    return TwoPhaseSearch(grid, options).solve()
