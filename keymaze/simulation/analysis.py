"""
Reachability Analysis - Independent Solvability Oracle
======================================================

Builds a directed graph of passable cells with networkx and answers, without
running the two-phase search:
- Is the key reachable from the initial tile?
- Which goals are reachable from the key (or from the initial tile if the
  maze has no key)?
- What is the true minimum two-stage cost?

Graph Formulation:
    Nodes: every non-wall cell
    Edges: u -> v for 4-connected neighbors, weight = move_cost(v)
    (cost is charged on the destination, so the graph is directed)

Optimal two-stage cost:
    d(I, K) + min over goals g of d(K, g)      when a key exists
    min over goals g of d(I, g)                otherwise

The search engine's heuristic is not admissible, so its route may cost more
than `optimal_cost`; the gap is reported, never treated as an error.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import networkx as nx

from keymaze.core.definitions import ACTION_ORDER
from keymaze.data.maze_core import MazeGrid, Position

logger = logging.getLogger(__name__)


@dataclass
class ReachabilityReport:
    """Result of reachability analysis."""
    key_reachable: bool
    reachable_goals: List[Position] = field(default_factory=list)
    optimal_cost: Optional[int] = None
    passable_cells: int = 0

    @property
    def solvable(self) -> bool:
        return self.optimal_cost is not None

    def to_dict(self) -> Dict:
        return {
            'key_reachable': self.key_reachable,
            'reachable_goals': [tuple(g) for g in self.reachable_goals],
            'optimal_cost': self.optimal_cost,
            'solvable': self.solvable,
            'passable_cells': self.passable_cells,
        }


class MazeAnalyzer:
    """
    Graph-theoretic checks on a MazeGrid.

    Used to confirm no-solution results and to measure how far a returned
    route is from the cheapest one.
    """

    def __init__(self, grid: MazeGrid):
        self.grid = grid
        self.graph = self._build_graph()

    def _build_graph(self) -> nx.DiGraph:
        grid = self.grid
        G = nx.DiGraph()
        for row in range(grid.rows):
            for col in range(grid.cols):
                cell = Position(col, row)
                if grid.is_wall(cell):
                    continue
                G.add_node(cell, tile=grid.tile_at(cell).name)
                for action in ACTION_ORDER:
                    target = cell.step(action)
                    if grid.in_bounds(target) and not grid.is_wall(target):
                        G.add_edge(cell, target, weight=grid.move_cost(target))
        return G

    def _distances_from(self, source: Position) -> Dict[Position, int]:
        return nx.single_source_dijkstra_path_length(self.graph, source, weight='weight')

    def report(self) -> ReachabilityReport:
        """Run the analysis."""
        grid = self.grid
        from_initial = self._distances_from(grid.initial_position)

        if grid.has_key:
            key_reachable = grid.key_position in from_initial
            if not key_reachable:
                logger.info("Key at %s is unreachable from %s",
                            grid.key_position, grid.initial_position)
                return ReachabilityReport(
                    key_reachable=False,
                    passable_cells=self.graph.number_of_nodes(),
                )
            to_key = from_initial[grid.key_position]
            from_key = self._distances_from(grid.key_position)
        else:
            key_reachable = True
            to_key = 0
            from_key = from_initial

        reachable_goals = sorted(
            (g for g in grid.goal_positions if g in from_key),
            key=lambda g: (g.row, g.col),
        )
        optimal_cost = None
        if reachable_goals:
            optimal_cost = to_key + min(from_key[g] for g in reachable_goals)

        logger.debug("Reachability: key=%s goals=%d optimal=%s",
                     key_reachable, len(reachable_goals), optimal_cost)
        return ReachabilityReport(
            key_reachable=key_reachable,
            reachable_goals=reachable_goals,
            optimal_cost=optimal_cost,
            passable_cells=self.graph.number_of_nodes(),
        )
