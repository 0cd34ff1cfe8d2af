"""
Search tree nodes for the two-phase maze search.

Each phase grows its own tree from its own root; nodes are never re-parented.
A node keeps the cost of the path from its phase root so the frontier can
rank it without walking the tree again.
"""

from dataclasses import dataclass
from typing import List, Optional

from keymaze.core.definitions import Action
from keymaze.data.maze_core import MazeGrid, Position


@dataclass(frozen=True, eq=False)
class SearchNode:
    """A position, the action that led to it, and the node it was expanded from."""
    position: Position
    action: Optional[Action] = None
    parent: Optional['SearchNode'] = None
    path_cost: int = 0  # move costs from the phase root (exclusive) to here (inclusive)

    def __post_init__(self):
        if (self.action is None) != (self.parent is None):
            raise ValueError("Only a root node may have no action and no parent")

    @classmethod
    def root(cls, position: Position) -> 'SearchNode':
        return cls(position=Position(*position))

    def child(self, action: Action, position: Position, step_cost: int) -> 'SearchNode':
        return SearchNode(
            position=Position(*position),
            action=action,
            parent=self,
            path_cost=self.path_cost + step_cost,
        )

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        depth = 0
        node = self
        while node.parent is not None:
            depth += 1
            node = node.parent
        return depth

    def path(self) -> List[str]:
        """
        Action tokens from the phase root to this node.

        The root's own (empty) action is not included, so a root yields []
        and a child of the root yields a single action.
        """
        actions = []
        node = self
        while node.parent is not None:
            actions.append(node.action.value)
            node = node.parent
        actions.reverse()
        return actions

    def positions(self) -> List[Position]:
        """Positions from the phase root to this node, both included."""
        cells = []
        node = self
        while node is not None:
            cells.append(node.position)
            node = node.parent
        cells.reverse()
        return cells

    def total_cost(self, grid: MazeGrid, key_found: bool, use_heuristic: bool = True) -> int:
        """Frontier ranking key: path cost plus the Manhattan estimate to the current target."""
        if not use_heuristic:
            return self.path_cost
        return self.path_cost + grid.heuristic(self.position, key_found)

    def __repr__(self) -> str:
        action = self.action.value if self.action is not None else None
        return f"SearchNode(position={self.position}, action={action}, path_cost={self.path_cost})"
