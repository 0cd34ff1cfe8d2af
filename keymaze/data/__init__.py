"""
KEYMAZE Data Module
===================
Maze layout parsing and the read-only grid model.
"""

from .maze_core import Position, MazeGrid

__all__ = ['Position', 'MazeGrid']
