import textwrap

import numpy as np
import pytest

from keymaze.core.definitions import Action, TileID
from keymaze.data.maze_core import MazeGrid, Position
from keymaze.exceptions import MazeFormatError

from maze_fixtures import SIMPLE_KEY, MUD_KEY, TWO_GOALS_MUD, NO_KEY_DETOUR


def test_parse_simple_key_maze():
    grid = MazeGrid(SIMPLE_KEY)
    assert (grid.rows, grid.cols) == (5, 7)
    assert grid.initial_position == Position(1, 1)
    assert grid.key_position == Position(5, 1)
    assert grid.goal_positions == {Position(5, 3)}
    assert grid.has_key
    assert grid.to_rows() == SIMPLE_KEY


def test_position_is_value_type():
    assert Position(2, 3) == (2, 3)
    assert hash(Position(2, 3)) == hash((2, 3))
    assert Position(2, 3).step(Action.UP) == Position(2, 2)
    assert Position(2, 3).step(Action.RIGHT) == Position(3, 3)
    assert Position(0, 0).manhattan(Position(3, 4)) == 7


def test_maze_without_key():
    grid = MazeGrid(NO_KEY_DETOUR)
    assert not grid.has_key
    assert grid.key_position is None
    assert not grid.is_key(Position(3, 3))


@pytest.mark.parametrize("layout, fragment", [
    (["XXXX", "XIZX", "XGXX"], "'Z'"),
    (["XXXX", "X..X", "XGXX"], "no initial"),
    (["XIIX", "XGXX"], "2 initial"),
    (["XIKK", "XGXX"], "2 key"),
    (["XIK.", "XXXX"], "no goal"),
    (["XIG", "XX"], "equal length"),
    ([], "empty"),
])
def test_malformed_layouts_rejected(layout, fragment):
    with pytest.raises(MazeFormatError) as excinfo:
        MazeGrid(layout)
    assert fragment in str(excinfo.value)


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        MazeGrid(["XI?G"])


def test_unknown_symbol_reports_location():
    with pytest.raises(MazeFormatError, match="row 1, column 2"):
        MazeGrid(["XXXX", "XI?X", "XGXX"])


def test_from_text_ignores_surrounding_empty_lines():
    text = textwrap.dedent("""

        XXXXXXX
        XI...KX
        X.....X
        X.X.XGX
        XXXXXXX

    """)
    grid = MazeGrid.from_text(text)
    assert grid.to_rows() == SIMPLE_KEY


def test_from_text_accepts_crlf():
    grid = MazeGrid.from_text("\r\n".join(SIMPLE_KEY) + "\r\n")
    assert grid.to_rows() == SIMPLE_KEY


@pytest.mark.parametrize("text", [
    "  XXXX\n  XIGX\n  XXXX\n",
    "XXXX \nXIGX \nXXXX \n",
    "XXXX\nXI\tG\nXXXX\n",
])
def test_from_text_rejects_whitespace_inside_rows(text):
    with pytest.raises(MazeFormatError, match="unknown symbol"):
        MazeGrid.from_text(text)


def test_from_file(tmp_path):
    maze_file = tmp_path / "maze.txt"
    maze_file.write_text("\n".join(MUD_KEY) + "\n")
    grid = MazeGrid.from_file(maze_file)
    assert grid.key_position == Position(3, 3)
    assert grid.tile_at(Position(2, 2)) == TileID.MUD


def test_terrain_is_read_only():
    grid = MazeGrid(SIMPLE_KEY)
    assert isinstance(grid.terrain, np.ndarray)
    with pytest.raises(ValueError):
        grid.terrain[1, 1] = TileID.WALL


def test_transitions_follow_fixed_order():
    grid = MazeGrid(["...", ".I.", "..G"])
    moves = grid.transitions(Position(1, 1))
    assert list(moves.keys()) == [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]
    assert list(moves.values()) == [Position(1, 0), Position(1, 2), Position(0, 1), Position(2, 1)]


def test_transitions_skip_walls_and_exclusions():
    grid = MazeGrid(SIMPLE_KEY)
    assert grid.transitions(Position(1, 1)) == {
        Action.DOWN: Position(1, 2),
        Action.RIGHT: Position(2, 1),
    }
    assert grid.transitions(Position(1, 1), excluded={Position(2, 1)}) == {
        Action.DOWN: Position(1, 2),
    }


def test_transitions_stay_in_bounds():
    grid = MazeGrid(["IG"])
    assert grid.transitions(Position(0, 0)) == {Action.RIGHT: Position(1, 0)}
    assert not grid.in_bounds(Position(-1, 0))
    assert not grid.in_bounds(Position(0, 1))


def test_move_cost_charges_destination_tile():
    grid = MazeGrid(MUD_KEY)
    assert grid.move_cost(Position(2, 2)) == 3      # mud
    assert grid.move_cost(Position(2, 1)) == 1      # open
    assert grid.move_cost(Position(1, 1)) == 1      # initial
    assert grid.move_cost(Position(3, 3)) == 1      # key
    assert grid.move_cost(Position(5, 3)) == 1      # goal
    with pytest.raises(ValueError):
        grid.move_cost(Position(0, 0))


def test_goal_and_key_predicates():
    grid = MazeGrid(TWO_GOALS_MUD)
    assert grid.is_goal(Position(4, 1))
    assert grid.is_goal(Position(5, 3))
    assert not grid.is_goal(Position(1, 1))
    assert grid.is_key(Position(1, 1))
    assert not grid.is_key(Position(1, 2))


def test_heuristic_targets_key_then_nearest_goal():
    grid = MazeGrid(SIMPLE_KEY)
    start = grid.initial_position
    assert grid.heuristic(start, key_found=False) == 4
    assert grid.heuristic(start, key_found=True) == 6

    two_goals = MazeGrid(TWO_GOALS_MUD)
    key = two_goals.key_position
    # (4,1) is 3 away, (5,3) is 6 away
    assert two_goals.heuristic(key, key_found=True) == 3


def test_heuristic_without_key_uses_goals():
    grid = MazeGrid(NO_KEY_DETOUR)
    assert grid.heuristic(grid.initial_position, key_found=False) == 2
    assert grid.heuristic(grid.initial_position, key_found=True) == 2


def test_count_tiles():
    counts = MazeGrid(MUD_KEY).count_tiles()
    assert counts['MUD'] == 3
    assert counts['KEY'] == 1
    assert counts['GOAL'] == 1
    assert counts['INITIAL'] == 1
    assert sum(counts.values()) == 35


def test_render_overlays_path_on_open_cells_only():
    grid = MazeGrid(SIMPLE_KEY)
    path = [Position(1, 1), Position(2, 1), Position(3, 1), Position(4, 1),
            Position(5, 1), Position(5, 2), Position(5, 3)]
    lines = grid.render(path).split('\n')
    assert lines[1] == "XI***KX"
    assert lines[2] == "X....*X"
    assert lines[3] == "X.X.XGX"


def test_render_legend():
    rendered = MazeGrid(SIMPLE_KEY).render(show_legend=True)
    assert rendered.startswith("XXXXXXX")
    assert "Legend" in rendered
