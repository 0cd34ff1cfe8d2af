"""Tests for the command-line entry point."""

import pytest

import main
from keymaze.data.maze_core import MazeGrid

from maze_fixtures import SIMPLE_KEY, KEY_UNREACHABLE


@pytest.fixture
def write_maze(tmp_path):
    def _write(layout, name="maze.txt"):
        maze_file = tmp_path / name
        maze_file.write_text("\n".join(layout) + "\n")
        return str(maze_file)
    return _write


def test_solved_maze_exits_zero(write_maze, capsys):
    code = main.main([write_maze(SIMPLE_KEY)])
    out = capsys.readouterr().out
    assert code == main.EXIT_SOLVED
    assert "Actions: RRRRDD" in out
    assert "Valid: True" in out
    assert "Cost: 6" in out
    assert "MAZE: 5x7, key=yes, goals=1" in out
    assert "XI***KX" in out


def test_unsolvable_maze_exits_one(write_maze, capsys):
    code = main.main([write_maze(KEY_UNREACHABLE)])
    out = capsys.readouterr().out
    assert code == main.EXIT_NO_SOLUTION
    assert "NO SOLUTION" in out
    assert "key unreachable" in out


def test_bad_symbol_exits_two(write_maze):
    assert main.main([write_maze(["XXXX", "XIZG", "XXXX"])]) == main.EXIT_BAD_LAYOUT


def test_missing_file_exits_two(tmp_path):
    assert main.main([str(tmp_path / "nope.txt")]) == main.EXIT_BAD_LAYOUT


def test_analyze_reports_optimal_cost(write_maze, capsys):
    code = main.main([write_maze(SIMPLE_KEY), "--analyze", "--no-render"])
    out = capsys.readouterr().out
    assert code == main.EXIT_SOLVED
    assert "Optimal cost: 6" in out
    assert "Legend" not in out


def test_analyze_unsolvable(write_maze, capsys):
    main.main([write_maze(KEY_UNREACHABLE), "-a"])
    assert "Optimal cost: unsolvable" in capsys.readouterr().out


def test_cost_only_flag(write_maze, capsys):
    code = main.main([write_maze(SIMPLE_KEY), "--cost-only"])
    assert code == main.EXIT_SOLVED
    assert "Valid: True" in capsys.readouterr().out


def test_quiet_prints_nothing(write_maze, capsys):
    code = main.main([write_maze(SIMPLE_KEY), "--quiet"])
    assert code == main.EXIT_SOLVED
    assert capsys.readouterr().out == ""


def test_run_pipeline_result_dict():
    result = main.run_pipeline(MazeGrid(SIMPLE_KEY), verbose=False)
    assert result['path'] == ["R", "R", "R", "R", "D", "D"]
    assert result['is_solution']
    assert result['cost'] == 6
    assert result['diagnostics'].success
    assert result['report'] is None
