"""
KEYMAZE - Main Entry Point
==========================
The pipeline: Load -> Solve -> Validate -> Render

Usage:
    # Solve a maze stored as a text file (one row per line)
    python main.py mazes/example.txt

    # Rank the frontier by path cost only (no Manhattan term)
    python main.py mazes/example.txt --cost-only

    # Compare against the networkx optimal-cost oracle
    python main.py mazes/example.txt --analyze

Exit codes: 0 validated solution, 1 no solution, 2 malformed layout.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from keymaze.data.maze_core import MazeGrid
from keymaze.exceptions import MazeFormatError
from keymaze.simulation.analysis import MazeAnalyzer
from keymaze.simulation.solver import SolverOptions, TwoPhaseSearch
from keymaze.simulation.validator import SolutionValidator, trace_positions

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_LAYOUT = 2


def load_maze(maze_path: str) -> MazeGrid:
    """
    Load a maze layout from disk.

    Raises:
        FileNotFoundError: maze_path does not exist
        MazeFormatError: layout is malformed
    """
    path = Path(maze_path)
    if not path.is_file():
        raise FileNotFoundError(f"Maze file not found: {path}")
    return MazeGrid.from_file(path)


def run_pipeline(grid: MazeGrid, options: Optional[SolverOptions] = None,
                 analyze: bool = False, render: bool = True,
                 verbose: bool = True) -> dict:
    """
    Run the complete pipeline on a parsed maze: Solve -> Validate -> Render

    Args:
        grid: Parsed maze
        options: SolverOptions for the search
        analyze: Also compute the optimal cost with MazeAnalyzer
        render: Print the maze with the route overlaid
        verbose: Print progress

    Returns:
        Complete result dict
    """
    if verbose:
        # User-facing output - keep print() for CLI summary
        print(f"\n{'='*60}")
        print(f"MAZE: {grid.rows}x{grid.cols}, key={'yes' if grid.has_key else 'no'}, "
              f"goals={len(grid.goal_positions)}")
        print(f"{'='*60}")

    logger.info("[STEP 1] Searching...")
    solver = TwoPhaseSearch(grid, options)
    path, diagnostics = solver.solve_with_diagnostics()
    logger.debug(diagnostics.summary())

    logger.info("[STEP 2] Validating...")
    check = SolutionValidator(grid).check(path)

    report = None
    if analyze:
        logger.info("[STEP 3] Analyzing reachability...")
        report = MazeAnalyzer(grid).report()

    if verbose:
        if path is None:
            print("  ✗ NO SOLUTION")
            print(f"  ✗ Reason: {diagnostics.failure_reason}")
        else:
            print(f"  ✓ Actions: {''.join(path)}")
            print(f"  ✓ Valid: {check.is_solution}")
            print(f"  ✓ Cost: {check.cost}")
        print(f"  ✓ Nodes expanded: {diagnostics.nodes_expanded}")
        if report is not None:
            optimal = report.optimal_cost if report.solvable else 'unsolvable'
            print(f"  ✓ Optimal cost: {optimal}")
        if render:
            positions = trace_positions(grid, path) if path else []
            print()
            print(grid.render(positions, show_legend=True))

    return {
        'path': path,
        'is_solution': check.is_solution,
        'cost': check.cost,
        'diagnostics': diagnostics,
        'report': report,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='KEYMAZE - two-stage (key, then goal) maze solver'
    )
    parser.add_argument(
        'maze', type=str,
        help='Path to a maze layout file'
    )
    parser.add_argument(
        '--cost-only', action='store_true',
        help='Order the frontier by path cost only (disable the heuristic)'
    )
    parser.add_argument(
        '--analyze', '-a', action='store_true',
        help='Report the optimal cost computed by the reachability oracle'
    )
    parser.add_argument(
        '--no-render', action='store_true',
        help='Do not print the maze with the route overlaid'
    )
    parser.add_argument(
        '--quiet', '-q', action='store_true',
        help='Suppress output'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        grid = load_maze(args.maze)
    except FileNotFoundError as e:
        logger.error(str(e))
        return EXIT_BAD_LAYOUT
    except MazeFormatError as e:
        logger.error(f"Invalid maze layout: {e}")
        return EXIT_BAD_LAYOUT

    options = SolverOptions.cost_only() if args.cost_only else SolverOptions()
    result = run_pipeline(
        grid,
        options=options,
        analyze=args.analyze,
        render=not args.no_render,
        verbose=not args.quiet,
    )
    return EXIT_SOLVED if result['is_solution'] else EXIT_NO_SOLUTION


if __name__ == "__main__":
    sys.exit(main())
