from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Tuple

from constraints import build_constraints
from model import Grid
from solver import DEFAULT_MAX_UNCHANGED_ROUNDS, SolverResult, SolverStatus, SudokuSolver
from strategies import build_basic_strategies, build_strategies

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


def load_puzzle(path: str) -> Tuple[Grid, bool]:
    """Read a saved puzzle: either the JSON layout or plain puzzle text."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if text.lstrip().startswith("{"):
        return apply_puzzle(json.loads(text))
    return Grid.from_string(text), False


def apply_puzzle(data: dict) -> Tuple[Grid, bool]:
    grid = data.get("grid")
    if not isinstance(grid, list) or len(grid) != 9:
        raise ValueError("Invalid grid")
    return Grid.from_rows(grid), bool(data.get("anti_knight", False))


def serialize_result(result: SolverResult, anti_knight: bool) -> dict:
    return {
        "version": 1,
        "grid": result.grid.to_rows(),
        "anti_knight": anti_knight,
        "status": result.status,
        "solved": result.solved,
        "message": result.message,
        "rounds": result.rounds,
        "duration_ms": result.duration_ms,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a sudoku by logical deduction only (no guessing)."
    )
    parser.add_argument(
        "puzzle",
        nargs="?",
        help="81 characters, row by row; 0 or . for blanks",
    )
    parser.add_argument("--file", help="puzzle file (JSON or plain text)")
    parser.add_argument(
        "--anti-knight",
        action="store_true",
        help="cells a knight's move apart must differ",
    )
    parser.add_argument(
        "--basic",
        action="store_true",
        help="only hidden singles, naked subsets and pointing",
    )
    parser.add_argument(
        "--max-unchanged",
        type=int,
        default=DEFAULT_MAX_UNCHANGED_ROUNDS,
        help="rounds without progress before giving up",
    )
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("--verbose", action="store_true", help="trace every deduction")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if bool(args.puzzle) == bool(args.file):
        parser.print_usage(sys.stderr)
        print("error: give either a puzzle string or --file", file=sys.stderr)
        return EXIT_BAD_INPUT
    try:
        if args.file:
            grid, anti_knight = load_puzzle(args.file)
        else:
            grid, anti_knight = Grid.from_string(args.puzzle), False
        anti_knight = anti_knight or args.anti_knight
        solver = SudokuSolver(
            grid,
            constraints=build_constraints(anti_knight=anti_knight),
            strategies=build_basic_strategies() if args.basic else build_strategies(),
            max_unchanged_rounds=args.max_unchanged,
            verbose=args.verbose,
            logger=print if args.verbose else None,
        )
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    result = solver.solve()
    if args.json:
        print(json.dumps(serialize_result(result, anti_knight), indent=2))
    else:
        print(result.grid, end="")
        print(f"{result.message} ({result.solved_cells}/81 cells, {result.duration_ms} ms)")
    if result.status == SolverStatus.SOLVED:
        return EXIT_SOLVED
    return EXIT_UNSOLVED


if __name__ == "__main__":
    sys.exit(main())
