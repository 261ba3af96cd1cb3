from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from constraints import Constraint, build_constraints, constraints_satisfied
from model import Grid
from strategies import Strategy, build_strategies

Logger = Callable[[str], None]

DEFAULT_MAX_UNCHANGED_ROUNDS = 5


class SolverStatus:
    SOLVED = "solved"
    STUCK = "stuck"
    INVALID = "invalid"


@dataclass
class SolverResult:
    status: str
    grid: Grid
    rounds: int
    duration_ms: int
    solved_cells: int = 0
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status == SolverStatus.SOLVED and self.grid.is_solved()

    @property
    def values(self) -> List[int]:
        return self.grid.to_values()


class SudokuSolver:
    def __init__(
        self,
        grid: Grid,
        constraints: Optional[Sequence[Constraint]] = None,
        strategies: Optional[Sequence[Strategy]] = None,
        max_unchanged_rounds: int = DEFAULT_MAX_UNCHANGED_ROUNDS,
        verbose: bool = False,
        logger: Optional[Logger] = None,
    ) -> None:
        if max_unchanged_rounds < 1:
            raise ValueError("max_unchanged_rounds must be at least 1")
        self.grid = grid
        self.constraints: List[Constraint] = (
            list(constraints) if constraints is not None else build_constraints()
        )
        self.strategies: List[Strategy] = sorted(
            strategies if strategies is not None else build_strategies(),
            key=lambda s: s.priority,
        )
        self.max_unchanged_rounds = max_unchanged_rounds
        self.verbose = verbose
        self.logger = logger

    def _log(self, message: str) -> None:
        if self.logger:
            self.logger(message)

    def _progress(self) -> Tuple[int, int]:
        return self.grid.unsolved_count(), self.grid.candidate_count()

    def is_consistent(self, grid: Grid) -> bool:
        return constraints_satisfied(grid, self.constraints)

    def is_solved(self) -> bool:
        return self.grid.unsolved_count() == 0 and self.is_consistent(self.grid)

    def apply_constraints(self) -> bool:
        changed = False
        for constraint in self.constraints:
            for cell in self.grid.unsolved_cells():
                if constraint.apply(self.grid, cell.row, cell.col):
                    changed = True
        return changed

    def apply_strategies(self, round_no: int) -> bool:
        """Try each strategy on a clone and keep its work only if it stays consistent."""
        changed = False
        for strategy in self.strategies:
            if not self.grid.unsolved_count():
                break
            trial = self.grid.clone()
            before = trial.unsolved_count()
            if not strategy.apply(trial):
                continue
            if not self.is_consistent(trial):
                self._log(f"Round {round_no}: rolled back {strategy.name}, contradiction")
                continue
            self.grid.copy_from(trial)
            changed = True
            fixed = before - trial.unsolved_count()
            if fixed:
                self._log(f"Round {round_no}: {strategy.name} fixed {fixed} cell(s)")
            else:
                self._log(f"Round {round_no}: {strategy.name} eliminated candidates")
        return changed

    def _finish(self, status: str, start: float, rounds: int, message: str) -> SolverResult:
        duration_ms = int((time.time() - start) * 1000)
        solved_cells = 81 - self.grid.unsolved_count()
        if self.verbose:
            print(
                f"[solver] solve end in {duration_ms} ms; status {status}; "
                f"{solved_cells}/81 cells after {rounds} rounds"
            )
        return SolverResult(
            status=status,
            grid=self.grid,
            rounds=rounds,
            duration_ms=duration_ms,
            solved_cells=solved_cells,
            message=message,
        )

    def solve(self) -> SolverResult:
        start = time.time()
        if self.verbose:
            print("[solver] solve start")
        if not self.is_consistent(self.grid):
            return self._finish(
                SolverStatus.INVALID, start, 0, "Contradiction in givens."
            )
        rounds = 0
        unchanged = 0
        while not self.is_solved():
            rounds += 1
            before = self._progress()
            self.apply_constraints()
            if not self.is_consistent(self.grid):
                if self.grid.unsolved_count():
                    message = "Contradiction reached while propagating."
                else:
                    message = "Completed grid violates a constraint."
                self._log(f"Round {rounds}: {message}")
                return self._finish(SolverStatus.INVALID, start, rounds, message)
            if self.is_solved():
                break
            self.apply_strategies(rounds)
            if self._progress() == before:
                unchanged += 1
                if unchanged >= self.max_unchanged_rounds:
                    return self._finish(
                        SolverStatus.STUCK,
                        start,
                        rounds,
                        "No further deductions available.",
                    )
            else:
                unchanged = 0
        return self._finish(SolverStatus.SOLVED, start, rounds, "Solved successfully.")


def solve(grid: Grid, **kwargs) -> SolverResult:
    return SudokuSolver(grid, **kwargs).solve()


def validate(grid: Grid, constraints: Optional[Sequence[Constraint]] = None) -> bool:
    """True if no group holds a repeated fixed value."""
    if constraints is None:
        constraints = build_constraints()
    return constraints_satisfied(grid, list(constraints))
