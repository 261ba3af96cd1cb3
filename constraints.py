from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from model import DIGITS, Cell, Coord, Grid

KNIGHT_OFFSETS: Tuple[Coord, ...] = (
    (1, 2), (2, 1), (-1, 2), (-2, 1), (1, -2), (2, -1), (-1, -2), (-2, -1),
)


def knight_neighbors() -> Dict[Coord, List[Coord]]:
    neighbors: Dict[Coord, List[Coord]] = {}
    for r in DIGITS:
        for c in DIGITS:
            neighbors[(r, c)] = [
                (r + dr, c + dc)
                for dr, dc in KNIGHT_OFFSETS
                if 1 <= r + dr <= 9 and 1 <= c + dc <= 9
            ]
    return neighbors


def has_duplicates(cells: List[Cell]) -> bool:
    fixed = [cell.value for cell in cells if cell.is_solved]
    return len(fixed) != len(set(fixed))


class Constraint:
    name: str = "constraint"

    def group_cells(self, grid: Grid, row: int, col: int) -> List[Cell]:
        """Cells that may not share a value with the cell at (row, col)."""
        raise NotImplementedError

    def apply(self, grid: Grid, row: int, col: int) -> bool:
        """Eliminate values fixed elsewhere in the group. Returns True if anything changed."""
        reference = grid.cell(row, col)
        if reference.is_solved:
            return False
        changed = False
        for cell in self.group_cells(grid, row, col):
            if cell is reference or not cell.is_solved:
                continue
            if reference.eliminate(cell.value):
                changed = True
            if reference.is_solved:
                break
        return changed

    def is_satisfied(self, grid: Grid, row: int, col: int) -> bool:
        return not has_duplicates(self.group_cells(grid, row, col))


@dataclass(frozen=True)
class RowConstraint(Constraint):
    name: str = "row"

    def group_cells(self, grid: Grid, row: int, col: int) -> List[Cell]:
        return grid.row(row)


@dataclass(frozen=True)
class ColumnConstraint(Constraint):
    name: str = "column"

    def group_cells(self, grid: Grid, row: int, col: int) -> List[Cell]:
        return grid.column(col)


@dataclass(frozen=True)
class BoxConstraint(Constraint):
    name: str = "box"

    def group_cells(self, grid: Grid, row: int, col: int) -> List[Cell]:
        return grid.box_of(row, col)


class KnightConstraint(Constraint):
    """Anti-knight variant: cells a chess knight's move apart differ."""

    name = "anti-knight"

    def __init__(self) -> None:
        self._neighbors = knight_neighbors()

    def group_cells(self, grid: Grid, row: int, col: int) -> List[Cell]:
        cells = [grid.cell(row, col)]
        cells.extend(grid.cell(r, c) for r, c in self._neighbors[(row, col)])
        return cells

    def is_satisfied(self, grid: Grid, row: int, col: int) -> bool:
        reference = grid.cell(row, col)
        if not reference.is_solved:
            return True
        return all(
            grid.cell(r, c).value != reference.value
            for r, c in self._neighbors[(row, col)]
        )

    def __repr__(self) -> str:
        return "KnightConstraint()"


def build_constraints(anti_knight: bool = False) -> List[Constraint]:
    constraints: List[Constraint] = [
        RowConstraint(),
        ColumnConstraint(),
        BoxConstraint(),
    ]
    if anti_knight:
        constraints.append(KnightConstraint())
    return constraints


def constraints_satisfied(grid: Grid, constraints: List[Constraint]) -> bool:
    for constraint in constraints:
        for cell in grid.solved_cells():
            if not constraint.is_satisfied(grid, cell.row, cell.col):
                return False
    return True
