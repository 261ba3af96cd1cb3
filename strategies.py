from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, FrozenSet, List, Sequence, Set, Tuple

from model import DIGITS, Cell, Grid


class Strategy:
    name: str = "strategy"
    priority: int = 100

    def apply(self, grid: Grid) -> bool:
        """Run the technique over every row, column and box.

        Returns True if any candidate was removed or any cell fixed.
        """
        changed = False
        for group in grid.groups():
            if all(cell.is_solved for cell in group):
                continue
            if self.apply_to_group(group):
                changed = True
        return changed

    def apply_to_group(self, cells: List[Cell]) -> bool:
        raise NotImplementedError


def _eliminate_from(cells: Sequence[Cell], values: Sequence[int]) -> bool:
    changed = False
    for cell in cells:
        for val in values:
            if cell.eliminate(val):
                changed = True
    return changed


@dataclass
class HiddenSingleStrategy(Strategy):
    name: str = "Hidden Single"
    priority: int = 1

    def apply_to_group(self, cells: List[Cell]) -> bool:
        changed = False
        for digit in DIGITS:
            if any(cell.value == digit for cell in cells):
                continue
            holders = [
                cell for cell in cells
                if not cell.is_solved and cell.has_candidate(digit)
            ]
            if len(holders) == 1:
                holders[0].set_value(digit)
                changed = True
        return changed


@dataclass
class NakedSubsetStrategy(Strategy):
    """Pairs, triples and quads: k cells whose candidates together number k."""

    name: str = "Naked Subset"
    priority: int = 2
    sizes: Tuple[int, ...] = (2, 3, 4)

    def apply_to_group(self, cells: List[Cell]) -> bool:
        changed = False
        for size in self.sizes:
            unsolved = [cell for cell in cells if not cell.is_solved]
            if len(unsolved) <= size:
                continue
            pool = [cell for cell in unsolved if 2 <= len(cell.candidates) <= size]
            for subset in combinations(pool, size):
                union: Set[int] = set()
                for cell in subset:
                    union |= cell.candidates
                if len(union) != size:
                    continue
                others = [
                    cell for cell in unsolved
                    if cell not in subset and not cell.is_solved
                ]
                if _eliminate_from(others, sorted(union)):
                    changed = True
        return changed


@dataclass
class PointingStrategy(Strategy):
    name: str = "Pointing"
    priority: int = 3

    def apply(self, grid: Grid) -> bool:
        changed = False
        for box in DIGITS:
            if self.process_box(grid, box):
                changed = True
        return changed

    def process_box(self, grid: Grid, box: int) -> bool:
        changed = False
        box_cells = grid.box(box)
        for digit in DIGITS:
            holders = [cell for cell in box_cells if cell.has_candidate(digit)]
            if not holders or all(cell.is_solved for cell in holders):
                continue
            rows = {cell.row for cell in holders}
            cols = {cell.col for cell in holders}
            if len(rows) == 1:
                outside = [c for c in grid.row(rows.pop()) if c.box != box]
                if _eliminate_from(outside, [digit]):
                    changed = True
            if len(cols) == 1:
                outside = [c for c in grid.column(cols.pop()) if c.box != box]
                if _eliminate_from(outside, [digit]):
                    changed = True
        return changed


def _line_positions(grid: Grid, digit: int, by_row: bool) -> Dict[int, FrozenSet[int]]:
    """Map each row (or column) to the cross-lines where digit may still go."""
    positions: Dict[int, FrozenSet[int]] = {}
    for line in DIGITS:
        cells = grid.row(line) if by_row else grid.column(line)
        positions[line] = frozenset(
            (cell.col if by_row else cell.row)
            for cell in cells
            if cell.has_candidate(digit)
        )
    return positions


def _fish(grid: Grid, size: int) -> bool:
    """Basic fish of the given size: 2 is X-Wing, 3 is Swordfish."""
    changed = False
    for digit in DIGITS:
        for by_row in (True, False):
            positions = _line_positions(grid, digit, by_row)
            base = [
                line for line, cross in positions.items()
                if 2 <= len(cross) <= size
            ]
            for lines in combinations(base, size):
                cover: Set[int] = set()
                for line in lines:
                    cover |= positions[line]
                if len(cover) != size:
                    continue
                for cross in sorted(cover):
                    cells = grid.column(cross) if by_row else grid.row(cross)
                    targets = [
                        cell for cell in cells
                        if (cell.row if by_row else cell.col) not in lines
                    ]
                    if _eliminate_from(targets, [digit]):
                        changed = True
                if changed:
                    positions = _line_positions(grid, digit, by_row)
    return changed


@dataclass
class XWingStrategy(Strategy):
    name: str = "X-Wing"
    priority: int = 4

    def apply(self, grid: Grid) -> bool:
        return _fish(grid, 2)


@dataclass
class SwordfishStrategy(Strategy):
    name: str = "Swordfish"
    priority: int = 5

    def apply(self, grid: Grid) -> bool:
        return _fish(grid, 3)


@dataclass
class XYWingStrategy(Strategy):
    name: str = "XY-Wing"
    priority: int = 6

    def apply(self, grid: Grid) -> bool:
        changed = False
        for pivot in grid.unsolved_cells():
            if len(pivot.candidates) == 2 and self._wing_from(grid, pivot):
                changed = True
        return changed

    def _wing_from(self, grid: Grid, pivot: Cell) -> bool:
        changed = False
        x, y = sorted(pivot.candidates)
        pincers = [
            cell for cell in grid.unsolved_cells()
            if len(cell.candidates) == 2 and pivot.sees(cell)
        ]
        for first, second in combinations(pincers, 2):
            if len(pivot.candidates) != 2:
                break
            a, b = first.candidates, second.candidates
            if len(a) != 2 or len(b) != 2 or a == b:
                continue
            for px, py in ((x, y), (y, x)):
                if px not in a or py not in b:
                    continue
                z = a - {px}
                if z != b - {py} or z & {x, y}:
                    continue
                if self._eliminate_seen_by_both(grid, first, second, next(iter(z))):
                    changed = True
        return changed

    @staticmethod
    def _eliminate_seen_by_both(grid: Grid, first: Cell, second: Cell, z: int) -> bool:
        targets = [
            cell for cell in grid.unsolved_cells()
            if cell.has_candidate(z) and cell.sees(first) and cell.sees(second)
        ]
        return _eliminate_from(targets, [z])


def build_strategies() -> List[Strategy]:
    strategies: List[Strategy] = [
        HiddenSingleStrategy(),
        NakedSubsetStrategy(),
        PointingStrategy(),
        XWingStrategy(),
        SwordfishStrategy(),
        XYWingStrategy(),
    ]
    return sorted(strategies, key=lambda s: s.priority)


def build_basic_strategies() -> List[Strategy]:
    return [HiddenSingleStrategy(), NakedSubsetStrategy(), PointingStrategy()]
