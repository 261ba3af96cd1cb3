from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

DIGITS: Tuple[int, ...] = tuple(range(1, 10))

Coord = Tuple[int, int]
Rows = List[List[int]]

_SEPARATORS = set(" \t\r\n|-+")


def box_index(row: int, col: int) -> int:
    """1-based box number of a 1-based coordinate, row-major."""
    return ((row - 1) // 3) * 3 + (col - 1) // 3 + 1


def _check_coord(row: int, col: int) -> None:
    if not (1 <= row <= 9 and 1 <= col <= 9):
        raise ValueError(f"Coordinate out of range: r{row}c{col}")


class Cell:
    def __init__(self, row: int, col: int, value: int = 0) -> None:
        _check_coord(row, col)
        self._row = row
        self._col = col
        self._value = 0
        self._candidates: Set[int] = set(DIGITS)
        if value:
            self.set_value(value)

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coord:
        return (self._row, self._col)

    @property
    def box(self) -> int:
        return box_index(self._row, self._col)

    @property
    def value(self) -> int:
        return self._value

    @property
    def candidates(self) -> FrozenSet[int]:
        return frozenset(self._candidates)

    @property
    def is_solved(self) -> bool:
        return self._value != 0

    @property
    def is_confirmed(self) -> bool:
        return len(self._candidates) == 1

    def has_candidate(self, value: int) -> bool:
        return value in self._candidates

    def set_value(self, value: int) -> None:
        if not 1 <= value <= 9:
            raise ValueError(f"Value must be between 1 and 9, got {value!r}")
        self._value = value
        self._candidates = {value}

    def eliminate(self, value: int) -> bool:
        """Remove a candidate; promotes the cell when one candidate is left.

        Returns True if the candidate set changed.
        """
        if self._value or value not in self._candidates:
            return False
        self._candidates.discard(value)
        if len(self._candidates) == 1:
            self._value = next(iter(self._candidates))
        return True

    def sees(self, other: "Cell") -> bool:
        if self is other or self.coord == other.coord:
            return False
        return (
            self._row == other._row
            or self._col == other._col
            or self.box == other.box
        )

    def clone(self) -> "Cell":
        copy = Cell(self._row, self._col)
        copy._restore_from(self)
        return copy

    def _restore_from(self, other: "Cell") -> None:
        self._value = other._value
        self._candidates = set(other._candidates)

    def __repr__(self) -> str:
        if self._value:
            return f"Cell(r{self._row}c{self._col}={self._value})"
        digits = "".join(str(d) for d in sorted(self._candidates))
        return f"Cell(r{self._row}c{self._col} {{{digits}}})"


class Grid:
    def __init__(self, cells: Optional[Iterable[Cell]] = None) -> None:
        if cells is None:
            cells = (Cell(r, c) for r in DIGITS for c in DIGITS)
        self._cells: Dict[Coord, Cell] = {}
        for cell in cells:
            if cell.coord in self._cells:
                raise ValueError(f"Duplicate cell at r{cell.row}c{cell.col}")
            self._cells[cell.coord] = cell
        if len(self._cells) != 81:
            raise ValueError(f"A grid needs 81 cells, got {len(self._cells)}")

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "Grid":
        """Build a grid from 81 row-major values, 0 meaning blank."""
        values = list(values)
        if len(values) != 81:
            raise ValueError(f"Expected 81 values, got {len(values)}")
        cells = []
        for idx, raw in enumerate(values):
            try:
                val = int(raw)
            except (TypeError, ValueError):
                raise ValueError(
                    f"Value at index {idx} is not a digit: {raw!r}"
                ) from None
            if not 0 <= val <= 9:
                raise ValueError(
                    f"Value at index {idx} must be between 0 and 9, got {raw!r}"
                )
            cells.append(Cell(idx // 9 + 1, idx % 9 + 1, val))
        return cls(cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        if (
            not isinstance(rows, (list, tuple))
            or len(rows) != 9
            or any(not isinstance(row, (list, tuple)) or len(row) != 9 for row in rows)
        ):
            raise ValueError("Invalid grid: expected 9 rows of 9 values")
        return cls.from_values([v if v else 0 for row in rows for v in row])

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        values: List[int] = []
        for ch in text:
            if ch in _SEPARATORS:
                continue
            if ch in "0.":
                values.append(0)
            elif ch.isdigit():
                values.append(int(ch))
            else:
                raise ValueError(f"Unexpected character in puzzle: {ch!r}")
        return cls.from_values(values)

    def cell(self, row: int, col: int) -> Cell:
        _check_coord(row, col)
        return self._cells[(row, col)]

    def set_value(self, row: int, col: int, value: int) -> None:
        self.cell(row, col).set_value(value)

    def row(self, row: int) -> List[Cell]:
        return [self._cells[(row, c)] for c in DIGITS]

    def column(self, col: int) -> List[Cell]:
        return [self._cells[(r, col)] for r in DIGITS]

    def box(self, box: int) -> List[Cell]:
        if not 1 <= box <= 9:
            raise ValueError(f"Box must be between 1 and 9, got {box}")
        top = ((box - 1) // 3) * 3 + 1
        left = ((box - 1) % 3) * 3 + 1
        return [
            self._cells[(r, c)]
            for r in range(top, top + 3)
            for c in range(left, left + 3)
        ]

    def box_of(self, row: int, col: int) -> List[Cell]:
        return self.box(box_index(row, col))

    def groups(self) -> Iterator[List[Cell]]:
        for r in DIGITS:
            yield self.row(r)
        for c in DIGITS:
            yield self.column(c)
        for b in DIGITS:
            yield self.box(b)

    def cells(self) -> List[Cell]:
        return [self._cells[(r, c)] for r in DIGITS for c in DIGITS]

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells() if not cell.is_solved]

    def solved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells() if cell.is_solved]

    def unsolved_count(self) -> int:
        return sum(1 for cell in self._cells.values() if not cell.is_solved)

    def candidate_count(self) -> int:
        return sum(len(cell.candidates) for cell in self._cells.values())

    def is_solved(self) -> bool:
        if self.unsolved_count():
            return False
        full = set(DIGITS)
        return all({cell.value for cell in group} == full for group in self.groups())

    def is_consistent(self) -> bool:
        """True when no row, column or box repeats a fixed value."""
        for group in self.groups():
            fixed = [cell.value for cell in group if cell.is_solved]
            if len(fixed) != len(set(fixed)):
                return False
        return True

    def clone(self) -> "Grid":
        return Grid(cell.clone() for cell in self._cells.values())

    def copy_from(self, other: "Grid") -> None:
        """Overwrite every cell's state with the state of the same cell in other."""
        for coord, cell in self._cells.items():
            cell._restore_from(other._cells[coord])

    def to_values(self) -> List[int]:
        return [cell.value for cell in self.cells()]

    def to_rows(self) -> Rows:
        return [[cell.value for cell in self.row(r)] for r in DIGITS]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return all(
            cell.value == other._cells[coord].value
            and cell.candidates == other._cells[coord].candidates
            for coord, cell in self._cells.items()
        )

    def __str__(self) -> str:
        lines = []
        for r in DIGITS:
            if r in (4, 7):
                lines.append("------+-------+------")
            parts = []
            for c in DIGITS:
                val = self._cells[(r, c)].value
                parts.append(str(val) if val else ".")
                parts.append(" | " if c % 3 == 0 else " ")
            lines.append("".join(parts).rstrip())
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Grid(unsolved={self.unsolved_count()})"
