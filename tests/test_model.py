import pytest

from conftest import EASY, EASY_SOLUTION
from model import Cell, Grid, box_index


class TestCell:
    def test_new_cell_has_all_candidates(self):
        cell = Cell(4, 7)
        assert cell.value == 0
        assert not cell.is_solved
        assert cell.candidates == frozenset(range(1, 10))
        assert cell.box == 6

    def test_clue_fixes_candidates(self):
        cell = Cell(1, 1, 5)
        assert cell.is_solved
        assert cell.is_confirmed
        assert cell.candidates == {5}

    @pytest.mark.parametrize("value", [0, 10, -1])
    def test_set_value_out_of_range(self, value):
        cell = Cell(1, 1)
        with pytest.raises(ValueError):
            cell.set_value(value)
        assert cell.value == 0

    def test_bad_coordinate(self):
        with pytest.raises(ValueError):
            Cell(0, 3)

    def test_eliminate_last_but_one_promotes(self):
        cell = Cell(2, 2)
        for digit in range(1, 9):
            assert cell.eliminate(digit)
        assert cell.value == 9
        assert cell.candidates == {9}

    def test_eliminate_on_solved_cell_is_noop(self):
        cell = Cell(2, 2, 4)
        assert not cell.eliminate(4)
        assert cell.value == 4
        assert cell.candidates == {4}

    def test_eliminate_missing_candidate(self):
        cell = Cell(2, 2)
        cell.eliminate(3)
        assert not cell.eliminate(3)

    def test_candidates_snapshot_is_read_only(self):
        cell = Cell(3, 3)
        with pytest.raises(AttributeError):
            cell.candidates.discard(1)

    def test_sees(self):
        assert Cell(1, 1).sees(Cell(1, 9))
        assert Cell(1, 1).sees(Cell(9, 1))
        assert Cell(1, 1).sees(Cell(3, 3))
        assert not Cell(1, 1).sees(Cell(4, 4))
        assert not Cell(1, 1).sees(Cell(1, 1))

    def test_clone_is_independent(self):
        cell = Cell(5, 5)
        copy = cell.clone()
        copy.eliminate(1)
        assert cell.has_candidate(1)
        assert not copy.has_candidate(1)


def test_box_index_is_row_major():
    assert box_index(1, 1) == 1
    assert box_index(1, 9) == 3
    assert box_index(5, 5) == 5
    assert box_index(7, 1) == 7
    assert box_index(9, 9) == 9


class TestGrid:
    def test_blank_grid(self, blank_grid):
        assert len(blank_grid.cells()) == 81
        assert blank_grid.unsolved_count() == 81
        assert blank_grid.candidate_count() == 81 * 9
        assert not blank_grid.is_solved()

    def test_from_values_row_major(self):
        values = [0] * 81
        values[10] = 7
        grid = Grid.from_values(values)
        assert grid.cell(2, 2).value == 7
        assert grid.to_values() == values

    def test_from_values_wrong_length(self):
        with pytest.raises(ValueError):
            Grid.from_values([0] * 80)

    def test_from_values_out_of_range(self):
        values = [0] * 81
        values[3] = 10
        with pytest.raises(ValueError):
            Grid.from_values(values)

    def test_from_rows_rejects_flat_and_ragged_rows(self):
        with pytest.raises(ValueError):
            Grid.from_rows(list(range(9)))
        with pytest.raises(ValueError):
            Grid.from_rows([[0] * 9] * 8 + [{"a": 1}])
        with pytest.raises(ValueError):
            Grid.from_rows([[0] * 9] * 8 + [[0] * 8 + [[1]]])

    def test_duplicate_cells_rejected(self):
        cells = [Cell(r, c) for r in range(1, 10) for c in range(1, 10)]
        cells[1] = Cell(1, 1)
        with pytest.raises(ValueError):
            Grid(cells)

    def test_from_string_accepts_dots_and_separators(self):
        text = EASY.replace("0", ".")
        spaced = "\n".join(text[i:i + 9] for i in range(0, 81, 9))
        assert Grid.from_string(spaced).to_values() == Grid.from_string(EASY).to_values()

    def test_from_string_rejects_letters(self):
        with pytest.raises(ValueError):
            Grid.from_string("x" + EASY[1:])

    def test_group_ordering(self, easy_grid):
        assert [c.col for c in easy_grid.row(4)] == list(range(1, 10))
        assert [c.row for c in easy_grid.column(6)] == list(range(1, 10))
        assert [c.coord for c in easy_grid.box(5)] == [
            (4, 4), (4, 5), (4, 6),
            (5, 4), (5, 5), (5, 6),
            (6, 4), (6, 5), (6, 6),
        ]
        assert easy_grid.box_of(8, 2) == easy_grid.box(7)

    def test_groups_cover_27(self, blank_grid):
        assert len(list(blank_grid.groups())) == 27

    def test_solution_is_solved(self, solution_grid):
        assert solution_grid.is_solved()
        assert solution_grid.is_consistent()

    def test_full_grid_with_duplicates_is_not_solved(self):
        values = [int(ch) for ch in EASY_SOLUTION]
        values[0], values[1] = values[1], values[0]
        grid = Grid.from_values(values)
        assert grid.unsolved_count() == 0
        assert not grid.is_solved()
        assert not grid.is_consistent()

    def test_clone_is_deep(self, easy_grid):
        copy = easy_grid.clone()
        assert copy == easy_grid
        copy.cell(1, 3).eliminate(4)
        assert easy_grid.cell(1, 3).has_candidate(4)
        assert copy != easy_grid

    def test_copy_from(self, easy_grid):
        copy = easy_grid.clone()
        copy.set_value(1, 3, 4)
        easy_grid.copy_from(copy)
        assert easy_grid.cell(1, 3).value == 4
        copy.cell(1, 4).eliminate(6)
        assert easy_grid.cell(1, 4).has_candidate(6)

    def test_copy_from_restores_candidates(self, blank_grid):
        copy = blank_grid.clone()
        copy.cell(2, 2).eliminate(3)
        copy.cell(2, 2).eliminate(5)
        blank_grid.copy_from(copy)
        assert blank_grid.cell(2, 2).candidates == set(range(1, 10)) - {3, 5}
        assert blank_grid.cell(2, 2).value == 0
        blank_grid.cell(2, 2).eliminate(7)
        assert copy.cell(2, 2).has_candidate(7)

    def test_set_value_writes_one_cell(self, blank_grid):
        blank_grid.set_value(3, 4, 8)
        assert blank_grid.cell(3, 4).value == 8
        with pytest.raises(ValueError):
            blank_grid.set_value(3, 4, 0)

    def test_to_rows(self, easy_grid):
        rows = easy_grid.to_rows()
        assert rows[0] == [5, 3, 0, 0, 7, 0, 0, 0, 0]
        assert Grid.from_rows(rows) == easy_grid

    def test_str_layout(self, easy_grid):
        text = str(easy_grid)
        lines = text.splitlines()
        assert lines[0] == "5 3 . | . 7 . | . . . |"
        assert lines[3] == "------+-------+------"
        assert lines[-1] == ". . . | . 8 . | . 7 9 |"
        assert len(lines) == 11
