# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the flat modules import in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from model import Grid  # noqa: E402

EASY = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
EASY_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


@pytest.fixture
def easy_grid():
    return Grid.from_string(EASY)


@pytest.fixture
def solution_grid():
    return Grid.from_string(EASY_SOLUTION)


@pytest.fixture
def blank_grid():
    return Grid()


def restrict(cell, allowed):
    """Strip a cell down to the given candidates."""
    for digit in range(1, 10):
        if digit not in allowed:
            cell.eliminate(digit)
