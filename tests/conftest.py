"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(BoardConfig(seed=1234))


@pytest.fixture
def corner_board() -> Board:
    """Create a 4x4 board with a single mine in the top-left corner."""
    return Board.from_layout(4, [(0, 0)])


@pytest.fixture
def small_board() -> Board:
    """
    Create a 3x3 board with one mine in the middle of the top row.

    Counts:
        1 * 1
        1 1 1
        0 0 0
    """
    return Board.from_layout(3, [(0, 1)])


@pytest.fixture
def walled_board() -> Board:
    """
    Create a 5x5 board where a column of mines splits the grid.

    Column 2 holds mines on rows 0-3, row 4 is open so the two
    halves only touch at the bottom.
    """
    return Board.from_layout(5, [(0, 2), (1, 2), (2, 2), (3, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 10)


@pytest.fixture
def tiny_config() -> BoardConfig:
    """Seeded 4x4 configuration with 3 mines."""
    return BoardConfig(4, 3, seed=7)
