"""
Mine placement strategies.

Each strategy returns the set of (row, col) positions that hold a mine
on a square board. Validation of the mine count against the board area
happens in BoardConfig; the functions here assume valid input.
"""
import random
from enum import Enum, auto
from typing import FrozenSet, Optional, Set, Tuple

from .errors import MinePlacementError


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class PlacementStrategy(Enum):
    """Available mine placement algorithms."""

    SAMPLE = auto()
    DIAGONAL_PROBE = auto()


# ============================================================================
# Strategies
# ============================================================================

def sample_positions(
    size: int, num_mines: int, rng: random.Random
) -> FrozenSet[Position]:
    """
    Pick mine positions uniformly without replacement.

    Args:
        size: Board side length.
        num_mines: Number of mines to place.
        rng: Random source.

    Returns:
        Frozen set of exactly ``num_mines`` distinct positions.
    """
    indices = rng.sample(range(size * size), num_mines)
    return frozenset(divmod(index, size) for index in indices)


def diagonal_probe_positions(
    size: int, num_mines: int, rng: random.Random
) -> FrozenSet[Position]:
    """
    Pick mine positions with the diagonal retry walk.

    A random cell is drawn for every mine. When it is taken, the probe
    steps down-right one cell at a time; stepping off the grid restarts
    it at (1, 0). The distribution is not uniform, and because every
    restart walks the same diagonal from (1, 0), dense boards usually
    exhaust the step budget. Use SAMPLE for those.

    Args:
        size: Board side length.
        num_mines: Number of mines to place.
        rng: Random source.

    Returns:
        Frozen set of exactly ``num_mines`` distinct positions.

    Raises:
        MinePlacementError: If the walk needs more than
            ``num_mines * size * size`` probe steps in total.
    """
    budget = num_mines * size * size
    steps = 0
    mines: Set[Position] = set()

    for _ in range(num_mines):
        row = rng.randrange(size)
        col = rng.randrange(size)
        while (row, col) in mines:
            steps += 1
            if steps > budget:
                raise MinePlacementError(
                    f"Diagonal probe exceeded {budget} steps placing "
                    f"{num_mines} mines on a {size}x{size} board"
                )
            row += 1
            col += 1
            if row >= size or col >= size:
                row, col = 1, 0
        mines.add((row, col))

    return frozenset(mines)


def place_mines(
    size: int,
    num_mines: int,
    strategy: PlacementStrategy = PlacementStrategy.SAMPLE,
    seed: Optional[int] = None,
) -> FrozenSet[Position]:
    """Dispatch to the requested placement strategy."""
    rng = random.Random(seed)
    if strategy == PlacementStrategy.DIAGONAL_PROBE:
        return diagonal_probe_positions(size, num_mines, rng)
    return sample_positions(size, num_mines, rng)
