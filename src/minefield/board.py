"""
Board module for the Minesweeper engine.

Implements the game board with mine placement, flood revealing,
flag budgeting and win/loss evaluation.
"""
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellView
from .errors import BoardConfigError
from .placement import PlacementStrategy, Position, place_mines


# ============================================================================
# Constants
# ============================================================================

class GameOutcome(Enum):
    """Possible outcomes of a game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class WinRule(Enum):
    """
    Conditions under which a game counts as won.

    STRICT requires every mine flagged and every safe cell revealed.
    FLAGS_ONLY only requires every mine flagged.
    """

    STRICT = auto()
    FLAGS_ONLY = auto()


class RevealKind(Enum):
    """What a single reveal call did."""

    NOOP = auto()
    REVEALED = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class RevealResult:
    """
    Result of a reveal.

    Attributes:
        kind: Classification of the action.
        changed: Every (row, col) whose state changed during the call.
    """

    kind: RevealKind
    changed: FrozenSet[Position] = frozenset()


ORTHOGONAL_STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class BoardConfig:
    """
    Configuration for a square Minesweeper board.

    Attributes:
        size: Number of rows and columns.
        num_mines: Total mines to place.
        seed: Seed for mine placement, None for a fresh random layout.
        placement: Mine placement algorithm.
        win_rule: Win condition to evaluate.
    """

    size: int = 9
    num_mines: int = 10
    seed: Optional[int] = None
    placement: PlacementStrategy = PlacementStrategy.SAMPLE
    win_rule: WinRule = WinRule.STRICT

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise BoardConfigError("Board size must be positive")
        if self.num_mines < 0:
            raise BoardConfigError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise BoardConfigError(f"Too many mines (max {self.max_mines})")

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves one safe cell."""
        return self.size * self.size - 1


# Preset difficulty levels
BEGINNER = BoardConfig(9, 10)
CLASSIC = BoardConfig(10, 10)
INTERMEDIATE = BoardConfig(16, 40)
EXPERT = BoardConfig(24, 99)

PRESETS = {
    "beginner": BEGINNER,
    "classic": CLASSIC,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Mines are placed when the board is built. All mutation goes through
    reveal() and toggle_flag(); queries hand out copies only. A new game
    means a new Board.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    mine_layout: InitVar[Optional[Iterable[Position]]] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _mines: FrozenSet[Position] = field(default=frozenset(), init=False, repr=False)
    _outcome: GameOutcome = field(default=GameOutcome.IN_PROGRESS, init=False)
    _flags_placed: int = field(default=0, init=False)
    _safe_revealed: int = field(default=0, init=False)

    def __post_init__(self, mine_layout: Optional[Iterable[Position]]) -> None:
        """Place mines and build the grid."""
        if mine_layout is None:
            mines = place_mines(
                self.config.size,
                self.config.num_mines,
                self.config.placement,
                self.config.seed,
            )
        else:
            mines = self._validate_layout(mine_layout)
        self._init_grid(mines)

    @classmethod
    def new(cls, size: int, num_mines: int, seed: Optional[int] = None) -> "Board":
        """Create a randomly mined board."""
        return cls(BoardConfig(size, num_mines, seed))

    @classmethod
    def from_layout(
        cls,
        size: int,
        mines: Iterable[Position],
        win_rule: WinRule = WinRule.STRICT,
    ) -> "Board":
        """
        Create a board with mines at explicit positions.

        Args:
            size: Board side length.
            mines: (row, col) positions of the mines. Duplicates collapse.
            win_rule: Win condition to evaluate.

        Raises:
            BoardConfigError: If a position is off the board or the layout
                leaves no safe cell.
        """
        layout = frozenset((int(row), int(col)) for row, col in mines)
        config = BoardConfig(size, len(layout), win_rule=win_rule)
        return cls(config, layout)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _validate_layout(self, layout: Iterable[Position]) -> FrozenSet[Position]:
        """Check an explicit mine layout against the configuration."""
        mines = frozenset(layout)
        for row, col in mines:
            if not self._is_valid_position(row, col):
                raise BoardConfigError(f"Mine position ({row}, {col}) is off the board")
        if len(mines) != self.config.num_mines:
            raise BoardConfigError(
                f"Layout has {len(mines)} mines, expected {self.config.num_mines}"
            )
        return mines

    def _init_grid(self, mines: FrozenSet[Position]) -> None:
        """Create the grid of cells with final mine flags and counts."""
        self._mines = mines
        size = self.config.size
        self._grid = [
            [
                Cell(
                    is_mine=(row, col) in mines,
                    adjacent_mines=self._count_adjacent_mines(row, col),
                )
                for col in range(size)
            ]
            for row in range(size)
        ]

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor in self._get_neighbors(row, col):
            if neighbor in self._mines:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions, diagonals included.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _get_orthogonal_neighbors(self, row: int, col: int) -> List[Position]:
        """Get valid up/down/left/right neighbor positions."""
        neighbors = []
        for delta_row, delta_col in ORTHOGONAL_STEPS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self._is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        size = self.config.size
        return 0 <= row < size and 0 <= col < size

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        A mine loses the game and uncovers every mine. A safe cell is
        revealed, and if it touches no mines the reveal floods outward
        through up/down/left/right neighbors until it reaches numbered
        cells.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            RevealResult with the action kind and changed positions.
            Disallowed reveals return a NOOP result.
        """
        if not self._can_reveal(row, col):
            return RevealResult(RevealKind.NOOP)

        if self._grid[row][col].is_mine:
            return self._detonate(row, col)

        changed = self._flood_reveal(row, col)
        if self._check_win_condition():
            return RevealResult(RevealKind.WON, changed)
        return RevealResult(RevealKind.REVEALED, changed)

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._outcome != GameOutcome.IN_PROGRESS:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].is_hidden

    def _flood_reveal(self, row: int, col: int) -> FrozenSet[Position]:
        """Reveal a safe cell and the zero region it opens."""
        changed: Set[Position] = set()
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            changed.add((current_row, current_col))
            self._safe_revealed += 1

            if cell.adjacent_mines > 0:
                continue
            for neighbor_row, neighbor_col in self._get_orthogonal_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_hidden and not neighbor.is_mine:
                    stack.append((neighbor_row, neighbor_col))
        return frozenset(changed)

    def _detonate(self, row: int, col: int) -> RevealResult:
        """Lose the game and uncover every mine."""
        self._grid[row][col].reveal()
        changed = {(row, col)}
        for mine_row, mine_col in self._mines:
            cell = self._grid[mine_row][mine_col]
            was_flagged = cell.is_flagged
            if cell.expose():
                changed.add((mine_row, mine_col))
            if was_flagged:
                self._flags_placed -= 1
        self._outcome = GameOutcome.LOST
        return RevealResult(RevealKind.LOST, frozenset(changed))

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Placing a flag is refused once the flag count reaches the mine
        total, whether or not the existing flags are on mines.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._outcome != GameOutcome.IN_PROGRESS:
            return False
        if not self._is_valid_position(row, col):
            return False

        cell = self._grid[row][col]
        if cell.is_revealed:
            return False
        if cell.is_hidden and self._flags_placed >= self.config.num_mines:
            return False

        cell.toggle_flag()
        self._flags_placed += 1 if cell.is_flagged else -1
        self._check_win_condition()
        return True

    def _check_win_condition(self) -> bool:
        """Mark the game won if the configured win rule holds."""
        for row, col in self._mines:
            if not self._grid[row][col].is_flagged:
                return False
        if (
            self.config.win_rule == WinRule.STRICT
            and self._safe_revealed < self.safe_cell_count
        ):
            return False
        self._outcome = GameOutcome.WON
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        """Number of rows (and columns)."""
        return self.config.size

    @property
    def mine_total(self) -> int:
        """Number of mines on the board."""
        return self.config.num_mines

    @property
    def safe_cell_count(self) -> int:
        """Number of cells without a mine."""
        return self.config.size * self.config.size - self.config.num_mines

    @property
    def flags_placed(self) -> int:
        """Number of cells currently flagged."""
        return self._flags_placed

    @property
    def flags_remaining(self) -> int:
        """Flags still available, for a mine counter display."""
        return self.config.num_mines - self._flags_placed

    @property
    def revealed_count(self) -> int:
        """Number of safe cells revealed so far."""
        return self._safe_revealed

    @property
    def outcome(self) -> GameOutcome:
        """Get current game outcome."""
        return self._outcome

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._outcome == GameOutcome.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._outcome == GameOutcome.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._outcome == GameOutcome.LOST

    def get_cell(self, row: int, col: int) -> Optional[CellView]:
        """Get a read-only view of the cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col].view(row, col)

    def mine_positions(self) -> FrozenSet[Position]:
        """Mine positions once the game is over, empty while still playing."""
        if self.is_playing:
            return frozenset()
        return self._mines

    def get_observation(self) -> np.ndarray:
        """
        Get visible board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        size = self.config.size
        obs = np.zeros((size, size), dtype=np.int8)
        for row in range(size):
            for col in range(size):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden.
        """
        if not self.is_playing:
            return []
        actions = []
        for row in range(self.config.size):
            for col in range(self.config.size):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions
