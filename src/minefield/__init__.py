"""
Minesweeper board engine.

Provides mine placement, flood reveal, flag budgeting and win/loss
detection, plus a Gymnasium environment for programmatic play.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameOutcome,
    RevealKind,
    RevealResult,
    WinRule,
    BEGINNER,
    CLASSIC,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .placement import PlacementStrategy
from .errors import BoardConfigError, MinefieldError, MinePlacementError
from .environment import MinesweeperEnv, render_observation

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameOutcome",
    "RevealKind",
    "RevealResult",
    "WinRule",
    "BEGINNER",
    "CLASSIC",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "PlacementStrategy",
    "BoardConfigError",
    "MinefieldError",
    "MinePlacementError",
    "MinesweeperEnv",
    "render_observation",
]
