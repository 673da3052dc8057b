"""
Minefield command line.

Usage:
    minefield play [--preset NAME | --size N --mines M] [--seed S]
    minefield simulate [--games G] [--size N] [--mines M] [--seed S]
"""
import argparse
import sys
from dataclasses import replace
from typing import Callable, List, Optional

import numpy as np

from .board import Board, BoardConfig, GameOutcome, PRESETS, RevealKind
from .environment import MinesweeperEnv, render_observation
from .errors import BoardConfigError


PLAY_HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), q (quit)"


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Build a board configuration from parsed arguments."""
    if getattr(args, "preset", None):
        return replace(PRESETS[args.preset], seed=args.seed)
    return BoardConfig(size=args.size, num_mines=args.mines, seed=args.seed)


def print_board(board: Board) -> None:
    """Print the board with row and column labels."""
    width = len(str(board.size - 1))
    header = " " * (width + 1) + " ".join(
        str(col % 10) for col in range(board.size)
    )
    print(header)
    rows = render_observation(board.get_observation()).split("\n")
    for index, line in enumerate(rows):
        print(f"{index:>{width}} {line}")
    print(f"Flags left: {board.flags_remaining}")


def play(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
) -> GameOutcome:
    """Play one game in the terminal."""
    board = Board(build_config(args))
    print(f"Board: {board.size}x{board.size} with {board.mine_total} mines")
    print(PLAY_HELP)

    while board.is_playing:
        print_board(board)
        try:
            line = input_fn("> ").strip().lower()
        except EOFError:
            break

        parts = line.split()
        if not parts:
            continue
        if parts[0] in ("q", "quit"):
            break
        if parts[0] not in ("r", "f") or len(parts) != 3:
            print(PLAY_HELP)
            continue
        try:
            row, col = int(parts[1]), int(parts[2])
        except ValueError:
            print("Row and column must be integers")
            continue
        if board.get_cell(row, col) is None:
            print(f"({row}, {col}) is off the board")
            continue

        if parts[0] == "r":
            result = board.reveal(row, col)
            if result.kind == RevealKind.NOOP:
                print("Nothing to reveal there")
        elif not board.toggle_flag(row, col):
            print("Cannot flag there")

    print_board(board)
    if board.is_won:
        print("*** WIN! ***")
    elif board.is_lost:
        print("*** LOST (hit mine) ***")
    else:
        print("Game abandoned")
    return board.outcome


def simulate(args: argparse.Namespace) -> float:
    """Let a random agent play and report its results."""
    config = build_config(args)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)
    wins = 0
    revealed: List[int] = []
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        done = False
        while not done:
            action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_state"] == GameOutcome.WON.name:
            wins += 1
        revealed.append(info["revealed"])

    win_rate = wins / args.games
    print(f"Random play over {args.games} games on {config.size}x{config.size} "
          f"with {config.num_mines} mines:")
    print(f"  Win rate: {win_rate:.1%}")
    print(f"  Avg revealed: {np.mean(revealed):.1f} cells")
    return win_rate


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Minefield - Minesweeper board engine"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=None, help="Difficulty preset"
    )
    play_parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    play_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    sim_parser = subparsers.add_parser("simulate", help="Run random games")
    sim_parser.add_argument("--games", type=int, default=100, help="Number of games")
    sim_parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    sim_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "simulate" and args.games < 1:
        parser.error("--games must be positive")

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except BoardConfigError as exc:
        print(f"Invalid board: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
