#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size N] [--bombs B] [--seed S]
    python main.py simulate [--games N] [--size N] [--bombs B] [--seed S]
"""
import argparse
import logging
import random
from typing import Callable, Optional

import numpy as np

from minesweeper import Board, BoardConfig, BoardConfigError, MinesweeperEnv
from minesweeper.display import render_text, title

PROMPT = "> "
HELP_TEXT = (
    "Commands: r X Y (reveal), f X Y (flag/unflag), n (new game), q (quit)"
)


# ============================================================================
# Interactive Play
# ============================================================================

def apply_command(board: Board, line: str) -> Optional[str]:
    """
    Apply one text command to the board.

    Args:
        board: Board to play on.
        line: Raw command line typed by the player.

    Returns:
        Message to show the player, or None to quit.
    """
    parts = line.split()
    if not parts:
        return HELP_TEXT

    command = parts[0].lower()
    if command in ("q", "quit"):
        return None
    if command in ("n", "new"):
        board.reset()
        return "New game."
    if command not in ("r", "reveal", "f", "flag") or len(parts) != 3:
        return HELP_TEXT

    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError:
        return "Coordinates must be integers."
    if not (0 <= x < board.dimension and 0 <= y < board.dimension):
        return f"Coordinates must be between 0 and {board.dimension - 1}."

    if command in ("r", "reveal"):
        changed = board.reveal(x, y)
    else:
        changed = board.flag(x, y)
    return "" if changed else "Nothing to do there."


def play(args: argparse.Namespace, read: Callable[[str], str] = input) -> None:
    """Play an interactive game in the terminal."""
    board = Board(BoardConfig(args.size, args.bombs), rng=random.Random(args.seed))
    print(HELP_TEXT)

    message = ""
    while True:
        print()
        print(render_text(board, coordinates=True))
        status = title(board.game_state).strip()
        print(f"Bombs left: {board.remaining_bombs}  {status}".rstrip())
        if message:
            print(message)
        try:
            line = read(PROMPT)
        except EOFError:
            break
        message = apply_command(board, line)
        if message is None:
            break


# ============================================================================
# Simulation
# ============================================================================

def simulate(args: argparse.Namespace) -> float:
    """Play games with random legal moves and report the win rate."""
    config = BoardConfig(args.size, args.bombs)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    print(
        f"Simulating {args.games} games on {config.dimension}x{config.dimension} "
        f"with {config.bomb_count} bombs ({config.density:.1%} density)..."
    )

    wins = 0
    total_steps = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}
        while not done:
            valid_indices = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid_indices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1

    win_rate = wins / args.games if args.games else 0.0
    avg_steps = total_steps / args.games if args.games else 0.0
    print(f"Win rate: {win_rate:.1%} ({wins}/{args.games})")
    print(f"Avg steps: {avg_steps:.1f}")
    return win_rate


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper board engine")
    parser.add_argument(
        "--verbose", action="store_true", help="Show engine debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    for sub in (play_parser, simulate_parser):
        sub.add_argument("--size", type=int, default=8, help="Board size (NxN)")
        sub.add_argument("--bombs", type=int, default=10, help="Number of bombs")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except BoardConfigError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
