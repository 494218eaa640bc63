# cli_driver.py
# This file is intended to be run to play or test the tile-merge game on the CLI

import argparse
import logging
import random
from typing import List, Optional

from board import Board
from engine import DEFAULT_WIN_TILE, DIRECTION, GameProgressState
from session import GameSession

DIRECTION_KEYS = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play the 4x4 tile-merge game in the terminal.")
    parser.add_argument("--win-tile", type=int, default=DEFAULT_WIN_TILE,
                        help="tile value that wins the game (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the tile spawner for a reproducible game")
    parser.add_argument("--verbose", action="store_true", help="log every move")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # 1. Initialize game
    session = GameSession(rng=random.Random(args.seed), win_tile=args.win_tile)
    display_board_state(session.board, session.status)

    # 2. Game Loop
    while session.status == GameProgressState.IN_PROGRESS:
        move_input = input("Enter move (W/A/S/D for Up/Left/Down/Right, R to restart, Q to quit): ").strip().upper()

        if move_input == 'Q':
            print("Quitting game.")
            break

        if move_input == 'R':
            session.restart()
            display_board_state(session.board, session.status)
            continue

        chosen_direction = DIRECTION_KEYS.get(move_input)
        if chosen_direction is None:
            print("Invalid input. Use W, A, S, D.")
            continue

        # 3. Process the move; the session adds the new tile when the board changed
        result = session.move(chosen_direction)
        if not result.changed:
            print("Move did not change the board. Try a different direction.")

        display_board_state(session.board, session.status)

    # 4. Game Ended
    if session.status == GameProgressState.GAME_WON:
        print(f"Congratulations! You reached the {session.win_tile} tile!")
    elif session.status == GameProgressState.GAME_OVER:
        print("No more moves possible. Better luck next time!")
    print(f"Final score: {session.score}")
    return 0


# --- Display Function ---
def display_board_state(board: Board, progress: GameProgressState):
    """Prints the board, score, and game status to the console."""
    print(f"\nScore: {board.score}")
    status_message = {
        GameProgressState.IN_PROGRESS: f"Status: {progress.name}",
        GameProgressState.GAME_WON: "YOU WON!",
        GameProgressState.GAME_OVER: "GAME OVER!"
    }
    print(status_message[progress])

    for row in board.rows():
        print("\t".join(str(value) if value else "." for value in row))
    print("-" * 24)


if __name__ == "__main__":
    raise SystemExit(main())
