# engine.py
# This file is intended to be the stateless rule engine for the 4x4 tile-merge game.

from enum import Enum
from typing import List, NamedTuple, Optional, Set, Tuple
import random

from board import BOARD_SIZE, Board, position_of

DEFAULT_WIN_TILE = 2048
FOUR_PROBABILITY = 0.1

class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2  # Lost
    GAME_WON = 3

class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

class InvalidDirectionError(ValueError):
    """Raised when something other than one of the four directions reaches the engine."""

class MoveResult(NamedTuple):
    board: Board
    score_gained: int
    changed: bool

# --- Direction Math ---

def _as_direction(direction) -> DIRECTION:
    try:
        return DIRECTION(direction)
    except ValueError:
        raise InvalidDirectionError(f"Invalid direction: {direction!r}. Must be one of up, down, left, right.") from None

def get_next_index(index: int, direction: DIRECTION) -> Optional[int]:
    """
    Gets the adjacent slot in the direction of travel.
    Args:
        index (int): The slot to step from.
        direction (DIRECTION): The travel direction.
    Returns:
        Optional[int]: The neighbouring slot index, or None at the grid boundary.
    Raises:
        IndexError: If index is not a slot of the grid.
    """
    direction = _as_direction(direction)
    row, col = position_of(index)

    if direction == DIRECTION.UP:
        return index - BOARD_SIZE if row > 0 else None
    if direction == DIRECTION.DOWN:
        return index + BOARD_SIZE if row < BOARD_SIZE - 1 else None
    if direction == DIRECTION.LEFT:
        return index - 1 if col > 0 else None
    return index + 1 if col < BOARD_SIZE - 1 else None

def create_order(direction: DIRECTION) -> List[int]:
    """
    Builds the order in which slots are visited during a pass.
    Every slot appears once. Slots closest to the edge the tiles travel towards
    come first, so a tile always meets its final neighbour already in place.
    Args:
        direction (DIRECTION): The travel direction.
    Returns:
        List[int]: All slot indices in visiting order.
    """
    direction = _as_direction(direction)
    forward = list(range(BOARD_SIZE))
    backward = forward[::-1]

    if direction in (DIRECTION.UP, DIRECTION.DOWN):
        rows = forward if direction == DIRECTION.UP else backward
        return [row * BOARD_SIZE + col for row in rows for col in forward]

    cols = forward if direction == DIRECTION.LEFT else backward
    return [row * BOARD_SIZE + col for col in cols for row in forward]

# --- Core Game Move Processing ---

def process_move(board: Board, direction: DIRECTION) -> MoveResult:
    """
    Slides and merges every tile of a copy of the board in the given direction.
    Each tile advances until it hits the edge, a different value, or a slot
    that was already produced by a merge in this pass. A tile that merges
    stops there.
    Args:
        board (Board): The current game board. Left untouched.
        direction (DIRECTION): The direction to move.
    Returns:
        MoveResult: The new board (its score includes the gain), the score
                    gained from merges and whether anything moved or merged.
    Raises:
        InvalidDirectionError: If an invalid direction is specified.
    """
    direction = _as_direction(direction)
    new_board = board.copy()
    merged: Set[int] = set()
    score_gained = 0
    changed = False

    for index in create_order(direction):
        value = new_board.get(index)
        if value is None:
            continue

        current = index
        while True:
            target = get_next_index(current, direction)
            if target is None:
                break
            target_value = new_board.get(target)

            if target_value is None:
                new_board.set(target, value)
                new_board.set(current, None)
                current = target
                changed = True
            elif target_value == value and target not in merged:
                new_board.set(target, value * 2)
                new_board.set(current, None)
                merged.add(target)
                score_gained += value * 2
                changed = True
                break
            else:
                break

    new_board.score += score_gained
    return MoveResult(new_board, score_gained, changed)

# --- Random Tile Spawn ---

def add_random_tile(board: Board, rng=None) -> Tuple[Board, Optional[int]]:
    """
    Adds a new tile (90% chance of 2, 10% chance of 4) to an empty slot on a copy of the board.
    Args:
        board (Board): The current game board.
        rng: Source of randomness with choice() and random(), such as random.Random.
             The random module is used when omitted.
    Returns:
        Tuple[Board, Optional[int]]: The new board and the index the tile was placed at.
                                     If there are no empty slots, a copy of the board and None.
    """
    if rng is None:
        rng = random
    new_board = board.copy()
    empty_slots = new_board.empty_slots()
    if not empty_slots:
        return new_board, None

    index = rng.choice(empty_slots)
    new_board.set(index, 4 if rng.random() < FOUR_PROBABILITY else 2)
    return new_board, index

def initialize_board(rng=None) -> Board:
    """An empty board with score 0 and two random tiles."""
    board, _ = add_random_tile(Board(), rng)
    board, _ = add_random_tile(board, rng)
    return board

# --- Game State Checks ---

def is_move_possible_in_direction(board: Board, direction: DIRECTION) -> bool:
    """
    Check if any tile can move or merge in the given direction.
    Args:
        board (Board): The game board.
        direction (DIRECTION): The direction to check.
    Returns:
        bool: True if a move in that direction would change the board.
    """
    direction = _as_direction(direction)
    for index, value in enumerate(board.cells):
        if value is None:
            continue
        target = get_next_index(index, direction)
        if target is not None and board.cells[target] in (None, value):
            return True
    return False

def has_any_legal_move(board: Board) -> bool:
    return any(is_move_possible_in_direction(board, direction) for direction in DIRECTION)

def check_for_win(board: Board, win_tile: int = DEFAULT_WIN_TILE) -> bool:
    return board.max_tile() >= win_tile

def determine_game_status(board: Board, win_tile: int = DEFAULT_WIN_TILE) -> GameProgressState:
    """
    Determines the current progress state of the game based on the board.
    A win takes precedence over a blocked board.
    """
    if check_for_win(board, win_tile):
        return GameProgressState.GAME_WON
    if not has_any_legal_move(board):
        return GameProgressState.GAME_OVER
    return GameProgressState.IN_PROGRESS
