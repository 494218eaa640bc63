# session.py
# A single game in progress: owns the current board and spawns tiles after effective moves.

import logging
import random
from typing import Optional

from board import Board
from engine import (
    DEFAULT_WIN_TILE,
    DIRECTION,
    GameProgressState,
    MoveResult,
    add_random_tile,
    determine_game_status,
    has_any_legal_move,
    initialize_board,
    process_move,
)

logger = logging.getLogger(__name__)


class GameSession:
    """
    Holds the board of one game and drives the engine for it.

    The shell embedding the session feeds it validated directions and reads
    ``board``, ``score`` and ``status`` back to render them. A tile is spawned
    only after a move that changed the board, and never more than one.
    """

    def __init__(self, rng=None, win_tile: int = DEFAULT_WIN_TILE):
        self._rng = rng if rng is not None else random.Random()
        self.win_tile = win_tile
        self.board = Board()
        self.last_spawn: Optional[int] = None
        self.restart()

    def restart(self) -> Board:
        """Starts over with an empty board, score 0 and two random tiles."""
        self.board = initialize_board(self._rng)
        self.last_spawn = None
        logger.debug("New game started: %s", self.board.cells)
        return self.board

    def move(self, direction: DIRECTION) -> MoveResult:
        """
        Applies a move and spawns a tile if anything changed.
        Returns the engine's result, whose board is the state before the spawn.
        Raises:
            InvalidDirectionError: If direction is not one of the four directions.
        """
        result = process_move(self.board, direction)
        self.last_spawn = None

        if result.changed:
            self.board, self.last_spawn = add_random_tile(result.board, self._rng)
            logger.debug(
                "Moved %s: +%d points, tile spawned at %s",
                DIRECTION(direction).value, result.score_gained, self.last_spawn,
            )
        else:
            logger.debug("Move %s had no effect", DIRECTION(direction).value)
        return result

    @property
    def score(self) -> int:
        return self.board.score

    @property
    def status(self) -> GameProgressState:
        return determine_game_status(self.board, self.win_tile)

    def has_any_legal_move(self) -> bool:
        return has_any_legal_move(self.board)
