import logging
import random
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

import engine
from board import BOARD_SIZE, Board

logger = logging.getLogger(__name__)

RATE_LIMIT = "100/minute"

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="Tile Merge Game API",
    description="A stateless API for the 4x4 tile-merge game. "\
                "Manage your game state (board, score, win_tile) on the client side.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new game."""
    win_tile: Optional[int] = Field(
        default=engine.DEFAULT_WIN_TILE,
        gt=0,
        description="The tile value to achieve for winning the game (e.g., 2048)."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the tile spawner, for reproducible games."
    )

class GameStateData(BaseModel):
    """Represents the complete state of a game instance."""
    board: List[List[int]] = Field(..., description="The 4 x 4 game board, 0 for empty slots.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    progress: engine.GameProgressState = Field(
        ...,
        description="Current progress state of the game (IN_PROGRESS, GAME_WON, GAME_OVER)."
    )
    win_tile: int = Field(..., gt=0, description="The tile value required to win this game instance.")
    board_size: int = Field(default=BOARD_SIZE, description="The dimension of the square board.")

class MoveRequestData(BaseModel):
    """Data required to make a move."""
    board: List[List[int]] = Field(..., description="Current 4 x 4 game board state before the move.")
    score: int = Field(..., ge=0, description="Current score before the move.")
    direction: engine.DIRECTION = Field(
        ...,
        description="Direction of the move (up, down, left, right)."
    )
    win_tile: int = Field(default=engine.DEFAULT_WIN_TILE, gt=0, description="The win condition tile for this game instance.")
    seed: Optional[int] = Field(default=None, description="Seed for the tile spawner.")

class MoveResponseData(GameStateData):
    """Response after a move, including the new game state and move effectiveness."""
    move_was_effective: bool = Field(
        ...,
        description="True if the move resulted in a change to the board state, False otherwise."
    )
    spawned_index: Optional[int] = Field(
        default=None,
        description="Slot index (row * 4 + col) of the tile added after the move, if any."
    )
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g., if a move was not effective or the game ended."
    )

# --- API Endpoints ---

@app.post("/game/new", response_model=GameStateData, summary="Start a New Game")
@limiter.limit(RATE_LIMIT)
async def start_new_game(request: Request, settings: NewGameSettings):
    """
    Initializes a new game: an empty 4 x 4 board with two random tiles and score 0.

    - **win_tile**: Tile value to reach to win. Default is 2048.
    - **seed**: Optional seed making the two starting tiles reproducible.
    """
    win_tile = settings.win_tile if settings.win_tile is not None else engine.DEFAULT_WIN_TILE
    try:
        initial_board = engine.initialize_board(random.Random(settings.seed))
        return GameStateData(
            board=initial_board.rows(),
            score=initial_board.score,
            progress=engine.determine_game_status(initial_board, win_tile),
            win_tile=win_tile,
        )
    except Exception as e:
        logger.error(f"Unexpected error in /game/new: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during game creation: {str(e)}")


@app.post("/game/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit(RATE_LIMIT)
async def make_move(request: Request, request_data: MoveRequestData):
    """
    Processes a player's move in the game.

    The API will:
    1. Slide and merge the tiles in the requested direction.
    2. If the move changed the board, add a new random tile (2 or 4).
    3. Determine the new game status (IN_PROGRESS, GAME_WON, GAME_OVER).

    Returns the updated game state, whether the move was effective, where the
    new tile landed and an optional message.
    """
    try:
        current_board = Board.from_rows(request_data.board, request_data.score)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board structure in request: {str(e)}")

    message_for_client: Optional[str] = None
    spawned_index: Optional[int] = None

    try:
        result = engine.process_move(current_board, request_data.direction)
        final_board = result.board

        if result.changed:
            final_board, spawned_index = engine.add_random_tile(final_board, random.Random(request_data.seed))
        else:
            message_for_client = "Move was not effective; board state unchanged."

        current_progress = engine.determine_game_status(final_board, request_data.win_tile)

        if current_progress == engine.GameProgressState.GAME_WON:
            message_for_client = "Congratulations! You won!"
        elif current_progress == engine.GameProgressState.GAME_OVER:
            message_for_client = "Game Over. No more valid moves."

        return MoveResponseData(
            board=final_board.rows(),
            score=final_board.score,
            progress=current_progress,
            win_tile=request_data.win_tile,
            move_was_effective=result.changed,
            spawned_index=spawned_index,
            message=message_for_client
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error in /game/move: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")
