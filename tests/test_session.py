import random

import pytest

from board import Board
from engine import DIRECTION, GameProgressState, InvalidDirectionError
from session import GameSession

EMPTY_ROW = [0, 0, 0, 0]


def occupied(board):
    return [index for index, value in enumerate(board.cells) if value is not None]


def test_new_session_has_two_tiles():
    session = GameSession(rng=random.Random(5))
    assert len(occupied(session.board)) == 2
    assert all(session.board.get(i) in (2, 4) for i in occupied(session.board))
    assert session.score == 0
    assert session.status == GameProgressState.IN_PROGRESS
    assert session.last_spawn is None


def test_effective_move_spawns_exactly_one_tile():
    session = GameSession(rng=random.Random(1))
    session.board = Board.from_rows([[2, 0, 2, 4], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW])
    result = session.move(DIRECTION.LEFT)
    assert result.changed
    assert result.board.rows()[0] == [4, 4, 0, 0]
    assert session.score == 4
    assert len(occupied(session.board)) == len(occupied(result.board)) + 1
    assert session.last_spawn is not None
    assert result.board.get(session.last_spawn) is None
    assert session.board.get(session.last_spawn) in (2, 4)


def test_ineffective_move_spawns_nothing():
    session = GameSession(rng=random.Random(1))
    board = Board.from_rows([[2, 4, 8, 16], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW], score=20)
    session.board = board.copy()
    for direction in (DIRECTION.LEFT, DIRECTION.RIGHT, DIRECTION.UP):
        result = session.move(direction)
        assert not result.changed
        assert session.board == board
        assert session.last_spawn is None


def test_invalid_direction_leaves_state_alone():
    session = GameSession(rng=random.Random(3))
    before = session.board.copy()
    with pytest.raises(InvalidDirectionError):
        session.move("sideways")
    assert session.board == before


def test_restart_resets_score_and_board():
    session = GameSession(rng=random.Random(2))
    session.board = Board.from_rows([[1024, 1024, 0, 0], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW], score=500)
    session.move(DIRECTION.LEFT)
    assert session.status == GameProgressState.GAME_WON
    session.restart()
    assert session.score == 0
    assert len(occupied(session.board)) == 2
    assert session.last_spawn is None


def test_same_seed_same_game():
    first = GameSession(rng=random.Random(99))
    second = GameSession(rng=random.Random(99))
    for direction in [DIRECTION.LEFT, DIRECTION.UP, DIRECTION.RIGHT, DIRECTION.DOWN] * 5:
        first.move(direction)
        second.move(direction)
    assert first.board == second.board


def test_game_over_detection():
    session = GameSession(rng=random.Random(4))
    session.board = Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])
    assert not session.has_any_legal_move()
    assert session.status == GameProgressState.GAME_OVER


def test_custom_win_tile():
    session = GameSession(rng=random.Random(4), win_tile=8)
    session.board = Board.from_rows([[4, 4, 0, 0], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW])
    session.move(DIRECTION.RIGHT)
    assert session.status == GameProgressState.GAME_WON
