# board.py
# This file holds the grid state of a 4x4 tile-merge game: sixteen slots and a score.

from typing import List, Optional, Sequence, Tuple

BOARD_SIZE = 4
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# --- Index Math ---

def index_of(row: int, col: int) -> int:
    """
    Converts a (row, col) position into a flat slot index.
    Raises:
        IndexError: If the position is outside the grid.
    """
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise IndexError(f"Position ({row}, {col}) is outside the {BOARD_SIZE}x{BOARD_SIZE} grid.")
    return row * BOARD_SIZE + col

def position_of(index: int) -> Tuple[int, int]:
    """Converts a flat slot index into its (row, col) position."""
    _check_index(index)
    return divmod(index, BOARD_SIZE)

def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < CELL_COUNT:
        raise IndexError(f"Slot index must be an integer in [0, {CELL_COUNT}), got {index!r}.")

def is_valid_tile(value: int) -> bool:
    """A tile value is a power of two, at least 2."""
    return isinstance(value, int) and value >= 2 and (value & (value - 1)) == 0

# --- Board ---

class Board:
    """
    Sixteen slots laid out row by row (slot index = row * 4 + col) plus the
    accumulated score. An empty slot holds None.
    """

    def __init__(self, cells: Optional[Sequence[Optional[int]]] = None, score: int = 0):
        if cells is None:
            cells = [None] * CELL_COUNT
        if len(cells) != CELL_COUNT:
            raise ValueError(f"Board must have exactly {CELL_COUNT} slots, got {len(cells)}.")
        if score < 0:
            raise ValueError("Score must be non-negative.")
        for value in cells:
            if value is not None and not is_valid_tile(value):
                raise ValueError(f"Tile value {value!r} is not a power of two of at least 2.")
        self.cells: List[Optional[int]] = list(cells)
        self.score = score

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], score: int = 0) -> "Board":
        """
        Builds a board from 4 rows of 4 integers, where 0 marks an empty slot.
        Args:
            rows (Sequence[Sequence[int]]): The grid, top row first.
            score (int): The accumulated score.
        Returns:
            Board: A new board.
        Raises:
            ValueError: If the grid is not 4x4 or holds a value that is not a power of two.
        """
        if len(rows) != BOARD_SIZE or not all(len(row) == BOARD_SIZE for row in rows):
            raise ValueError(f"Board must be a {BOARD_SIZE}x{BOARD_SIZE} grid.")
        cells: List[Optional[int]] = []
        for row in rows:
            for value in row:
                if value == 0:
                    cells.append(None)
                elif is_valid_tile(value):
                    cells.append(value)
                else:
                    raise ValueError(f"Tile value {value!r} is not a power of two of at least 2.")
        return cls(cells, score)

    def get(self, index: int) -> Optional[int]:
        _check_index(index)
        return self.cells[index]

    def get_at(self, row: int, col: int) -> Optional[int]:
        return self.cells[index_of(row, col)]

    def set(self, index: int, value: Optional[int]) -> None:
        """Writes a tile value into a slot, or clears it when value is None."""
        _check_index(index)
        self.cells[index] = value

    def empty_slots(self) -> List[int]:
        """
        Get the indices of all empty slots.
        Returns:
            List[int]: Empty slot indices in ascending order.
        """
        return [index for index, value in enumerate(self.cells) if value is None]

    def max_tile(self) -> int:
        return max((value for value in self.cells if value is not None), default=0)

    def rows(self) -> List[List[int]]:
        """The grid as 4 lists of 4 integers, 0 for empty slots."""
        return [
            [value or 0 for value in self.cells[row * BOARD_SIZE:(row + 1) * BOARD_SIZE]]
            for row in range(BOARD_SIZE)
        ]

    def copy(self) -> "Board":
        return Board(self.cells, self.score)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells and self.score == other.score

    def __repr__(self) -> str:
        return f"Board(cells={self.cells!r}, score={self.score})"
