"""Board representation and terminal-state rules for 3x3 tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import IllegalMoveError, OutOfRangeError


class Cell(str, Enum):
    EMPTY = ""
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("An empty cell has no opponent")


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    X_WINS = "x_wins"
    O_WINS = "o_wins"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Cell) -> "Outcome":
        return cls.X_WINS if player is Cell.X else cls.O_WINS


Line = Tuple[int, int, int]

LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

BOARD_SIZE = 9


def check_index(index: int) -> int:
    if not 0 <= index < BOARD_SIZE:
        raise OutOfRangeError(f"Cell index {index} is outside 0-8")
    return index


def find_winner(cells: Sequence[Cell]) -> Tuple[Optional[Cell], Optional[Line]]:
    """Return the owner of the first completed line and the line itself.

    Works on any 9-long sequence so the search can pass its scratch list.
    """
    for line in LINES:
        a, b, c = line
        v = cells[a]
        if v is not Cell.EMPTY and v == cells[b] == cells[c]:
            return v, line
    return None, None


CellLike = Union[Cell, str, None]


def _to_cell(value: CellLike) -> Cell:
    if value is None:
        return Cell.EMPTY
    return Cell(value)


@dataclass(frozen=True)
class Board:
    """Nine cells indexed 0-8, row by row. Never mutated after creation."""

    cells: Tuple[Cell, ...] = field(default=(Cell.EMPTY,) * BOARD_SIZE)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(_to_cell(c) for c in self.cells))
        if len(self.cells) != BOARD_SIZE:
            raise ValueError(f"A board needs {BOARD_SIZE} cells, got {len(self.cells)}")

    @classmethod
    def from_cells(cls, values: Iterable[CellLike]) -> "Board":
        """Build a board from ``"X"``, ``"O"`` and ``None``/``""`` values."""
        return cls(tuple(values))

    def cell_at(self, index: int) -> Cell:
        return self.cells[check_index(index)]

    def apply_move(self, index: int, player: Cell) -> "Board":
        """Return a copy of the board with ``player`` placed at ``index``."""
        if player is Cell.EMPTY:
            raise ValueError("Only X or O can be placed")
        if self.cell_at(index) is not Cell.EMPTY:
            raise IllegalMoveError(f"Cell {index} is already occupied")
        cells = list(self.cells)
        cells[index] = player
        return Board(tuple(cells))

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c is Cell.EMPTY]

    def is_full(self) -> bool:
        return all(c is not Cell.EMPTY for c in self.cells)

    def evaluate(self) -> Outcome:
        # Wins are checked before fullness, so a full board with a line is a win.
        winner, _ = find_winner(self.cells)
        if winner is not None:
            return Outcome.win_for(winner)
        if self.is_full():
            return Outcome.DRAW
        return Outcome.IN_PROGRESS

    def winning_line(self) -> Optional[Line]:
        _, line = find_winner(self.cells)
        return line

    def count(self, player: Cell) -> int:
        return sum(1 for c in self.cells if c is player)

    def is_alternating(self) -> bool:
        """X starts and turns alternate, so X has as many marks as O or one more."""
        return self.count(Cell.X) - self.count(Cell.O) in (0, 1)

    def __str__(self) -> str:
        rows = []
        for r in range(3):
            rows.append("|".join(c.value or " " for c in self.cells[r * 3 : r * 3 + 3]))
        return "\n-+-+-\n".join(rows)


EMPTY_BOARD = Board()
