"""Exhaustive minimax search for perfect tic-tac-toe play."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board, Cell, find_winner
from .errors import InvalidStateError


logger = logging.getLogger(__name__)

WIN_SCORE = 10


def _terminal_score(cells: List[Cell], depth: int, player: Cell) -> Optional[int]:
    winner, _ = find_winner(cells)
    if winner is player:
        return WIN_SCORE - depth  # quicker wins score higher
    if winner is not None:
        return -WIN_SCORE + depth  # slower losses score higher
    if Cell.EMPTY not in cells:
        return 0
    return None


def score(board: Board, depth: int, player: Cell) -> int:
    """Score a finished board from ``player``'s point of view, ``depth`` plies deep."""
    value = _terminal_score(list(board.cells), depth, player)
    if value is None:
        raise InvalidStateError("Only finished boards can be scored")
    return value


@dataclass
class MinimaxAI:
    """Perfect player for one side.

    ``pruning`` switches on alpha-beta cutoffs. Ties still go to the lowest
    cell index, so both modes pick the same move; only ``nodes_searched``
    differs.
    """

    player: Cell = Cell.O
    pruning: bool = True
    nodes_searched: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.player = Cell(self.player)
        if self.player is Cell.EMPTY:
            raise ValueError("The AI must play X or O")

    # ---- public API ----

    def choose(self, board: Board) -> int:
        """Return the best cell index for ``self.player`` to play on ``board``."""
        if board.evaluate().is_terminal:
            raise InvalidStateError("Cannot search a finished board")

        cells = list(board.cells)
        self.nodes_searched = 0
        best_value = -math.inf
        best_move = -1

        for index in _empty(cells):
            alpha = best_value if self.pruning else -math.inf
            cells[index] = self.player
            try:
                value = self._minimax(cells, 1, False, alpha, math.inf)
            finally:
                cells[index] = Cell.EMPTY
            # Strictly greater: the lowest index keeps ties.
            if value > best_value:
                best_value, best_move = value, index

        logger.debug(
            "%s plays %d (score %s, %d nodes, pruning=%s)",
            self.player.value,
            best_move,
            best_value,
            self.nodes_searched,
            self.pruning,
        )
        return best_move

    def value(self, board: Board, maximizing: bool, depth: int = 0) -> int:
        """Minimax value of ``board`` with ``self.player`` as the maximizer."""
        self.nodes_searched = 0
        return self._minimax(list(board.cells), depth, maximizing, -math.inf, math.inf)

    # ---- core search ----

    def _minimax(
        self,
        cells: List[Cell],
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> int:
        self.nodes_searched += 1
        terminal = _terminal_score(cells, depth, self.player)
        if terminal is not None:
            return terminal

        if maximizing:
            best = -math.inf
            for index in _empty(cells):
                cells[index] = self.player
                try:
                    child = self._minimax(cells, depth + 1, False, alpha, beta)
                finally:
                    cells[index] = Cell.EMPTY
                best = max(best, child)
                alpha = max(alpha, best)
                if self.pruning and alpha >= beta:
                    break
        else:
            best = math.inf
            opponent = self.player.opponent
            for index in _empty(cells):
                cells[index] = opponent
                try:
                    child = self._minimax(cells, depth + 1, True, alpha, beta)
                finally:
                    cells[index] = Cell.EMPTY
                best = min(best, child)
                beta = min(beta, best)
                if self.pruning and alpha >= beta:
                    break
        return int(best)


def _empty(cells: List[Cell]) -> List[int]:
    return [i for i, c in enumerate(cells) if c is Cell.EMPTY]


def find_best_move(board: Board, player: Cell, pruning: bool = True) -> int:
    """Best move for ``player`` on ``board`` under perfect opposing play."""
    return MinimaxAI(player=player, pruning=pruning).choose(board)


def minimax(board: Board, depth: int, maximizing: bool, player: Cell) -> int:
    """Plain minimax value of ``board`` with ``player`` maximizing."""
    return MinimaxAI(player=player, pruning=False).value(board, maximizing, depth)
