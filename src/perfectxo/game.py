"""Turn order and game lifecycle for human-vs-computer tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .ai import MinimaxAI
from .board import EMPTY_BOARD, Board, Cell, Line, Outcome, check_index
from .errors import GameOverError, IllegalMoveError, InvalidStateError


logger = logging.getLogger(__name__)

COMPUTER: Cell = Cell.O

Move = Tuple[Cell, int]


@dataclass(frozen=True)
class GameState:
    board: Board = EMPTY_BOARD
    to_move: Cell = Cell.X
    outcome: Outcome = Outcome.IN_PROGRESS
    moves: Tuple[Move, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal


# ---- pure API used by the controller & the HTTP layer ----


def new_game() -> GameState:
    return GameState()


def apply_move(state: GameState, index: int) -> GameState:
    """Place the mark of the side to move and return the resulting state.

    Raises ``GameOverError`` on a finished game and ``IllegalMoveError`` on an
    occupied cell; ``state`` itself is never changed.
    """
    check_index(index)
    if state.is_terminal:
        raise GameOverError("Game already finished")
    board = state.board.apply_move(index, state.to_move)
    outcome = board.evaluate()
    return GameState(
        board=board,
        to_move=state.to_move if outcome.is_terminal else state.to_move.opponent,
        outcome=outcome,
        moves=state.moves + ((state.to_move, index),),
    )


def is_computers_turn(state: GameState, computer: Cell = COMPUTER) -> bool:
    return not state.is_terminal and state.to_move is computer


def computer_move(state: GameState, ai: Optional[MinimaxAI] = None) -> GameState:
    """Let the engine pick and play a move for the side to move."""
    if state.is_terminal:
        raise InvalidStateError("Cannot search a finished game")
    if ai is None:
        ai = MinimaxAI(player=state.to_move)
    elif ai.player is not state.to_move:
        raise IllegalMoveError("It is not this AI player's turn")
    return apply_move(state, ai.choose(state.board))


def outcome(state: GameState) -> Outcome:
    return state.outcome


def winning_line(state: GameState) -> Optional[Line]:
    if state.outcome in (Outcome.X_WINS, Outcome.O_WINS):
        return state.board.winning_line()
    return None


def reset() -> GameState:
    """Start over from the empty board with X to move."""
    return new_game()


# ---- stateful controller ----


@dataclass
class GameController:
    """Owns one game's state and the computer opponent for it."""

    ai: MinimaxAI = field(default_factory=lambda: MinimaxAI(player=COMPUTER))
    state: GameState = field(default_factory=new_game)

    @property
    def computer(self) -> Cell:
        return self.ai.player

    @property
    def human(self) -> Cell:
        return self.ai.player.opponent

    def is_computers_turn(self) -> bool:
        return is_computers_turn(self.state, self.computer)

    def apply_human_move(self, index: int) -> GameState:
        if self.state.is_terminal:
            raise GameOverError("Game already finished")
        if self.state.to_move is not self.human:
            raise IllegalMoveError("Wait for the computer to move")
        self._advance(apply_move(self.state, index))
        return self.state

    def request_computer_move(self) -> GameState:
        if self.state.is_terminal:
            raise GameOverError("Game already finished")
        if not self.is_computers_turn():
            raise IllegalMoveError("It is not the computer's turn")
        self._advance(computer_move(self.state, self.ai))
        return self.state

    def play(self, index: int) -> GameState:
        """Apply the human move and, if the game goes on, the computer's reply."""
        self.apply_human_move(index)
        if self.is_computers_turn():
            self.request_computer_move()
        return self.state

    def reset(self) -> GameState:
        self.state = reset()
        logger.info("Game reset")
        return self.state

    def winning_line(self) -> Optional[Line]:
        return winning_line(self.state)

    def _advance(self, state: GameState) -> None:
        self.state = state
        if state.is_terminal:
            logger.info("Game finished: %s after %d moves", state.outcome.value, len(state.moves))
