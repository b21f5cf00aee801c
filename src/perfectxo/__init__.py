"""PerfectXO package exposing the board rules, the minimax AI, and the web API."""

from .ai import MinimaxAI, find_best_move
from .api import app
from .board import Board, Cell, Outcome
from .errors import (
    GameOverError,
    IllegalMoveError,
    InvalidStateError,
    OutOfRangeError,
    PerfectXOError,
)
from .game import GameController, GameState, new_game

__all__ = [
    "Board",
    "Cell",
    "GameController",
    "GameOverError",
    "GameState",
    "IllegalMoveError",
    "InvalidStateError",
    "MinimaxAI",
    "Outcome",
    "OutOfRangeError",
    "PerfectXOError",
    "app",
    "find_best_move",
    "new_game",
]
