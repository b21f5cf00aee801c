"""Exceptions raised by the PerfectXO engine."""

from __future__ import annotations


class PerfectXOError(ValueError):
    """Base class for every error the engine raises."""


class IllegalMoveError(PerfectXOError):
    """The target cell is occupied or it is not that side's turn."""


class GameOverError(IllegalMoveError):
    """A move was attempted after the game finished; only reset is allowed."""


class InvalidStateError(PerfectXOError):
    """The search was asked for a move on a finished or full board."""


class OutOfRangeError(PerfectXOError, IndexError):
    """A cell index outside 0-8."""
