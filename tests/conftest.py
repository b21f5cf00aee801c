"""Shared fixtures for the PerfectXO test suite."""

from typing import Dict

import pytest

from perfectxo.board import Board
from perfectxo.game import GameState, apply_move, new_game


def _walk(state: GameState, seen: Dict[Board, GameState]) -> None:
    if state.board in seen:
        return
    seen[state.board] = state
    if state.is_terminal:
        return
    for index in state.board.empty_cells():
        _walk(apply_move(state, index), seen)


@pytest.fixture(scope="session")
def reachable_states() -> Dict[Board, GameState]:
    """Every position reachable from the empty board, keyed by board."""
    seen: Dict[Board, GameState] = {}
    _walk(new_game(), seen)
    return seen
