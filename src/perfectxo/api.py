"""FastAPI JSON surface for playing PerfectXO from a browser front end."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .ai import MinimaxAI
from .errors import PerfectXOError
from .game import COMPUTER, GameController


logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one game's controller and its pending-AI flag."""

    controller: GameController
    ai_pending: bool = False
    last_seen: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="PerfectXO", description="Tic-tac-toe against an unbeatable computer")


# Pause before the computer replies so the human move shows up first.
AI_THINK_DELAY: float = 0.3
SESSION_TTL_SECONDS = 60 * 30  # 30 minutes


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    pruning: bool = Field(
        default=True,
        description="Use alpha-beta cutoffs; the chosen moves are the same either way",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: int = Field(ge=0, le=8)


def _cleanup_sessions() -> None:
    """Drop games nobody has touched for SESSION_TTL_SECONDS."""

    now = time.time()
    expired = [
        game_id
        for game_id, session in list(SESSIONS.items())
        if not session.ai_pending and now - session.last_seen >= SESSION_TTL_SECONDS
    ]
    for game_id in expired:
        SESSIONS.pop(game_id, None)
    if expired:
        logger.info("Expired %d idle games", len(expired))


def _create_session(pruning: bool) -> Tuple[str, GameSession]:
    _cleanup_sessions()
    controller = GameController(ai=MinimaxAI(player=COMPUTER, pruning=pruning))
    session = GameSession(controller=controller)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s (pruning=%s)", session_id, pruning)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        session = SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc
    session.last_seen = time.time()
    return session


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    with session.lock:
        try:
            if session.controller.is_computers_turn():
                session.controller.request_computer_move()
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        state = session.controller.state
        line = session.controller.winning_line()
        payload: Dict[str, object] = {
            "id": game_id,
            "cells": [c.value for c in state.board.cells],
            "toMove": state.to_move.value,
            "outcome": state.outcome.value,
            "winningLine": list(line) if line else None,
            "emptyCells": [] if state.is_terminal else state.board.empty_cells(),
            "moveLog": [
                {"player": player.value, "index": index} for player, index in state.moves
            ],
            "aiPending": session.ai_pending,
        }
        if state.moves:
            payload["lastMove"] = payload["moveLog"][-1]  # type: ignore[index]
        return payload


def _apply_player_move(
    game_id: str,
    session: GameSession,
    index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        try:
            session.controller.apply_human_move(index)
        except PerfectXOError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        should_schedule_ai = session.controller.is_computers_turn()
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: Optional[NewGameRequest] = None) -> Dict[str, object]:
    pruning = request.pruning if request is not None else True
    game_id, session = _create_session(pruning)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.index, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.controller.reset()
    return _serialize_session(game_id, session)


@app.delete("/api/game/{game_id}")
def delete_game(game_id: str) -> Dict[str, str]:
    _get_session(game_id)
    SESSIONS.pop(game_id, None)
    logger.info("Deleted game %s", game_id)
    return {"id": game_id}
