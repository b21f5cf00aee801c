"""Tests for the FastAPI PerfectXO interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from perfectxo import api
from perfectxo.api import app


client = TestClient(app)
api.AI_THINK_DELAY = 0.0


def _new_game(**body) -> dict:
    response = client.post("/api/game", json=body)
    assert response.status_code == 200
    return response.json()


def test_create_game_and_first_move():
    payload = _new_game()
    assert payload["toMove"] == "X"
    assert payload["outcome"] == "in_progress"
    assert payload["cells"] == [""] * 9
    assert payload["moveLog"] == []
    assert payload["winningLine"] is None

    game_id = payload["id"]
    move_response = client.post(f"/api/game/{game_id}/move", json={"index": 4})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["cells"][4] == "X"
    assert state["toMove"] == "O"
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["toMove"] == "X"
    assert final_state["cells"][0] == "O"
    assert final_state["lastMove"] == {"player": "O", "index": 0}
    assert final_state["aiPending"] is False


def test_invalid_move_rejected():
    game_id = _new_game(pruning=False)["id"]

    first_move = client.post(f"/api/game/{game_id}/move", json={"index": 4})
    assert first_move.status_code == 200

    duplicate_move = client.post(f"/api/game/{game_id}/move", json={"index": 4})
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]


def test_rejects_out_of_range_index():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"index": 9})
    assert response.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/INVALID").status_code == 404


def test_finished_game_rejects_moves_until_reset():
    game_id = _new_game()["id"]
    state = client.get(f"/api/game/{game_id}").json()
    while state["outcome"] == "in_progress":
        client.post(f"/api/game/{game_id}/move", json={"index": state["emptyCells"][0]})
        state = client.get(f"/api/game/{game_id}").json()

    assert state["outcome"] in ("o_wins", "draw")
    if state["outcome"] == "o_wins":
        assert len(state["winningLine"]) == 3
    assert state["emptyCells"] == []

    blocked = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert blocked.status_code == 400

    reset = client.post(f"/api/game/{game_id}/reset")
    assert reset.status_code == 200
    fresh = reset.json()
    assert fresh["cells"] == [""] * 9
    assert fresh["outcome"] == "in_progress"
    assert fresh["moveLog"] == []


def test_delete_game():
    game_id = _new_game()["id"]
    assert client.delete(f"/api/game/{game_id}").status_code == 200
    assert client.get(f"/api/game/{game_id}").status_code == 404
    assert client.delete(f"/api/game/{game_id}").status_code == 404


def test_idle_games_expire():
    stale_id = _new_game()["id"]
    api.SESSIONS[stale_id].last_seen -= api.SESSION_TTL_SECONDS + 1
    fresh_id = _new_game()["id"]

    assert client.get(f"/api/game/{stale_id}").status_code == 404
    assert client.get(f"/api/game/{fresh_id}").status_code == 200
