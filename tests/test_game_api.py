from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def _decide(client_and_scheduler) -> dict:
    client, scheduler, _engine = client_and_scheduler
    scheduler.run_pending()
    return client.get("/game").json()


def _free_cells(data: dict) -> list[int]:
    return [i for i, c in enumerate(data["cells"]) if not c]


def test_healthcheck_and_info(client_and_scheduler) -> None:
    client: TestClient = client_and_scheduler[0]

    assert client.get("/healthcheck").json() == {"status": "ok"}
    assert client.get("/info").json()["name"] == "tictactoe-engine"


def test_app_launch_starts_a_game(client_and_scheduler) -> None:
    client, _scheduler, engine = client_and_scheduler

    data = client.get("/game").json()

    assert engine.generation == 1
    assert data["phase"] == "deciding"
    assert data["message"] == "Deciding first turn..."
    assert data["cells"] == [""] * 9
    assert data["next"] is None


def test_turn_is_decided_after_delay(client_and_scheduler) -> None:
    data = _decide(client_and_scheduler)

    assert data["phase"] == "in_progress"
    assert data["next"] in {"X", "O"}
    assert data["message"] == f"{data['next']} Turn"


def test_move_is_applied(client_and_scheduler) -> None:
    client = client_and_scheduler[0]
    first = _decide(client_and_scheduler)["next"]

    resp = client.post("/game/moves", json={"cell": 4})

    assert resp.status_code == 200
    data = resp.json()
    assert data["cells"][4] == first
    assert data["next"] != first


def test_move_while_deciding_conflicts(client_and_scheduler) -> None:
    client = client_and_scheduler[0]

    resp = client.post("/game/moves", json={"cell": 0})

    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "game_not_accepting_moves"
    assert resp.json()["detail"]["game"]["phase"] == "deciding"


def test_invalid_and_occupied_cells(client_and_scheduler) -> None:
    client = client_and_scheduler[0]
    _decide(client_and_scheduler)

    bad = client.post("/game/moves", json={"cell": 9})
    assert bad.status_code == 422
    assert bad.json()["detail"]["error"] == "invalid_cell"

    assert client.post("/game/moves", json={"cell": 0}).status_code == 200
    taken = client.post("/game/moves", json={"cell": 0})
    assert taken.status_code == 409
    assert taken.json()["detail"]["error"] == "cell_occupied"


@pytest.mark.parametrize("cell", [True, "4", 4.5])
def test_non_integer_cells_are_invalid_not_coerced(client_and_scheduler, cell) -> None:
    client = client_and_scheduler[0]
    _decide(client_and_scheduler)

    resp = client.post("/game/moves", json={"cell": cell})

    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "invalid_cell"
    assert client.get("/game").json()["cells"] == [""] * 9


def test_full_game_then_restart(client_and_scheduler) -> None:
    client = client_and_scheduler[0]
    first = _decide(client_and_scheduler)["next"]

    data = {}
    for cell in [0, 3, 1, 4, 2]:
        data = client.post("/game/moves", json={"cell": cell}).json()

    assert data["phase"] == "won"
    assert data["winner"] == first
    assert data["line"] == [0, 1, 2]
    assert data["message"] == f"{first} wins!"

    closed = client.post("/game/moves", json={"cell": 5})
    assert closed.status_code == 409

    restarted = client.post("/game/start")
    assert restarted.status_code == 201
    assert restarted.json()["phase"] == "deciding"
    assert restarted.json()["cells"] == [""] * 9
    assert restarted.json()["generation"] == 2


def test_ws_sends_state_then_updates(client_and_scheduler) -> None:
    client, scheduler, _engine = client_and_scheduler

    with client.websocket_connect("/ws/game") as ws:
        hello = ws.receive_json()
        assert hello["type"] == "game_state"
        assert hello["phase"] == "deciding"

        scheduler.run_pending()
        decided = ws.receive_json()
        assert decided["type"] == "game_updated"
        assert decided["event"] == "TURN_DECIDED"
        assert decided["phase"] == "in_progress"

        res = client.post("/game/moves", json={"cell": _free_cells(decided)[0]})
        assert res.status_code == 200

        moved = ws.receive_json()
        assert moved["event"] == "MOVE_APPLIED"
        assert moved["cells"][0] == decided["next"]
        assert moved["seq"] > decided["seq"]
