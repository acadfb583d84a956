from __future__ import annotations

from typing import Tuple

from fastapi.testclient import TestClient

from chessrules.engine.move import parse_square as sq
from chessrules.protocol.http.app import create_app


def _new() -> Tuple[TestClient, str]:
    client = TestClient(create_app())
    return client, client.post("/api/games").json()["game_id"]


def _move(client: TestClient, game_id: str, m: str) -> dict:
    r = client.post(
        f"/api/games/{game_id}/move", json={"from_sq": sq(m[:2]), "to_sq": sq(m[2:])}
    )
    assert r.status_code == 200
    return r.json()


def test_select_returns_legal_destinations() -> None:
    client, game_id = _new()
    r = client.get(f"/api/games/{game_id}/squares/{sq('g1')}/moves")
    assert r.status_code == 200
    assert r.json() == {"square": sq("g1"), "moves": [sq("f3"), sq("h3")]}
    # wrong color and out of range are empty, not errors
    assert client.get(f"/api/games/{game_id}/squares/{sq('g8')}/moves").json()["moves"] == []
    assert client.get(f"/api/games/{game_id}/squares/99/moves").json()["moves"] == []


def test_piece_at() -> None:
    client, game_id = _new()
    r = client.get(f"/api/games/{game_id}/squares/{sq('d8')}")
    assert r.json() == {"kind": "queen", "color": "black", "symbol": "q"}
    assert client.get(f"/api/games/{game_id}/squares/-5").json()["kind"] == "none"


def test_legal_and_illegal_moves() -> None:
    client, game_id = _new()
    body = _move(client, game_id, "e2e4")
    assert body["legal"] is True
    assert body["state"]["side_to_move"] == "black"
    assert body["state"]["en_passant"] == sq("e3")

    before = client.get(f"/api/games/{game_id}/state").json()
    r = client.post(f"/api/games/{game_id}/move", json={"from_sq": sq("e4"), "to_sq": sq("e5")})
    assert r.status_code == 200
    assert r.json()["legal"] is False
    assert r.json()["state"] == before


def test_checkmate_reported() -> None:
    client, game_id = _new()
    for m in ("f2f3", "e7e5", "g2g4"):
        _move(client, game_id, m)
    body = _move(client, game_id, "d8h4")
    status = body["state"]["status"]
    assert status == {
        "side": "white",
        "in_check": True,
        "has_moves": False,
        "checkmate": True,
        "stalemate": False,
    }
    black = client.get(f"/api/games/{game_id}/status", params={"side": "black"}).json()
    assert black["side"] == "black" and black["in_check"] is False


def test_status_rejects_unknown_side() -> None:
    client, game_id = _new()
    r = client.get(f"/api/games/{game_id}/status", params={"side": "green"})
    assert r.status_code == 422
