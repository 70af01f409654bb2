from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from knightfall.config import EngineOptions
from knightfall.engine.board import STARTPOS_FEN
from knightfall.protocol.http.app import create_app


FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


def test_piece_moves() -> None:
    client = TestClient(create_app())
    r = client.post("/api/moves", json={"fen": STARTPOS_FEN, "square": "g1"})
    assert r.status_code == 200
    body = r.json()
    assert body["square"] == "g1"
    assert body["piece"] == "white knight"
    assert sorted(body["moves"]) == ["g1f3", "g1h3"]


def test_piece_moves_on_empty_square() -> None:
    client = TestClient(create_app())
    r = client.post("/api/moves", json={"fen": STARTPOS_FEN, "square": "e4"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "invalid_position"
    assert "e4" in err["message"]


def test_bad_fen_is_bad_request() -> None:
    client = TestClient(create_app())
    r = client.post("/api/legal", json={"fen": "not a fen"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"


def test_missing_field_is_validation_error() -> None:
    client = TestClient(create_app())
    r = client.post("/api/moves", json={"fen": STARTPOS_FEN})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(f["field"].endswith("square") for f in err["field_errors"])


def test_attacked() -> None:
    client = TestClient(create_app())
    r = client.post("/api/attacked", json={"fen": STARTPOS_FEN, "square": "f3", "color": "white"})
    assert r.status_code == 200
    assert r.json() == {"square": "f3", "color": "white", "attacked": True}

    r = client.post("/api/attacked", json={"fen": STARTPOS_FEN, "square": "e4", "color": "black"})
    assert r.json()["attacked"] is False


def test_legal_reports_checkmate() -> None:
    client = TestClient(create_app())
    r = client.post("/api/legal", json={"fen": FOOLS_MATE})
    assert r.status_code == 200
    body = r.json()
    assert body["side_to_move"] == "white"
    assert body["legal_moves"] == []
    assert body["in_check"] is True
    assert body["checkmate"] is True
    assert body["stalemate"] is False


def test_apply_move() -> None:
    client = TestClient(create_app())
    r = client.post("/api/apply", json={"fen": STARTPOS_FEN, "move": "e2e4"})
    assert r.status_code == 200
    assert r.json()["fen"] == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def test_apply_illegal_move() -> None:
    client = TestClient(create_app())
    r = client.post("/api/apply", json={"fen": STARTPOS_FEN, "move": "e2e5"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "illegal_move"


def test_best_move_from_search() -> None:
    client = TestClient(create_app())
    r = client.post(
        "/api/best-move",
        json={"fen": "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1", "depth": 2, "difficulty": 3},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["provider"] == "search"
    assert body["move"] is not None


def test_best_move_when_mated() -> None:
    client = TestClient(create_app())
    r = client.post("/api/best-move", json={"fen": FOOLS_MATE, "depth": 1})
    assert r.status_code == 200
    assert r.json() == {"move": None, "provider": None}


def test_best_move_depth_out_of_range() -> None:
    client = TestClient(create_app())
    r = client.post("/api/best-move", json={"fen": STARTPOS_FEN, "depth": 9})
    assert r.status_code == 422


def test_best_move_prefers_book(tmp_path: Path) -> None:
    book = tmp_path / "book.json"
    book.write_text(json.dumps({STARTPOS_FEN: [{"uci": "c2c4"}]}), encoding="utf-8")
    client = TestClient(create_app(EngineOptions(book_path=str(book))))
    r = client.post("/api/best-move", json={"fen": STARTPOS_FEN})
    assert r.json() == {"move": "c2c4", "provider": "book"}


def test_request_id_is_echoed() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz", headers={"x-request-id": "abc123"})
    assert r.headers["x-request-id"] == "abc123"
