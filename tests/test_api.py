"""Tests for the REST surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from wordgame import main


@pytest.fixture
def client():
    return TestClient(main.app)


def test_health(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["ok"] is True


def test_validate_word(client) -> None:
    main.dictionary.append("en", ["scrabble"])
    res = client.get("/dict/validate", params={"word": "Scrabble", "language": "en"})
    assert res.json() == {"word": "SCRABBLE", "language": "en", "valid": True}

    res = client.get("/dict/validate", params={"word": "qwxz", "language": "en"})
    assert res.json()["valid"] is False


def test_reload_unknown_language(client) -> None:
    assert client.post("/dict/xx/reload").status_code == 404


def test_unknown_game(client) -> None:
    assert client.get("/games/missing").status_code == 404


def test_player_games_empty(client) -> None:
    res = client.get("/players/nobody/games")
    assert res.status_code == 200
    assert res.json() == []


def test_dictionary_info(client) -> None:
    main.dictionary.append("en", ["scrabble"])
    res = client.get("/dict/en")
    assert res.status_code == 200
    body = res.json()
    assert body["loaded"] is True
    assert body["words"] >= 1

    assert client.get("/dict/xx").json() == {"language": "xx", "loaded": False, "words": 0}
