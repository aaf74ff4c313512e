"""Minimal API tests. /health and /menu need no Telegram token."""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from contactdesk.application import ConfigMissing


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_menu_rows(client):
    r = client.get("/menu")
    assert r.status_code == 200
    rows = r.json()
    assert [row["action"] for row in rows] == [
        "PICK_CONTACT",
        "CREATE_NEW_CONTACT",
        "DISPLAY_CONTACT",
        "EDIT_UNKNOWN_CONTACT",
    ]
    assert rows[0]["centered"] is True
    assert rows[0]["description"] is None
    assert rows[3]["disclosure"] is True
    assert rows[3]["height"] > rows[2]["height"]


def test_menu_unavailable_returns_503(client, monkeypatch):
    from api import main as api_main

    def missing():
        raise ConfigMissing("Menu resource not found: /nowhere/menu.yaml")

    monkeypatch.setattr(api_main, "get_menu", missing)
    r = client.get("/menu")
    assert r.status_code == 503
    assert "not found" in r.json()["detail"]


def test_webhook_rejects_invalid_json(client):
    r = client.post(
        "/webhook/telegram", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400


def test_webhook_without_token_is_a_no_op(client, monkeypatch):
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    body = {
        "update_id": 1,
        "message": {
            "message_id": 1,
            "from": {"id": 1, "is_bot": False, "first_name": "U"},
            "chat": {"id": 123, "type": "private"},
            "date": 1,
            "text": "/start",
        },
    }
    r = client.post("/webhook/telegram", json=body)
    assert r.status_code == 200
    assert r.json() == {}
