from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.routine_coach.coach import CHAT_ERROR_MESSAGE, RoutineCoach
from src.server.app import create_app, get_tracker


@pytest.fixture
def mock_ollama_client():
    client = MagicMock()
    client.chat.return_value = "いい調子です！"
    return client


@pytest.fixture
def client(tmp_path, monkeypatch, mock_ollama_client):
    db_path = tmp_path / "api_routine.db"
    monkeypatch.setenv("ROUTINE_TRACKER_DB_PATH", str(db_path))
    get_tracker.cache_clear()

    coach = RoutineCoach(ollama_client=mock_ollama_client)
    monkeypatch.setattr("src.server.routes.coach.get_coach", lambda: coach)

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    get_tracker.cache_clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_today_toggle_and_details_flow(client):
    resp = client.get("/api/tracker/today")
    assert resp.status_code == 200
    today = resp.json()
    assert [a["id"] for a in today["activities"]] == [
        "SLEEP",
        "BREAKFAST",
        "LUNCH",
        "DINNER",
        "WORKOUT",
        "CARDIO",
    ]
    assert today["completed_count"] == 0
    assert today["greeting"]

    resp = client.post("/api/tracker/activities/WORKOUT/toggle")
    assert resp.status_code == 200
    log = resp.json()
    workout = next(a for a in log["activities"] if a["id"] == "WORKOUT")
    assert workout["completed"] is True
    assert log["completed_count"] == 1

    resp = client.put(
        "/api/tracker/activities/BREAKFAST/details", json={"details": "オートミール"}
    )
    assert resp.status_code == 200
    breakfast = next(a for a in resp.json()["activities"] if a["id"] == "BREAKFAST")
    assert breakfast["details"] == "オートミール"
    assert breakfast["completed"] is False

    resp = client.get("/api/tracker/logs")
    assert resp.status_code == 200
    assert len(resp.json()) == 1


def test_unknown_activity_returns_404(client):
    resp = client.post("/api/tracker/activities/NAP/toggle")
    assert resp.status_code == 404

    resp = client.put("/api/tracker/activities/NAP/details", json={"details": "x"})
    assert resp.status_code == 404


def test_analytics(client):
    client.post("/api/tracker/activities/CARDIO/toggle")

    resp = client.get("/api/tracker/analytics", params={"range": "week"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["range"] == "week"
    assert data["summary"]["total_workouts"] == 1
    assert len(data["points"]) == 1

    resp = client.get("/api/tracker/analytics", params={"range": "decade"})
    assert resp.status_code == 422


def test_user_login_logout(client):
    assert client.get("/api/user").json() == {"user": None}

    resp = client.post(
        "/api/user/login", json={"name": "Yamada Taro", "email": "taro@example.com"}
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Yamada Taro"

    today = client.get("/api/tracker/today").json()
    assert today["user_name"] == "Yamada"

    assert client.post("/api/user/logout").json() == {"logged_out": True}
    assert client.get("/api/user").json() == {"user": None}


def test_coach_chat_and_reset(client, mock_ollama_client):
    resp = client.post("/api/coach/chat", json={"message": "今日はどう？"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["reply"]["text"] == "いい調子です！"
    assert [m["role"] for m in data["history"]] == ["user", "model"]

    assert client.post("/api/coach/reset").json() == []


def test_coach_failure_keeps_tracker_intact(client, mock_ollama_client):
    client.post("/api/tracker/activities/SLEEP/toggle")
    mock_ollama_client.chat.side_effect = TimeoutError("timed out")

    resp = client.post("/api/coach/chat", json={"message": "今日はどう？"})
    assert resp.status_code == 200
    assert resp.json()["reply"]["text"] == CHAT_ERROR_MESSAGE

    today = client.get("/api/tracker/today").json()
    sleep = next(a for a in today["activities"] if a["id"] == "SLEEP")
    assert sleep["completed"] is True


def test_coach_report(client):
    resp = client.post("/api/coach/report", json={"range": "month"})
    assert resp.status_code == 200
    assert resp.json() == {"range": "month", "report": "いい調子です！"}
