import json

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError as SettingsError

from elevate.dashboard import create_app, DashboardSettings
from elevate.main import build_parser, main
from elevate.models import Habit, HabitCategory


@pytest.fixture
def client(data_service):
    return TestClient(create_app(data_service, DashboardSettings()))


@pytest.fixture
def habit(data_service):
    return data_service.habits.add_habit(Habit(name="Run", category=HabitCategory.HEALTH))


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["version"] == "1.0.0"
    assert "X-Process-Time" in response.headers


def test_docs_hidden_without_debug(client):
    assert client.get("/api/docs").status_code == 404


def test_lifespan_closes_session(data_service):
    with TestClient(create_app(data_service)) as client:
        assert client.get("/health").status_code == 200
        assert not data_service.closed

    assert data_service.closed


# ===== ПРИВЫЧКИ =====

def test_list_and_get_habit(client, habit):
    listed = client.get("/api/habits").json()
    single = client.get(f"/api/habits/{habit.habit_id}").json()

    assert [h["name"] for h in listed] == ["Run"]
    assert single["habit_id"] == habit.habit_id
    assert single["category"] == "Health & Fitness"
    assert single["completed_today"] is False


def test_unknown_habit_returns_404(client):
    assert client.get("/api/habits/missing").status_code == 404
    assert client.post("/api/habits/missing/complete", json={}).status_code == 404
    assert client.get("/api/charts/habits/missing/weekly").status_code == 404


def test_complete_and_undo(client, habit, data_service):
    completed = client.post(f"/api/habits/{habit.habit_id}/complete", json={"value": 2, "note": "park"})

    assert completed.status_code == 200
    body = completed.json()
    assert body["completed_today"] is True
    assert body["streak"] == 1
    assert body["completions"][0]["value"] == 2
    assert body["completions"][0]["notes"] == "park"

    undone = client.post(f"/api/habits/{habit.habit_id}/undo").json()

    assert undone["completed_today"] is False
    assert undone["streak"] == 0
    assert undone["longest_streak"] == 1
    assert data_service.habits.get_completed_today_count() == 0


def test_complete_rejects_negative_value(client, habit):
    response = client.post(f"/api/habits/{habit.habit_id}/complete", json={"value": -1})

    assert response.status_code == 422


def test_summary_endpoint(client, habit):
    client.post(f"/api/habits/{habit.habit_id}/complete", json={})

    summary = client.get("/api/habits/summary").json()

    assert summary["date"] == "2025-06-11"
    assert summary["completed_today"] == 1
    assert summary["today_completion_rate"] == 1.0


def test_top_and_attention(client, data_service, habit):
    other = data_service.habits.add_habit(Habit(name="Read"))
    data_service.habits.complete_habit(habit)

    top = client.get("/api/habits/top", params={"limit": 1}).json()

    assert [h["habit_id"] for h in top] == [habit.habit_id]
    assert client.get("/api/habits/attention").json() == []
    assert client.get("/api/habits/top", params={"limit": 101}).status_code == 422
    assert other.habit_id in [h["habit_id"] for h in client.get("/api/habits").json()]


def test_reads_do_not_write_and_actions_do(client, habit, store):
    before = store.save_count
    for path in ("/api/habits", "/api/habits/summary", "/api/habits/attention", "/api/habits/top",
                 f"/api/habits/{habit.habit_id}", f"/api/charts/habits/{habit.habit_id}/weekly",
                 f"/api/charts/habits/{habit.habit_id}/monthly", "/api/charts/categories"):
        assert client.get(path).status_code == 200

    assert store.save_count == before

    client.post(f"/api/habits/{habit.habit_id}/complete", json={})
    client.post(f"/api/habits/{habit.habit_id}/undo")

    assert store.save_count == before + 2


# ===== ГРАФИКИ =====

def test_weekly_chart(client, habit, data_service):
    data_service.habits.complete_habit(habit)

    chart = client.get(f"/api/charts/habits/{habit.habit_id}/weekly").json()

    assert chart["labels"] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert chart["datasets"][0]["label"] == "Run"
    assert chart["datasets"][0]["data"][2] == 1.0


def test_monthly_chart(client, habit):
    chart = client.get(f"/api/charts/habits/{habit.habit_id}/monthly").json()

    assert len(chart["labels"]) == 30
    assert chart["labels"][0] == "1"


def test_categories_chart(client, data_service, habit):
    assert client.get("/api/charts/categories").json()["labels"] == []

    data_service.habits.complete_habit(habit)
    chart = client.get("/api/charts/categories").json()

    assert chart["labels"] == ["Health & Fitness"]
    assert [d["label"] for d in chart["datasets"]] == ["Выполнения", "Средний streak"]
    assert chart["datasets"][0]["data"] == [1]


# ===== НАСТРОЙКИ И CLI =====

def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ELEVATE_DASHBOARD_PORT", "9000")

    assert DashboardSettings().PORT == 9000


def test_settings_reject_bad_port():
    with pytest.raises(SettingsError):
        DashboardSettings(PORT=70000)


def test_parser():
    parser = build_parser()

    assert parser.parse_args(["export", "--format", "csv"]).format == "csv"
    args = parser.parse_args(["dashboard", "--port", "8080", "--dev"])
    assert (args.port, args.dev, args.host) == (8080, True, None)
    with pytest.raises(SystemExit):
        parser.parse_args(["export", "--format", "xml"])


@pytest.fixture
def cli_env(tmp_path, monkeypatch, restore_root_logger):
    for variable, name in (("DATA_DIR", "data"), ("BACKUP_DIR", "backups"),
                           ("EXPORT_DIR", "exports"), ("LOG_DIR", "logs")):
        monkeypatch.setenv(variable, str(tmp_path / name))
    monkeypatch.setenv("LOG_TO_FILE", "false")
    return tmp_path


def test_cli_summary(cli_env, capsys):
    assert main(["summary"]) == 0

    assert "📅" in capsys.readouterr().out


def test_cli_export_json(cli_env, capsys):
    assert main(["export"]) == 0

    exported = list((cli_env / "exports").glob("elevate_export_*.json"))
    assert len(exported) == 1
    assert str(exported[0]) in capsys.readouterr().out
    assert json.loads(exported[0].read_text(encoding="utf-8"))["export_info"]["format"] == "json"


def test_cli_rejects_bad_config(cli_env, monkeypatch, capsys):
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus")

    assert main(["summary"]) == 2
    assert "TIMEZONE" in capsys.readouterr().err
