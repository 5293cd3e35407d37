import io
import json
import random

import pandas as pd
import pytest

from elevate.config import AppConfig
from elevate.database.store import (
    MemoryStore,
    JsonFileStore,
    TIPS_KEY,
    HABITS_KEY,
    COMMUNITY_STORIES_KEY,
    USER_PREFERENCES_KEY,
)
from elevate.models import Habit, Goal, HabitCategory
from elevate.models.validation import ValidationError
from elevate.services.data_service import DataService, CSV_COLUMNS

from conftest import TODAY


def test_session_loads_everything_on_creation(data_service):
    assert len(data_service.habits) == 0
    assert len(data_service.tips.tips) == 3
    assert len(data_service.community.stories) == 4
    assert data_service.preferences.week_starts_on_monday


# ===== НАСТРОЙКИ =====

def test_week_start_propagates_to_services(data_service, store, clock):
    data_service.update_preferences(week_starts_on_monday=False)

    assert not data_service.habits.week_starts_on_monday
    assert not data_service.goals.week_starts_on_monday
    points = data_service.charts.get_weekly_completion_data(Habit(name="Walk"), today=TODAY)
    assert points[0].label == "Sun"
    assert store.raw(USER_PREFERENCES_KEY)[0]["week_starts_on_monday"] is False

    # сохранённые настройки важнее значения из конфигурации
    reopened = DataService(store, clock=clock, week_starts_on_monday=True)
    assert not reopened.habits.week_starts_on_monday


def test_config_week_start_used_without_stored_preferences(clock):
    session = DataService(MemoryStore(), clock=clock, week_starts_on_monday=False)

    assert not session.preferences.week_starts_on_monday
    assert not session.habits.week_starts_on_monday


def test_unknown_preference_is_rejected(data_service):
    with pytest.raises(ValidationError):
        data_service.update_preferences(font_size=12)


def test_invalid_reminder_time_is_rejected(data_service):
    with pytest.raises(ValidationError):
        data_service.update_preferences(daily_reminder_time="25:99")


def test_corrupted_preferences_fall_back_to_defaults(clock):
    store = MemoryStore({USER_PREFERENCES_KEY: [{"daily_reminder_time": "nope"}]})

    session = DataService(store, clock=clock)

    assert session.preferences.daily_reminder_time == "09:00"


# ===== СВОДКА =====

def test_today_summary(data_service):
    habit = data_service.habits.add_habit(Habit(name="Run", category=HabitCategory.HEALTH))
    data_service.habits.add_habit(Habit(name="Read"))
    data_service.habits.complete_habit(habit)
    data_service.goals.add_goal(Goal(title="Marathon"))

    summary = data_service.get_today_summary()

    assert summary["date"] == "2025-06-11"
    assert summary["total_habits"] == 2
    assert summary["active_habits"] == 2
    assert summary["completed_today"] == 1
    assert summary["today_completion_rate"] == pytest.approx(0.5)
    assert summary["current_streak"] == 1
    assert summary["longest_streak"] == 1
    assert summary["needing_attention"] == 0
    assert summary["active_goals"] == 1
    assert summary["completed_goals"] == 0
    assert summary["tips_reading_progress"] == 0.0


# ===== ЭКСПОРТ И ИМПОРТ =====

def test_export_contains_all_collections(data_service):
    data_service.habits.add_habit(Habit(name="Медитация"))

    exported = json.loads(data_service.export_user_data().decode("utf-8"))

    assert exported["export_info"]["format"] == "json"
    assert exported["export_info"]["version"] == "1.0.0"
    assert set(exported) == {
        "export_info", "goals", "habits", "tips", "community_stories", "vision_boards", "preferences",
    }
    assert exported["habits"][0]["name"] == "Медитация"
    assert len(exported["tips"]) == 3


def test_import_restores_export_into_new_session(data_service, clock):
    habit = data_service.habits.add_habit(Habit(name="Run"))
    data_service.habits.complete_habit(habit, value=3)
    data_service.goals.add_goal(Goal(title="Marathon"))
    data_service.update_preferences(dark_mode_enabled=True)
    payload = data_service.export_user_data()

    other = DataService(MemoryStore(), clock=clock)

    assert other.import_user_data(payload)
    restored = other.habits.get_habit(habit.habit_id)
    assert restored.streak == 1
    assert restored.completions[0].value == 3
    assert [g.title for g in other.goals.goals] == ["Marathon"]
    assert other.preferences.dark_mode_enabled
    assert len(other.tips.tips) == 3


@pytest.mark.parametrize("payload", [
    b"not json",
    b"[]",
    json.dumps({"habits": {"name": "Run"}}).encode("utf-8"),
    json.dumps({"habits": [{"name": "missing fields"}]}).encode("utf-8"),
])
def test_import_rejects_bad_payload(data_service, store, payload):
    data_service.habits.add_habit(Habit(name="Keep me"))
    before = store.raw(HABITS_KEY)

    assert not data_service.import_user_data(payload)
    assert store.raw(HABITS_KEY) == before
    assert [h.name for h in data_service.habits.get_habits()] == ["Keep me"]


def test_csv_export_without_completions_has_header_only(data_service):
    data_service.habits.add_habit(Habit(name="Run"))

    df = pd.read_csv(io.BytesIO(data_service.export_completions_csv()))

    assert list(df.columns) == CSV_COLUMNS
    assert df.empty


def test_csv_export_rows(data_service):
    habit = data_service.habits.add_habit(Habit(name="Water", unit="glasses", target_value=8))
    data_service.habits.complete_habit(habit, value=2, notes="morning")
    data_service.habits.complete_habit(habit, value=3, notes="lunch")

    df = pd.read_csv(io.BytesIO(data_service.export_completions_csv()))

    assert len(df) == 2
    assert df["value"].sum() == 5
    assert set(df["date"]) == {"2025-06-11"}
    assert list(df["notes"]) == ["morning", "lunch"]
    assert set(df["unit"]) == {"glasses"}


# ===== ОЧИСТКА =====

def test_clear_all_data(data_service, store):
    data_service.habits.add_habit(Habit(name="Run"))
    data_service.goals.add_goal(Goal(title="Marathon"))

    data_service.clear_all_data()

    assert len(data_service.habits) == 0
    assert data_service.goals.goals == []
    assert len(data_service.tips.tips) == 3
    assert not store.has(TIPS_KEY)


def test_reset_to_defaults_persists_samples(data_service, store):
    data_service.habits.add_habit(Habit(name="Run"))

    assert data_service.reset_to_defaults()

    assert len(data_service.habits) == 0
    assert len(store.raw(TIPS_KEY)) == 3
    assert len(store.raw(COMMUNITY_STORIES_KEY)) == 4
    assert len(data_service.community.stories) == 4


def test_reset_reports_write_failure(clock):
    store = MemoryStore()
    session = DataService(store, clock=clock)
    store.fail_writes = True

    assert not session.reset_to_defaults()


# ===== ЖИЗНЕННЫЙ ЦИКЛ =====

def test_context_manager_closes_session(store, clock):
    with DataService(store, clock=clock, rng=random.Random(1)) as session:
        assert not session.closed

    assert session.closed
    session.close()
    assert session.closed


def test_session_from_config_uses_json_files(tmp_path, clock):
    config = AppConfig({
        "DATA_DIR": str(tmp_path / "data"),
        "BACKUP_DIR": str(tmp_path / "backups"),
        "TIMEZONE": "Europe/Moscow",
        "WEEK_STARTS_ON_MONDAY": "false",
    })

    with DataService.from_config(config, clock=clock) as session:
        assert isinstance(session.store, JsonFileStore)
        assert session.tz.zone == "Europe/Moscow"
        assert not session.habits.week_starts_on_monday
        session.habits.add_habit(Habit(name="Run"))

    with DataService.from_config(config, clock=clock) as reopened:
        assert [h.name for h in reopened.habits.get_habits()] == ["Run"]
