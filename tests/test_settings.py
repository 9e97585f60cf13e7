"""Tests for environment-driven settings."""

import os
from pathlib import Path

import pytest

from data_store import create_data_store
from postgres_store import PostgresDataStore
from rest_store import RestDataStore
from settings import DEFAULT_PROJECT_DATES, load_dotenv, load_settings, required_env

ENV_NAMES = [
    "DATABASE_URL",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "PROJECT_NAME",
    "PROJECT_DATES",
    "DATA_STORE_TIMEOUT_SECONDS",
    "RUN_DB_INIT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_requires_a_data_store() -> None:
    with pytest.raises(RuntimeError, match="DATABASE_URL or SUPABASE_URL"):
        load_settings()


def test_load_settings_with_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/tasks")

    settings = load_settings()

    assert settings.database_url == "postgresql://localhost/tasks"
    assert settings.project_dates == DEFAULT_PROJECT_DATES
    assert settings.first_date == "August 4"
    assert settings.project_name == "Project"
    assert settings.run_db_init is False
    assert isinstance(create_data_store(settings), PostgresDataStore)


def test_supabase_requires_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")

    with pytest.raises(RuntimeError, match="SUPABASE_KEY is not configured"):
        load_settings()


def test_load_settings_with_supabase(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co/")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("DATA_STORE_TIMEOUT_SECONDS", "2.5")

    settings = load_settings()
    store = create_data_store(settings)

    assert isinstance(store, RestDataStore)
    assert store.base_url == "https://example.supabase.co"
    assert store.timeout == 2.5


def test_project_dates_are_split_and_trimmed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/tasks")
    monkeypatch.setenv("PROJECT_DATES", " Monday, Tuesday ,, ")
    monkeypatch.setenv("PROJECT_NAME", "Appeal")

    settings = load_settings()

    assert settings.project_dates == ("Monday", "Tuesday")
    assert settings.first_date == "Monday"
    assert settings.project_name == "Appeal"


def test_empty_project_dates_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/tasks")
    monkeypatch.setenv("PROJECT_DATES", " , ")

    assert load_settings().project_dates == DEFAULT_PROJECT_DATES


def test_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJECT_NAME", "Appeal")

    assert required_env("PROJECT_NAME") == "Appeal"
    with pytest.raises(RuntimeError):
        required_env("SUPABASE_KEY")


def test_load_dotenv_does_not_override_existing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nTASK_HUB_DOTENV_NAME='From file'\nPROJECT_DATES=\"Monday,Tuesday\"\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROJECT_DATES", "Friday")
    monkeypatch.setenv("TASK_HUB_DOTENV_NAME", "placeholder")
    monkeypatch.delenv("TASK_HUB_DOTENV_NAME")

    load_dotenv(str(env_file))

    assert os.environ["TASK_HUB_DOTENV_NAME"] == "From file"
    assert os.environ["PROJECT_DATES"] == "Friday"


def test_load_dotenv_missing_file_is_ignored(tmp_path: Path) -> None:
    load_dotenv(str(tmp_path / "missing.env"))
