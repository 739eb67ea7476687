from pathlib import Path

import pytest

import config
from db import database
from db.fallback import FallbackStore
from db.store import MemoryStore, SQLiteStore


def _write_test_config(config_path: Path) -> None:
    config_path.write_text(
        "\n".join(
            [
                "[quiz]",
                "max_questions = 10",
                "",
                "[stats]",
                "window_days = 7",
                "",
                "[storage]",
                "fallback_enabled = true",
                "",
                "[logging]",
                "level = \"DEBUG\"",
            ]
        ),
        encoding="utf-8",
    )


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    config_dir = tmp_path / ".vocabcoach"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    _write_test_config(config_path)
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in ("QUIZ_MAX_QUESTIONS", "STATS_WINDOW_DAYS", "STORAGE_FALLBACK_ENABLED", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def db_path(config_dir, monkeypatch):
    path = config_dir / "vocabcoach.db"
    monkeypatch.setattr(database, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(database, "DB_PATH", path)
    database.init_db()
    return path


@pytest.fixture
def store(db_path):
    return FallbackStore(SQLiteStore(), MemoryStore())
