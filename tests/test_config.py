import config


def test_defaults_are_filled_in(config_dir):
    config.CONFIG_PATH.write_text("", encoding="utf-8")
    loaded = config.load_config()
    assert loaded["quiz"]["max_questions"] == 10
    assert loaded["stats"]["window_days"] == 7
    assert loaded["storage"]["fallback_enabled"] is True
    assert loaded["logging"]["level"] == "INFO"


def test_env_overrides_file_values(config_dir, monkeypatch):
    monkeypatch.setenv("QUIZ_MAX_QUESTIONS", "5")
    monkeypatch.setenv("STORAGE_FALLBACK_ENABLED", "false")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert config.get_config_value("quiz", "max_questions") == 5
    assert config.get_config_value("storage", "fallback_enabled") is False
    assert config.get_config_value("logging", "level") == "WARNING"
    assert config.get_config_value("stats", "window_days") == 7


def test_example_config_copied_when_missing(tmp_path, monkeypatch):
    monkeypatch.delenv("QUIZ_MAX_QUESTIONS", raising=False)
    config_dir = tmp_path / "fresh"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / "config.toml")
    loaded = config.load_config()
    assert (config_dir / "config.toml").exists()
    assert loaded["quiz"]["max_questions"] == 10


def test_unknown_key_uses_default(config_dir):
    assert config.get_config_value("quiz", "missing", "fallback") == "fallback"
