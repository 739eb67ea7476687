import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".vocabcoach"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

def _env_bool(name: str, default: Any) -> bool:
    return os.getenv(name, str(default)).lower() == "true"

def load_config() -> Dict[str, Any]:
    """Load config from ~/.vocabcoach/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., LOG_LEVEL env var)
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    quiz_cfg = config.get("quiz", {})
    config["quiz"] = {
        "max_questions": int(os.getenv("QUIZ_MAX_QUESTIONS", quiz_cfg.get("max_questions", 10))),
    }
    stats_cfg = config.get("stats", {})
    config["stats"] = {
        "window_days": int(os.getenv("STATS_WINDOW_DAYS", stats_cfg.get("window_days", 7))),
    }
    storage_cfg = config.get("storage", {})
    config["storage"] = {
        "fallback_enabled": _env_bool(
            "STORAGE_FALLBACK_ENABLED", storage_cfg.get("fallback_enabled", True)
        ),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("LOG_LEVEL", logging_cfg.get("level", "INFO")).upper(),
    }
    return config

def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('quiz', 'max_questions')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
