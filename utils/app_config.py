"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores values that must be known before opening the DB (db_path, log_level)
and the local access flag. Config lives in ~/.pocket_ledger/config.json.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".pocket_ledger"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config(config_file: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file, never raises."""
    path = config_file or CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, config_file: Path | None = None) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    path = config_file or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_value(key: str, default=None, config_file: Path | None = None):
    return load_config(config_file).get(key, default)


def set_value(key: str, value, config_file: Path | None = None) -> None:
    """Update one key and save. None removes the key."""
    config = load_config(config_file)
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config, config_file)


def get_db_path() -> str | None:
    """Return config["db_path"] or None if not set."""
    return get_value("db_path")


def get_log_level() -> str:
    return str(get_value("log_level", "INFO")).upper()
