from __future__ import annotations

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any

DEFAULT_LOG_LEVEL = "WARNING"


def user_config_path() -> Path:
    env_path = os.environ.get("DONEIT_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".doneit_config.yaml"


def _load_config() -> Dict[str, Any]:
    path = user_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    path = user_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _get_str(key: str) -> str:
    value = _load_config().get(key, "")
    return value.strip() if isinstance(value, str) else ""


def _set_str(key: str, value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data[key] = value
    else:
        data.pop(key, None)
    _save_config(data)


def get_user_theme() -> str:
    return _get_str("theme")


def set_user_theme(value: str) -> None:
    _set_str("theme", value)


def get_data_file() -> str:
    return _get_str("data_file")


def set_data_file(value: str) -> None:
    _set_str("data_file", value)


def get_log_level() -> int:
    name = (_get_str("log_level") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
