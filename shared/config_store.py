"""Centralized configuration store for the onboarding tools.

Each tool keeps its settings in one JSON file under data/config/, named
after the tool (e.g. "learner-onboarding.json"). Cross-tool switches live
in "global-settings.json". Callers always pass a default so a missing or
unreadable file never blocks a tool from starting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

CONFIG_DIR = Path(__file__).resolve().parent.parent / "data" / "config"

GLOBAL_SETTINGS = "global-settings"


def _config_path(tool_name: str) -> Path:
    return CONFIG_DIR / f"{tool_name}.json"


def load_config(tool_name: str) -> dict | None:
    """Load a tool's settings. Returns None if missing, unreadable or not an object."""
    path = _config_path(tool_name)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def save_config(tool_name: str, config: dict) -> None:
    """Write a tool's settings, creating data/config/ on first use."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _config_path(tool_name).write_text(
        json.dumps(config, indent=2, ensure_ascii=False), encoding="utf-8"
    )


def get_config_value(tool_name: str, key: str, default: Any) -> Any:
    """Read one setting, falling back to *default*."""
    return (load_config(tool_name) or {}).get(key, default)


def set_config_value(tool_name: str, key: str, value: Any) -> None:
    """Update one setting without touching the others."""
    config = load_config(tool_name) or {}
    config[key] = value
    save_config(tool_name, config)


def is_component_enabled(component_name: str, tool_name: str, default: bool = True) -> bool:
    """Check the global toggle for *component_name* within *tool_name*.

    Looks up ``global-settings.json`` → ``component_toggles`` →
    *component_name* → *tool_name*.
    """
    toggles = (load_config(GLOBAL_SETTINGS) or {}).get("component_toggles", {})
    component = toggles.get(component_name, {})
    if not isinstance(component, dict):
        return default
    return bool(component.get(tool_name, default))
