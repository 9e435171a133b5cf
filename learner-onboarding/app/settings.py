"""Learner Onboarding settings, read from data/config/learner-onboarding.json."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from app.draft_store import DEFAULT_STORAGE_KEY
from shared.config_store import get_config_value, is_component_enabled

TOOL_NAME = "learner-onboarding"
DRAFT_COMPONENT = "draft-persistence"

DEFAULT_LOCAL_STORE_DIR = Path(__file__).resolve().parent.parent / "data" / "local"


@dataclass
class OnboardingSettings:
    draft_storage_key: str = DEFAULT_STORAGE_KEY
    draft_persistence_enabled: bool = True
    local_store_dir: Path = DEFAULT_LOCAL_STORE_DIR


def load_settings() -> OnboardingSettings:
    """Resolve settings, falling back to defaults for anything missing or malformed.

    Draft persistence is on only if both the tool setting and the global
    component toggle allow it.
    """
    key = get_config_value(TOOL_NAME, "draft_storage_key", DEFAULT_STORAGE_KEY)
    if not isinstance(key, str) or not key.strip():
        key = DEFAULT_STORAGE_KEY

    enabled = get_config_value(TOOL_NAME, "draft_persistence_enabled", True)
    enabled = bool(enabled) and is_component_enabled(DRAFT_COMPONENT, TOOL_NAME)

    local_dir = get_config_value(TOOL_NAME, "local_store_dir", None)
    local_dir = Path(local_dir) if isinstance(local_dir, str) and local_dir else DEFAULT_LOCAL_STORE_DIR

    return OnboardingSettings(
        draft_storage_key=key.strip(),
        draft_persistence_enabled=enabled,
        local_store_dir=local_dir,
    )
