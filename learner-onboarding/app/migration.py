"""Upgrade legacy onboarding data to the current record shape.

Earlier releases kept the whole onboarding questionnaire under the
session key "onboardingData", with education fields nested under
``education`` and progress tracked in a separate "onboardingProgress"
entry in the persistent store. The form layer calls ``needs_migration``
before initializing, seeds the form from ``migrate_onboarding_data``, and
calls ``retire_legacy`` once the migrated data has been adopted.

Legacy records can come from any old release, so every field is read
through an explicit fallback chain and nothing here raises.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from app.schema import CurrentOnboardingRecord, ParentGuardian
from shared.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

LEGACY_DATA_KEY = "onboardingData"
LEGACY_PROGRESS_KEY = "onboardingProgress"

ADULT_AGE = 18
MAX_AGE = 120

_MISSING = object()


def _lookup(data: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings; _MISSING on any gap."""
    node = data
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _first_str(data: Mapping, *paths: str) -> str:
    for path in paths:
        value = _lookup(data, path)
        if isinstance(value, str) and value:
            return value
    return ""


def _first_list(data: Mapping, *paths: str) -> list:
    for path in paths:
        value = _lookup(data, path)
        if isinstance(value, (list, tuple)) and value:
            return list(value)
    return []


def _flag(data: Mapping, path: str) -> bool:
    value = _lookup(data, path)
    return False if value is _MISSING else bool(value)


def _age(data: Mapping) -> int | float:
    value = _lookup(data, "age")
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    return 0


def bounded_age(value: Any) -> int:
    """Whole-year age clamped to 0..MAX_AGE, for inputs with fixed bounds."""
    age = _age({"age": value})
    return int(min(max(age, 0), MAX_AGE))


def _parent_guardian(data: Mapping) -> ParentGuardian:
    block = _lookup(data, "parentGuardian")
    if not isinstance(block, Mapping):
        return ParentGuardian()
    return ParentGuardian(
        name=_first_str(block, "name"),
        email=_first_str(block, "email"),
        phone=_first_str(block, "phone"),
        relationship=_first_str(block, "relationship"),
    )


def migrate_onboarding_data(legacy: Any) -> CurrentOnboardingRecord:
    """Map a legacy record of any shape onto a fully populated current record.

    New-schema field names win over legacy nested paths; missing or
    wrong-typed values fall through to the default. The step flow always
    restarts from step 1.
    """
    data = legacy if isinstance(legacy, Mapping) else {}
    age = _age(data)

    return CurrentOnboardingRecord(
        first_name=_first_str(data, "firstName"),
        last_name=_first_str(data, "lastName"),
        email=_first_str(data, "email"),
        phone=_first_str(data, "phone"),
        date_of_birth=_first_str(data, "dateOfBirth"),
        gender=_first_str(data, "gender"),
        age=age,
        education_level=_first_str(data, "educationLevel", "education.level"),
        interests=_first_list(data, "interests", "education.interests"),
        hobbies=_first_list(data, "hobbies", "education.hobbies"),
        talents=_first_list(data, "talents", "education.talents"),
        is_pwd=_flag(data, "isPWD"),
        impairment_type=_first_str(data, "impairmentType"),
        requires_parent_info=_flag(data, "requiresParentInfo") or age < ADULT_AGE,
        parent_guardian=_parent_guardian(data),
        terms_accepted=_flag(data, "termsAccepted"),
        privacy_accepted=_flag(data, "privacyAccepted"),
        data_consent_accepted=_flag(data, "dataConsentAccepted"),
        media_consent_accepted=_flag(data, "mediaConsentAccepted"),
        newsletter_opt_in=_flag(data, "newsletterOptIn"),
        current_step=1,
        completed_steps=[],
        is_complete=False,
    )


def load_legacy_record(session_store: KeyValueStore) -> dict | None:
    """Return the parsed legacy record, or None if missing or unreadable."""
    try:
        raw = session_store.get(LEGACY_DATA_KEY)
        if not raw:
            return None
        data = json.loads(raw)
    except Exception as exc:
        logger.debug("legacy onboarding record unreadable: %s", exc)
        return None
    return data if isinstance(data, dict) else None


def needs_migration(session_store: KeyValueStore) -> bool:
    """True only when a legacy record exists and is not marked complete."""
    record = load_legacy_record(session_store)
    return record is not None and not record.get("isComplete")


def run_migration(session_store: KeyValueStore) -> CurrentOnboardingRecord | None:
    """Migrate the stored legacy record if it needs it. Does not retire it."""
    if not needs_migration(session_store):
        return None
    logger.info("migrating legacy onboarding record")
    return migrate_onboarding_data(load_legacy_record(session_store))


def retire_legacy(session_store: KeyValueStore, local_store: KeyValueStore | None = None) -> None:
    """Remove the legacy record and its progress entry. Safe to repeat."""
    targets = (
        (session_store, LEGACY_DATA_KEY),
        (local_store if local_store is not None else session_store, LEGACY_PROGRESS_KEY),
    )
    for store, key in targets:
        try:
            store.delete(key)
        except Exception as exc:
            logger.debug("could not remove %r: %s", key, exc)
