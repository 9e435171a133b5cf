"""Draft persistence for the Learner Onboarding tool.

Reads and writes the versioned registration draft in an injected
key-value store. Persistence is best-effort: a store that is disabled,
full, or holding a corrupt or stale entry behaves as if nothing had been
saved, and no storage error ever reaches the form.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path

from app.schema import DRAFT_VERSION, DraftRecord
from shared.kv_store import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "onboardingDraft"

_LEARNER_ID = re.compile(r"[0-9a-f]{8}")


def new_learner_id() -> str:
    """Generate a short unique ID for a learner's saved onboarding state."""
    return str(uuid.uuid4())[:8]


def learner_store(base_dir: Path | str, learner_id: str | None) -> JsonFileStore | None:
    """On-disk store for one learner, or None if *learner_id* is not a valid ID.

    Each learner gets a directory under *base_dir*, so a draft and any
    legacy record outlive the browser session that wrote them.
    """
    if not isinstance(learner_id, str) or not _LEARNER_ID.fullmatch(learner_id):
        return None
    return JsonFileStore(Path(base_dir) / learner_id)


def _is_current_version(version) -> bool:
    # bool is an int subclass; {"version": true} must not pass
    return not isinstance(version, bool) and version == DRAFT_VERSION


class DraftStore:
    """Safe read / safe write of DraftRecords in a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def read(self, key: str = DEFAULT_STORAGE_KEY) -> DraftRecord | None:
        """Return the stored draft, or None if absent, corrupt or stale.

        A corrupt entry is deleted on the way out (best-effort). A stale
        entry (other version) is left alone.
        """
        try:
            raw = self.store.get(key)
        except Exception as exc:
            logger.debug("draft read failed for %r: %s", key, exc)
            return None
        if not raw:
            return None

        try:
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                raise ValueError(f"draft payload is {type(parsed).__name__}, not an object")
        except (ValueError, RecursionError) as exc:
            logger.debug("discarding corrupt draft %r: %s", key, exc)
            self._discard(key)
            return None

        if not _is_current_version(parsed.get("version")):
            return None
        record = DraftRecord.from_dict(parsed)
        return None if record.is_empty() else record

    def write(self, key: str, record: DraftRecord | None) -> None:
        """Store *record* under *key*, or delete the entry when it is None or empty."""
        try:
            if record is None or record.is_empty():
                self.store.delete(key)
                return
            self.store.set(key, json.dumps(record.to_dict()))
        except Exception as exc:
            logger.debug("draft write failed for %r: %s", key, exc)

    def clear(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.write(key, None)

    def _discard(self, key: str) -> None:
        try:
            self.store.delete(key)
        except Exception as exc:
            logger.debug("could not remove corrupt draft %r: %s", key, exc)
