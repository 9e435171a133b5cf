"""Keeps the registration form and its saved draft in step.

One DraftSync belongs to one mounted form. The form layer hands it a
getter for the current values and a setter that accepts an updater
function, then calls ``on_change`` after every render or edit.

Two phases:
    hydration    at most once per instance; fills blank form fields from
                 the saved draft.
    persistence  on every change to email / firstName / lastName; saves
                 the normalized snapshot, or clears the key when all
                 three are blank.

Disabling suspends both phases and leaves whatever is stored untouched.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from app.draft_store import DEFAULT_STORAGE_KEY, DraftStore
from app.schema import DRAFT_FIELDS, DraftRecord

logger = logging.getLogger(__name__)

FormValues = Mapping[str, Any]
Updater = Callable[[dict], dict]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def merge_draft(prev: FormValues, draft: DraftRecord) -> dict:
    """Fill blank watched fields in *prev* from *draft*. Never clobbers."""
    merged = dict(prev)
    for wire_name, attr in DRAFT_FIELDS.items():
        saved = getattr(draft, attr)
        if saved is not None and _is_blank(merged.get(wire_name)):
            merged[wire_name] = saved
    return merged


def _snapshot(values: FormValues) -> tuple:
    return tuple(values.get(name) for name in DRAFT_FIELDS)


class DraftSync:
    def __init__(
        self,
        draft_store: DraftStore,
        get_form: Callable[[], FormValues],
        set_form: Callable[[Updater], None],
        enabled: bool = True,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.draft_store = draft_store
        self.get_form = get_form
        self.set_form = set_form
        self.enabled = enabled
        self.storage_key = storage_key
        self._hydrated = False
        self._lock = threading.Lock()
        self._last_snapshot: tuple | None = None

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def hydrate(self) -> bool:
        """Run the hydration phase if it has not run yet.

        Returns True only on the call that actually ran it. The guard is
        set before the store is touched, so a failing read still counts
        as the one attempt.
        """
        if not self.enabled:
            return False
        with self._lock:
            if self._hydrated:
                return False
            self._hydrated = True

        draft = self.draft_store.read(self.storage_key)
        if draft is None:
            return True
        logger.debug("restoring onboarding draft from %r", self.storage_key)
        self.set_form(lambda prev: merge_draft(prev, draft))
        return True

    def persist(self, values: FormValues | None = None) -> None:
        """Save the watched fields, or clear the key when all are blank."""
        if not self.enabled:
            return
        if values is None:
            values = self.get_form()
        self.draft_store.write(self.storage_key, DraftRecord.from_form(values))
        self._last_snapshot = _snapshot(values)

    def on_change(self, values: FormValues | None = None) -> None:
        """Reactive entry point: hydrate once, then persist if a watched field moved."""
        if not self.enabled:
            return
        # values captured before hydration are stale once the draft is merged
        if self.hydrate() or values is None:
            values = self.get_form()
        if _snapshot(values) != self._last_snapshot:
            self.persist(values)
