"""FastAPI backend for the Learner Onboarding tool.

Exposes the saved registration drafts and the legacy-data migration to
non-Streamlit clients. Drafts and legacy entries live in a JSON file
store under data/store/.

Part of the learner onboarding tool suite.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app.draft_store import DraftStore
from app.migration import migrate_onboarding_data, needs_migration, retire_legacy
from app.schema import DraftRecord
from app.settings import DEFAULT_LOCAL_STORE_DIR
from shared.kv_store import JsonFileStore

DATA_DIR = DEFAULT_LOCAL_STORE_DIR.parent / "store"

app = FastAPI(title="Learner Onboarding API")


def _store() -> JsonFileStore:
    # Resolved per request so tests can patch DATA_DIR.
    return JsonFileStore(DATA_DIR)


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class DraftRequest(BaseModel):
    """Registration fields to save as a draft."""

    email: str | None = None
    firstName: str | None = None
    lastName: str | None = None


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------

@app.get("/api/drafts/{key}")
def get_draft(key: str) -> dict[str, Any]:
    """Return the saved draft, or 404 when none (or only a stale one) exists."""
    draft = DraftStore(_store()).read(key)
    if draft is None:
        raise HTTPException(status_code=404, detail=f"No draft saved under: {key}")
    return draft.to_dict()


@app.put("/api/drafts/{key}")
def put_draft(key: str, request: DraftRequest) -> dict[str, Any]:
    """Save the normalized draft. An all-blank payload clears the key instead."""
    record = DraftRecord.from_form(request.model_dump())
    DraftStore(_store()).write(key, record)
    return {
        "saved": record is not None,
        "draft": record.to_dict() if record is not None else None,
    }


@app.delete("/api/drafts/{key}")
def delete_draft(key: str) -> dict[str, bool]:
    DraftStore(_store()).clear(key)
    return {"deleted": True}


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------

@app.post("/api/migrate")
def migrate(legacy: dict[str, Any]) -> dict[str, Any]:
    """Convert a legacy onboarding record to the current shape."""
    return migrate_onboarding_data(legacy).to_dict()


@app.get("/api/migration/status")
def migration_status() -> dict[str, bool]:
    return {"needs_migration": needs_migration(_store())}


@app.post("/api/migration/retire")
def retire() -> dict[str, bool]:
    """Remove legacy onboarding entries. Safe to call repeatedly."""
    retire_legacy(_store())
    return {"retired": True}
