"""Tests for learner-onboarding/app/api.py — FastAPI endpoints."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import app.api as api_mod


@pytest.fixture(autouse=True)
def _isolate_store(tmp_path):
    data_dir = tmp_path / "store"
    with patch.object(api_mod, "DATA_DIR", data_dir):
        yield data_dir


@pytest.fixture()
def client():
    return TestClient(api_mod.app)


# ── Drafts ────────────────────────────────────────────────────────────────


def test_get_missing_draft(client):
    assert client.get("/api/drafts/onboardingDraft").status_code == 404


def test_put_then_get(client):
    resp = client.put("/api/drafts/onboardingDraft", json={"email": " a@b.co ", "firstName": "Ada"})
    assert resp.status_code == 200
    assert resp.json() == {
        "saved": True,
        "draft": {"version": 1, "email": "a@b.co", "firstName": "Ada"},
    }
    got = client.get("/api/drafts/onboardingDraft")
    assert got.status_code == 200
    assert got.json() == {"version": 1, "email": "a@b.co", "firstName": "Ada"}


def test_blank_put_clears(client):
    client.put("/api/drafts/k", json={"lastName": "Lovelace"})
    resp = client.put("/api/drafts/k", json={"email": "  "})
    assert resp.json() == {"saved": False, "draft": None}
    assert client.get("/api/drafts/k").status_code == 404


def test_delete_is_idempotent(client):
    client.put("/api/drafts/k", json={"email": "a@b.co"})
    assert client.delete("/api/drafts/k").json() == {"deleted": True}
    assert client.delete("/api/drafts/k").json() == {"deleted": True}
    assert client.get("/api/drafts/k").status_code == 404


def test_corrupt_draft_reads_as_missing(client, _isolate_store):
    _isolate_store.mkdir(parents=True)
    (_isolate_store / "k.json").write_text("{oops")
    assert client.get("/api/drafts/k").status_code == 404
    assert not (_isolate_store / "k.json").exists()


# ── Migration ─────────────────────────────────────────────────────────────


def test_migrate_nested_education(client):
    resp = client.post("/api/migrate", json={"education": {"level": "HS", "interests": ["art"]}})
    assert resp.status_code == 200
    data = resp.json()
    assert data["educationLevel"] == "HS"
    assert data["interests"] == ["art"]
    assert data["requiresParentInfo"] is True
    assert data["currentStep"] == 1


def test_migration_status_and_retire(client, _isolate_store, sample_legacy_record):
    assert client.get("/api/migration/status").json() == {"needs_migration": False}

    _isolate_store.mkdir(parents=True)
    (_isolate_store / "onboardingData.json").write_text(json.dumps(sample_legacy_record))
    (_isolate_store / "onboardingProgress.json").write_text("{}")
    assert client.get("/api/migration/status").json() == {"needs_migration": True}

    assert client.post("/api/migration/retire").json() == {"retired": True}
    assert client.post("/api/migration/retire").json() == {"retired": True}
    assert not (_isolate_store / "onboardingData.json").exists()
    assert not (_isolate_store / "onboardingProgress.json").exists()
    assert client.get("/api/migration/status").json() == {"needs_migration": False}
