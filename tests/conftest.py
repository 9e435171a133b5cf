"""Shared fixtures for all tests."""

from __future__ import annotations

import json

import pytest

from shared.kv_store import MemoryStore


@pytest.fixture()
def session_store():
    """An empty in-memory stand-in for the browser session store."""
    return MemoryStore()


@pytest.fixture()
def local_store():
    """An empty in-memory stand-in for the persistent local store."""
    return MemoryStore()


@pytest.fixture()
def sample_legacy_record():
    """A legacy onboarding record as saved by the old multi-step flow."""
    return {
        "firstName": "Amina",
        "lastName": "Njoroge",
        "email": "amina@example.com",
        "phone": "+254700000000",
        "dateOfBirth": "2010-03-14",
        "gender": "female",
        "age": 15,
        "education": {
            "level": "secondary",
            "interests": ["coding", "music"],
            "hobbies": ["football"],
            "talents": ["drawing"],
        },
        "isPWD": True,
        "impairmentType": "visual",
        "parentGuardian": {
            "name": "Grace Njoroge",
            "email": "grace@example.com",
            "phone": "+254711111111",
            "relationship": "mother",
        },
        "termsAccepted": True,
        "privacyAccepted": True,
        "currentStep": 4,
        "completedSteps": [1, 2, 3],
        "isComplete": False,
    }


@pytest.fixture()
def legacy_session(session_store, sample_legacy_record):
    """Session store already holding the sample legacy record."""
    session_store.set("onboardingData", json.dumps(sample_legacy_record))
    return session_store
