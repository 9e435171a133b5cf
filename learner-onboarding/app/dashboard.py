"""Learner Onboarding -- Streamlit registration form.

Resumable registration: legacy onboarding data is migrated before the
form initializes, and the name/email fields are restored from the
learner's saved draft after a reload. Saved state lives on disk under a
per-learner ID carried in the page URL (?learner=...), because a reload
starts a fresh Streamlit session.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.draft_store import DraftStore, learner_store, new_learner_id
from app.draft_sync import DraftSync
from app.migration import MAX_AGE, bounded_age, retire_legacy, run_migration
from app.schema import CurrentOnboardingRecord
from app.settings import load_settings

# -- Page config --------------------------------------------------------------

st.set_page_config(
    page_title="Learner Onboarding",
    layout="centered",
)

settings = load_settings()

store = learner_store(settings.local_store_dir, st.query_params.get("learner"))
if store is None:
    learner_id = new_learner_id()
    st.query_params["learner"] = learner_id
    store = learner_store(settings.local_store_dir, learner_id)

# -- Form state (migrate before first render) ---------------------------------

if "ob_form" not in st.session_state:
    migrated = run_migration(store)
    st.session_state.ob_form = (migrated or CurrentOnboardingRecord()).to_dict()
    st.session_state.ob_migrated = migrated is not None


def _get_form() -> dict:
    return st.session_state.ob_form


def _set_form(updater) -> None:
    st.session_state.ob_form = updater(st.session_state.ob_form)


if "ob_sync" not in st.session_state:
    st.session_state.ob_sync = DraftSync(
        DraftStore(store),
        _get_form,
        _set_form,
        enabled=settings.draft_persistence_enabled,
        storage_key=settings.draft_storage_key,
    )
sync: DraftSync = st.session_state.ob_sync

# Hydrate before the widgets read their values.
sync.on_change()

# -- Form ---------------------------------------------------------------------

st.title("Create your learner account")
if st.session_state.ob_migrated:
    st.info("We found answers from your earlier registration and filled them in.")

form = dict(_get_form())
col1, col2 = st.columns(2)
with col1:
    form["firstName"] = st.text_input("First name", value=form.get("firstName", ""))
with col2:
    form["lastName"] = st.text_input("Last name", value=form.get("lastName", ""))
form["email"] = st.text_input("Email", value=form.get("email", ""))
form["age"] = st.number_input("Age", min_value=0, max_value=MAX_AGE, value=bounded_age(form.get("age")))
form["termsAccepted"] = st.checkbox("I accept the terms of service", value=bool(form.get("termsAccepted")))
form["privacyAccepted"] = st.checkbox("I accept the privacy policy", value=bool(form.get("privacyAccepted")))

st.session_state.ob_form = form
sync.on_change(form)

if st.button("Register", type="primary", use_container_width=True):
    missing = [label for key, label in (("firstName", "first name"), ("email", "email")) if not form[key].strip()]
    if missing:
        st.error("Please enter your " + " and ".join(missing) + ".")
    else:
        form["requiresParentInfo"] = bool(form.get("requiresParentInfo")) or form["age"] < 18
        st.session_state.ob_payload = form
        if st.session_state.ob_migrated:
            retire_legacy(store)
            st.session_state.ob_migrated = False
        sync.draft_store.clear(sync.storage_key)
        st.success("Registration details are ready to submit.")
