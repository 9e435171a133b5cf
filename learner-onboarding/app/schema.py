"""Data models for the Learner Onboarding tool.

Dataclasses for the resumable registration draft and for the current
onboarding record that legacy data is migrated into. Both serialize to
the camelCase JSON shapes the browser form and the registration service
exchange.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DRAFT_VERSION = 1

# Form field name -> DraftRecord attribute
DRAFT_FIELDS = {
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
}


def _clean(value: Any) -> str | None:
    """Trim a raw form value; empty-after-trim and non-strings become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


@dataclass
class DraftRecord:
    """Snapshot of the registration fields worth restoring after a reload."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    version: int = DRAFT_VERSION

    def __post_init__(self) -> None:
        self.email = _clean(self.email)
        self.first_name = _clean(self.first_name)
        self.last_name = _clean(self.last_name)

    def is_empty(self) -> bool:
        return not (self.email or self.first_name or self.last_name)

    def to_dict(self) -> dict:
        """Wire format: absent fields are omitted, never stored as ""."""
        d: dict[str, Any] = {"version": self.version}
        for wire_name, attr in DRAFT_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                d[wire_name] = value
        return d

    @classmethod
    def from_dict(cls, d: Mapping) -> DraftRecord:
        values = {attr: d.get(wire_name) for wire_name, attr in DRAFT_FIELDS.items()}
        return cls(**values, version=d.get("version", DRAFT_VERSION))

    @classmethod
    def from_form(cls, values: Mapping) -> DraftRecord | None:
        """Normalize current form values. Returns None when nothing qualifies."""
        record = cls(**{attr: values.get(wire_name) for wire_name, attr in DRAFT_FIELDS.items()})
        return None if record.is_empty() else record


@dataclass
class ParentGuardian:
    name: str = ""
    email: str = ""
    phone: str = ""
    relationship: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "relationship": self.relationship,
        }


@dataclass
class CurrentOnboardingRecord:
    """Current-schema onboarding record. Every field has a default."""

    # Identity
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    date_of_birth: str = ""
    gender: str = ""
    age: int | float = 0

    # Profile
    education_level: str = ""
    interests: list = field(default_factory=list)
    hobbies: list = field(default_factory=list)
    talents: list = field(default_factory=list)

    # Accessibility
    is_pwd: bool = False
    impairment_type: str = ""

    # Parent / guardian
    requires_parent_info: bool = False
    parent_guardian: ParentGuardian = field(default_factory=ParentGuardian)

    # Consents
    terms_accepted: bool = False
    privacy_accepted: bool = False
    data_consent_accepted: bool = False
    media_consent_accepted: bool = False
    newsletter_opt_in: bool = False

    # Progress
    current_step: int = 1
    completed_steps: list = field(default_factory=list)
    is_complete: bool = False

    def to_dict(self) -> dict:
        """Payload shape the registration service consumes."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "dateOfBirth": self.date_of_birth,
            "gender": self.gender,
            "age": self.age,
            "educationLevel": self.education_level,
            "interests": list(self.interests),
            "hobbies": list(self.hobbies),
            "talents": list(self.talents),
            "isPWD": self.is_pwd,
            "impairmentType": self.impairment_type,
            "requiresParentInfo": self.requires_parent_info,
            "parentGuardian": self.parent_guardian.to_dict(),
            "termsAccepted": self.terms_accepted,
            "privacyAccepted": self.privacy_accepted,
            "dataConsentAccepted": self.data_consent_accepted,
            "mediaConsentAccepted": self.media_consent_accepted,
            "newsletterOptIn": self.newsletter_opt_in,
            "currentStep": self.current_step,
            "completedSteps": list(self.completed_steps),
            "isComplete": self.is_complete,
        }
