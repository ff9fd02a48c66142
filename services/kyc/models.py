"""
KYC Data Models
===============

Subjects, verification records, and the request/result types consumed
and produced by the verification orchestrator.

Version: 0.1.0
"""

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VerificationOutcome(str, Enum):
    """Tri-state result of the external identity check."""

    VALID = "KYC_VALID"
    REJECTED = "KYC_REJECTED"
    PENDING = "KYC_PENDING"


class DocumentKind(str, Enum):
    """Uploaded document kinds."""

    SELFIE = "selfie"
    DOC_PHOTO = "doc_photo"


def canonicalize_identifier(identifier: str) -> str:
    """Canonical subject identifier: surrounding whitespace removed, lowercased."""
    return identifier.strip().lower()


def generate_user_id() -> str:
    """Generate a short user ID of the form ``usr_<8 hex>``."""
    return f"usr_{uuid.uuid4().hex[:8]}"


class PersonalData(BaseModel):
    """Personal fields submitted for verification."""

    model_config = ConfigDict(frozen=True)

    name: str
    lastname: str
    national_id: str = Field(..., description="National ID number (DNI)")
    date_of_birth: str = Field(..., description="Date of birth (YYYY-MM-DD)")
    email: str
    country: str = Field(..., description="Country of residence (ISO code)")


class DocumentRef(BaseModel):
    """Reference to an uploaded document. File bytes never reach the core."""

    model_config = ConfigDict(frozen=True)

    kind: DocumentKind
    filename: str
    size_bytes: int | None = Field(default=None, ge=0)
    content_type: str | None = None


class Subject(BaseModel):
    """A registered subject. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(default_factory=generate_user_id)
    identifier: str = Field(..., description="Canonical (lowercase) subject identifier")
    name: str
    lastname: str
    national_id: str
    date_of_birth: str
    email: str
    country: str
    doc_photo_path: str | None = None
    registered_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PersonalDataSnapshot(BaseModel):
    """Personal fields used for one verification pass."""

    model_config = ConfigDict(frozen=True)

    name: str
    lastname: str
    national_id: str
    date_of_birth: str
    country: str

    @classmethod
    def from_personal_data(cls, data: PersonalData) -> "PersonalDataSnapshot":
        return cls(
            name=data.name,
            lastname=data.lastname,
            national_id=data.national_id,
            date_of_birth=data.date_of_birth,
            country=data.country,
        )


class VerificationRecord(BaseModel):
    """
    Latest verification outcome for a subject.

    Replaced wholesale by every completed verification; there is no history.
    An attestation is present if and only if the outcome is VALID.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    outcome: VerificationOutcome
    attestation: str | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    personal_data: PersonalDataSnapshot
    provider_reference: str | None = None

    @model_validator(mode="after")
    def attestation_matches_outcome(self) -> "VerificationRecord":
        has_attestation = bool(self.attestation)
        if has_attestation != (self.outcome == VerificationOutcome.VALID):
            raise ValueError(
                f"Attestation must be present iff outcome is {VerificationOutcome.VALID.value}"
            )
        return self


class VerificationRequest(BaseModel):
    """A validated verification request as handed to the orchestrator."""

    identifier: str
    personal_data: PersonalData
    documents: list[DocumentRef] = Field(default_factory=list)

    def document(self, kind: DocumentKind) -> DocumentRef | None:
        """First document of ``kind``, if any."""
        return next((d for d in self.documents if d.kind == kind), None)


class VerificationResult(BaseModel):
    """Outcome returned to the caller of a verification."""

    outcome: VerificationOutcome
    attestation: str | None = None


class ProviderResponse(BaseModel):
    """Answer of an external verification authority."""

    outcome: VerificationOutcome
    reference: str | None = None
    match_score: float | None = Field(default=None, ge=0.0, le=1.0)
    raw: dict[str, Any] = Field(default_factory=dict)
