"""
Admin Routes
============

Read-only listings of registered users and verification records.
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from services.kyc.models import VerificationOutcome
from services.kyc.orchestrator import get_orchestrator


router = APIRouter()


class UserResponse(BaseModel):
    """Registered user, without national ID or date of birth."""

    user_id: str
    wallet_address: str
    name: str
    lastname: str
    email: str
    country: str
    registered_at: datetime


class RecordSummary(BaseModel):
    wallet_address: str
    status: VerificationOutcome
    has_proof: bool
    last_updated: datetime
    provider_reference: str | None = None


@router.get("/users", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    """List registered users, oldest first."""
    subjects = await get_orchestrator().registry.list_subjects()
    return [
        UserResponse(
            user_id=s.user_id,
            wallet_address=s.identifier,
            name=s.name,
            lastname=s.lastname,
            email=s.email,
            country=s.country,
            registered_at=s.registered_at,
        )
        for s in subjects
    ]


@router.get("/records", response_model=list[RecordSummary])
async def list_records() -> list[RecordSummary]:
    """List verification records, most recent first."""
    records = await get_orchestrator().ledger.list_records()
    return [
        RecordSummary(
            wallet_address=r.identifier,
            status=r.outcome,
            has_proof=r.attestation is not None,
            last_updated=r.last_updated,
            provider_reference=r.provider_reference,
        )
        for r in records
    ]
