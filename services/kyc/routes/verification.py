"""
KYC Verification Routes
=======================

API endpoints for submitting verifications and querying status.
"""

from datetime import date, datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

from kyc_common.logging import bind_context, get_logger
from services.kyc.models import (
    DocumentKind,
    DocumentRef,
    PersonalData,
    VerificationOutcome,
    VerificationRequest,
)
from services.kyc.orchestrator import get_orchestrator


logger = get_logger(__name__)
router = APIRouter()

NOT_FOUND_STATUS = "NOT_FOUND"


# ============================================================================
# Request/Response Models
# ============================================================================


class UploadedDocument(BaseModel):
    """Metadata of an uploaded file."""

    filename: str = Field(..., min_length=1)
    size_bytes: int | None = Field(default=None, ge=0)
    content_type: str | None = None


class ValidateBaseKycRequest(BaseModel):
    """Request to validate BASE KYC for a wallet."""

    wallet_address: str = Field(
        ...,
        pattern=r"^0x[a-fA-F0-9]{40}$",
        examples=["0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb"],
    )
    name: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    dni: str = Field(..., min_length=7, max_length=10, description="DNI number")
    dob: date = Field(..., description="Date of birth (YYYY-MM-DD)")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    country: str = Field(..., min_length=2, max_length=3, description="ISO country code")
    selfie: UploadedDocument
    doc_photo: UploadedDocument

    def to_verification_request(self) -> VerificationRequest:
        return VerificationRequest(
            identifier=self.wallet_address,
            personal_data=PersonalData(
                name=self.name,
                lastname=self.lastname,
                national_id=self.dni,
                date_of_birth=self.dob.isoformat(),
                email=self.email,
                country=self.country,
            ),
            documents=[
                DocumentRef(kind=DocumentKind.SELFIE, **self.selfie.model_dump()),
                DocumentRef(kind=DocumentKind.DOC_PHOTO, **self.doc_photo.model_dump()),
            ],
        )


class KycValidationResponse(BaseModel):
    """Result of a BASE KYC validation."""

    status: VerificationOutcome
    proof: str | None = Field(default=None, description="Present only when status is KYC_VALID")


class KycStatusResponse(BaseModel):
    """KYC status of a wallet."""

    wallet_address: str
    status: str = Field(..., description="KYC_VALID, KYC_REJECTED, KYC_PENDING or NOT_FOUND")
    proof: str | None = None
    last_updated: datetime | None = None


class WalletVerifiedResponse(BaseModel):
    wallet_address: str
    verified: bool


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/base/validate", response_model=KycValidationResponse, status_code=201)
async def validate_base_kyc(request: ValidateBaseKycRequest) -> KycValidationResponse:
    """
    Validate BASE KYC.

    Registers the wallet on first use, checks the personal data against
    the national registry, and returns an attestation when valid.
    """
    bind_context(identifier=request.wallet_address.lower())
    logger.info(
        "kyc_validation_requested",
        selfie_size=request.selfie.size_bytes,
        doc_photo_size=request.doc_photo.size_bytes,
    )

    result = await get_orchestrator().submit_verification(request.to_verification_request())

    return KycValidationResponse(status=result.outcome, proof=result.attestation)


@router.get("/status/{wallet_address}", response_model=KycStatusResponse)
async def get_kyc_status(wallet_address: str) -> KycStatusResponse:
    """Get the latest KYC status for a wallet address."""
    record = await get_orchestrator().get_status(wallet_address)

    if record is None:
        return KycStatusResponse(wallet_address=wallet_address, status=NOT_FOUND_STATUS)

    return KycStatusResponse(
        wallet_address=record.identifier,
        status=record.outcome.value,
        proof=record.attestation,
        last_updated=record.last_updated,
    )


@router.get("/verified/{wallet_address}", response_model=WalletVerifiedResponse)
async def is_wallet_verified(wallet_address: str) -> WalletVerifiedResponse:
    """Check whether a wallet currently holds a valid KYC."""
    verified = await get_orchestrator().is_verified(wallet_address)
    return WalletVerifiedResponse(wallet_address=wallet_address.lower(), verified=verified)
