"""
Verification Orchestrator
=========================

Coordinates one verification pass for a subject.

Per identifier the lifecycle is:

    UNSEEN -> REGISTERED -> {VALID | REJECTED | PENDING}

1. The first request registers the subject. Later requests skip
   registration; losing a concurrent registration race is not an error.
2. The provider decides the outcome.
3. On VALID an attestation is issued over (identifier, national ID, time).
4. The record is stored, replacing any previous one for the identifier.

If the provider is unavailable no verification record is stored and the
error propagates. A subject registered in step 1 remains registered.

Version: 0.1.0
"""

from collections.abc import Callable

from kyc_common.attestation import AttestationIssuer, get_attestation_issuer, now_ms
from kyc_common.logging import get_logger
from kyc_common.storage import InMemoryStore
from services.kyc.errors import AlreadyRegisteredError, VerificationUnavailableError
from services.kyc.models import (
    DocumentKind,
    PersonalDataSnapshot,
    VerificationOutcome,
    VerificationRecord,
    VerificationRequest,
    VerificationResult,
    canonicalize_identifier,
)
from services.kyc.providers import VerificationProvider, get_verification_provider
from services.kyc.records import VerificationLedger
from services.kyc.registry import SubjectRegistry


logger = get_logger(__name__)

DOC_UPLOAD_DIR = "uploads/docs"


class VerificationOrchestrator:
    """
    KYC verification pipeline.

    Usage:
        orchestrator = VerificationOrchestrator(registry, ledger, provider, issuer)

        result = await orchestrator.submit_verification(request)
        record = await orchestrator.get_status("0xabc...")
    """

    def __init__(
        self,
        registry: SubjectRegistry,
        ledger: VerificationLedger,
        provider: VerificationProvider,
        issuer: AttestationIssuer,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.registry = registry
        self.ledger = ledger
        self.provider = provider
        self.issuer = issuer
        self._clock = clock

    async def _ensure_registered(self, identifier: str, request: VerificationRequest) -> None:
        if await self.registry.lookup(identifier) is not None:
            return

        doc_photo = request.document(DocumentKind.DOC_PHOTO)
        doc_photo_path = (
            f"{DOC_UPLOAD_DIR}/{self._clock()}_{doc_photo.filename}" if doc_photo else None
        )

        try:
            await self.registry.register(
                identifier,
                request.personal_data,
                doc_photo_path=doc_photo_path,
            )
        except AlreadyRegisteredError:
            # Registered concurrently by another request
            logger.debug("registration_race_lost", identifier=identifier)

    async def submit_verification(self, request: VerificationRequest) -> VerificationResult:
        """
        Run a full verification pass.

        Args:
            request: Validated verification request

        Returns:
            VerificationResult with the outcome and, on VALID, the attestation

        Raises:
            VerificationUnavailableError: If the provider produced no outcome
        """
        identifier = canonicalize_identifier(request.identifier)
        logger.info("verification_started", identifier=identifier)

        await self._ensure_registered(identifier, request)

        try:
            response = await self.provider.verify(request.personal_data)
        except VerificationUnavailableError as e:
            logger.warning(
                "verification_unavailable",
                identifier=identifier,
                provider=e.provider,
                reason=e.reason,
            )
            raise

        attestation: str | None = None
        if response.outcome == VerificationOutcome.VALID:
            attestation = self.issuer.issue(
                identifier,
                request.personal_data.national_id,
                self._clock(),
            )

        record = VerificationRecord(
            identifier=identifier,
            outcome=response.outcome,
            attestation=attestation,
            personal_data=PersonalDataSnapshot.from_personal_data(request.personal_data),
            provider_reference=response.reference,
        )
        await self.ledger.save(record)

        logger.info(
            "verification_completed",
            identifier=identifier,
            outcome=response.outcome.value,
            issued=attestation is not None,
        )

        return VerificationResult(outcome=response.outcome, attestation=attestation)

    async def get_status(self, identifier: str) -> VerificationRecord | None:
        """Latest verification record, or None if never verified."""
        return await self.ledger.get(identifier)

    async def is_verified(self, identifier: str) -> bool:
        return await self.ledger.is_verified(identifier)

    async def validate_attestation(self, identifier: str) -> bool:
        """Re-derive the stored attestation of ``identifier`` and check it."""
        record = await self.ledger.get(identifier)
        if record is None or record.attestation is None:
            return False

        return self.issuer.validate(
            record.attestation,
            record.identifier,
            record.personal_data.national_id,
        )


# Global orchestrator instance
_orchestrator: VerificationOrchestrator | None = None


def get_orchestrator() -> VerificationOrchestrator:
    """
    Get the process-wide orchestrator, wired to in-memory stores and the
    configured provider and issuer.
    """
    global _orchestrator

    if _orchestrator is None:
        _orchestrator = VerificationOrchestrator(
            registry=SubjectRegistry(InMemoryStore(name="subjects")),
            ledger=VerificationLedger(InMemoryStore(name="verification_records")),
            provider=get_verification_provider(),
            issuer=get_attestation_issuer(),
        )
        logger.info("orchestrator_initialized", provider=_orchestrator.provider.name)

    return _orchestrator


def set_orchestrator(orchestrator: VerificationOrchestrator) -> None:
    global _orchestrator
    _orchestrator = orchestrator


def reset_orchestrator() -> None:
    """Reset the orchestrator to be re-initialized."""
    global _orchestrator
    _orchestrator = None
