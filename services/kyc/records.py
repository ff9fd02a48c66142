"""
Verification Ledger
===================

Latest verification record per subject. Every completed verification
overwrites the previous record for its identifier.

Version: 0.1.0
"""

from kyc_common.logging import get_logger
from kyc_common.storage import KeyValueStore
from services.kyc.models import (
    VerificationOutcome,
    VerificationRecord,
    canonicalize_identifier,
)


logger = get_logger(__name__)


class VerificationLedger:
    """Store of VerificationRecords keyed by canonical identifier."""

    def __init__(self, store: KeyValueStore[VerificationRecord]) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore[VerificationRecord]:
        return self._store

    async def save(self, record: VerificationRecord) -> VerificationRecord:
        """Store ``record``, replacing any earlier record for the subject."""
        key = canonicalize_identifier(record.identifier)
        await self._store.upsert(key, record)

        logger.debug(
            "verification_record_saved",
            identifier=key,
            outcome=record.outcome.value,
        )
        return record

    async def get(self, identifier: str) -> VerificationRecord | None:
        return await self._store.get(canonicalize_identifier(identifier))

    async def is_verified(self, identifier: str) -> bool:
        """True if the latest record for ``identifier`` is VALID."""
        record = await self.get(identifier)
        return record is not None and record.outcome == VerificationOutcome.VALID

    async def list_records(self) -> list[VerificationRecord]:
        """All records, most recently updated first."""
        records = await self._store.values()
        return sorted(records, key=lambda r: r.last_updated, reverse=True)
