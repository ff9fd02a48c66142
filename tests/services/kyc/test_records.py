"""
Verification Ledger Tests
=========================

Tests for last-writer-wins record storage and the attestation/outcome
coupling of VerificationRecord.

Version: 0.1.0
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from services.kyc.models import (
    PersonalDataSnapshot,
    VerificationOutcome,
    VerificationRecord,
)
from services.kyc.records import VerificationLedger


WALLET = "0xabc0000000000000000000000000000000000001"
TOKEN = "zkp_1700000000000_" + "a" * 64


@pytest.fixture
def snapshot() -> PersonalDataSnapshot:
    return PersonalDataSnapshot(
        name="Juan",
        lastname="Perez",
        national_id="12345678",
        date_of_birth="1990-01-15",
        country="AR",
    )


class TestVerificationRecord:
    """Tests for the attestation iff VALID invariant."""

    def test_valid_requires_attestation(self, snapshot: PersonalDataSnapshot) -> None:
        with pytest.raises(ValidationError, match="Attestation must be present"):
            VerificationRecord(
                identifier=WALLET,
                outcome=VerificationOutcome.VALID,
                personal_data=snapshot,
            )

    @pytest.mark.parametrize(
        "outcome",
        [VerificationOutcome.REJECTED, VerificationOutcome.PENDING],
    )
    def test_non_valid_forbids_attestation(
        self, snapshot: PersonalDataSnapshot, outcome: VerificationOutcome
    ) -> None:
        with pytest.raises(ValidationError):
            VerificationRecord(
                identifier=WALLET,
                outcome=outcome,
                attestation=TOKEN,
                personal_data=snapshot,
            )

    def test_valid_with_attestation(self, snapshot: PersonalDataSnapshot) -> None:
        record = VerificationRecord(
            identifier=WALLET,
            outcome=VerificationOutcome.VALID,
            attestation=TOKEN,
            personal_data=snapshot,
        )

        assert record.attestation == TOKEN


class TestVerificationLedger:
    """Tests for VerificationLedger."""

    @pytest.mark.asyncio
    async def test_get_unknown(self, ledger: VerificationLedger) -> None:
        assert await ledger.get(WALLET) is None
        assert await ledger.is_verified(WALLET) is False

    @pytest.mark.asyncio
    async def test_save_overwrites(
        self, ledger: VerificationLedger, snapshot: PersonalDataSnapshot
    ) -> None:
        await ledger.save(
            VerificationRecord(
                identifier=WALLET,
                outcome=VerificationOutcome.VALID,
                attestation=TOKEN,
                personal_data=snapshot,
            )
        )
        assert await ledger.is_verified(WALLET) is True

        await ledger.save(
            VerificationRecord(
                identifier=WALLET,
                outcome=VerificationOutcome.PENDING,
                personal_data=snapshot,
            )
        )

        record = await ledger.get(WALLET.upper().replace("0X", "0x"))
        assert record is not None
        assert record.outcome == VerificationOutcome.PENDING
        assert record.attestation is None
        assert await ledger.is_verified(WALLET) is False
        assert len(await ledger.list_records()) == 1

    @pytest.mark.asyncio
    async def test_list_records_newest_first(
        self, ledger: VerificationLedger, snapshot: PersonalDataSnapshot
    ) -> None:
        older = datetime(2024, 1, 1, tzinfo=UTC)
        newer = datetime(2024, 6, 1, tzinfo=UTC)
        for identifier, updated in (("0x01", older), ("0x02", newer)):
            await ledger.save(
                VerificationRecord(
                    identifier=identifier,
                    outcome=VerificationOutcome.REJECTED,
                    last_updated=updated,
                    personal_data=snapshot,
                )
            )

        records = await ledger.list_records()

        assert [r.identifier for r in records] == ["0x02", "0x01"]
