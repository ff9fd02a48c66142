"""
Unit Tests for Attestation Issuer
=================================

Tests for HMAC attestation issuance, validation and token parsing.

Version: 0.1.0
"""

import hashlib
import hmac
import re

import pytest

from kyc_common.attestation import (
    AttestationParts,
    HmacAttestationIssuer,
    get_attestation_issuer,
    now_ms,
    parse_token,
    reset_attestation_issuer,
    set_attestation_issuer,
)


TOKEN_PATTERN = re.compile(r"^zkp_\d+_[0-9a-f]{64}$")
IDENTIFIER = "0xabc0000000000000000000000000000000000001"
FACT = "12345678"
TIMESTAMP = 1_700_000_000_000


class TestHmacAttestationIssuer:
    """Tests for HmacAttestationIssuer."""

    @pytest.fixture
    def issuer(self) -> HmacAttestationIssuer:
        return HmacAttestationIssuer(secret="unit-secret")

    def test_token_shape(self, issuer: HmacAttestationIssuer) -> None:
        token = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        assert TOKEN_PATTERN.match(token)
        assert token.startswith(f"zkp_{TIMESTAMP}_")

    def test_digest_is_hmac_over_joined_inputs(self, issuer: HmacAttestationIssuer) -> None:
        token = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        expected = hmac.new(
            b"unit-secret",
            f"{IDENTIFIER}:{FACT}:{TIMESTAMP}".encode(),
            hashlib.sha256,
        ).hexdigest()
        assert token.split("_")[2] == expected

    def test_issue_is_deterministic(self, issuer: HmacAttestationIssuer) -> None:
        assert issuer.issue(IDENTIFIER, FACT, TIMESTAMP) == issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

    def test_any_input_changes_token(self, issuer: HmacAttestationIssuer) -> None:
        base = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        assert issuer.issue(IDENTIFIER, "87654322", TIMESTAMP) != base
        assert issuer.issue("0xother", FACT, TIMESTAMP) != base
        assert issuer.issue(IDENTIFIER, FACT, TIMESTAMP + 1) != base

    def test_secret_changes_token(self, issuer: HmacAttestationIssuer) -> None:
        other = HmacAttestationIssuer(secret="another-secret")

        assert other.issue(IDENTIFIER, FACT, TIMESTAMP) != issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

    def test_validate_roundtrip(self, issuer: HmacAttestationIssuer) -> None:
        token = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        assert issuer.validate(token, IDENTIFIER, FACT) is True

    def test_validate_rejects_wrong_subject_or_fact(self, issuer: HmacAttestationIssuer) -> None:
        token = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        assert issuer.validate(token, "0xsomeoneelse", FACT) is False
        assert issuer.validate(token, IDENTIFIER, "11111112") is False

    def test_validate_rejects_token_from_other_secret(self, issuer: HmacAttestationIssuer) -> None:
        forged = HmacAttestationIssuer(secret="guess").issue(IDENTIFIER, FACT, TIMESTAMP)

        assert issuer.validate(forged, IDENTIFIER, FACT) is False

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "zkp",
            "zkp_123",
            "zkp_abc_" + "0" * 64,
            "zkp_123_" + "0" * 63,
            "zkp_123_" + "g" * 64,
            "zkp_1_2_" + "0" * 64,
            "abc_123_" + "0" * 64,
            "zkp_-5_" + "0" * 64,
        ],
    )
    def test_validate_never_raises_on_malformed(
        self, issuer: HmacAttestationIssuer, token: str
    ) -> None:
        assert issuer.validate(token, IDENTIFIER, FACT) is False

    def test_validate_non_string(self, issuer: HmacAttestationIssuer) -> None:
        assert issuer.validate(None, IDENTIFIER, FACT) is False  # type: ignore[arg-type]

    def test_custom_prefix(self) -> None:
        issuer = HmacAttestationIssuer(secret="s", prefix="att")
        token = issuer.issue(IDENTIFIER, FACT, TIMESTAMP)

        assert token.startswith("att_")
        assert issuer.validate(token, IDENTIFIER, FACT)
        assert HmacAttestationIssuer(secret="s").validate(token, IDENTIFIER, FACT) is False

    def test_invalid_construction(self) -> None:
        with pytest.raises(ValueError):
            HmacAttestationIssuer(secret="")
        with pytest.raises(ValueError):
            HmacAttestationIssuer(secret="s", prefix="bad_prefix")

    def test_negative_timestamp_rejected(self, issuer: HmacAttestationIssuer) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            issuer.issue(IDENTIFIER, FACT, -1)


class TestParseToken:
    """Tests for token parsing."""

    def test_parse_valid(self) -> None:
        digest = "a" * 64
        parts = parse_token(f"zkp_42_{digest}")

        assert parts == AttestationParts(prefix="zkp", timestamp=42, digest=digest)
        assert parts.to_token() == f"zkp_42_{digest}"

    def test_parse_invalid(self) -> None:
        assert parse_token("zkp_42") is None
        assert parse_token("zkp_4x2_" + "a" * 64) is None


class TestIssuerFactory:
    """Tests for the process-wide issuer."""

    def teardown_method(self) -> None:
        reset_attestation_issuer()

    def test_default_issuer_uses_settings(self) -> None:
        reset_attestation_issuer()
        issuer = get_attestation_issuer()

        assert isinstance(issuer, HmacAttestationIssuer)
        assert issuer.prefix == "zkp"
        assert get_attestation_issuer() is issuer

        expected = HmacAttestationIssuer(secret="test-attestation-secret")
        assert issuer.issue(IDENTIFIER, FACT, TIMESTAMP) == expected.issue(IDENTIFIER, FACT, TIMESTAMP)

    def test_set_issuer(self) -> None:
        custom = HmacAttestationIssuer(secret="custom")
        set_attestation_issuer(custom)

        assert get_attestation_issuer() is custom


def test_now_ms_is_epoch_milliseconds() -> None:
    value = now_ms()

    assert isinstance(value, int)
    assert value > 1_600_000_000_000
