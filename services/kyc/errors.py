"""
KYC Errors
==========

Error taxonomy of the verification core.

Malformed input never reaches the core: it is rejected by request
validation in the HTTP layer. An unknown subject is not an error either;
status queries return None.
"""


class KycError(Exception):
    """Base class for KYC core errors."""

    code = "KYC_ERROR"
    retryable = False


class AlreadyRegisteredError(KycError):
    """A subject is already registered under this canonical identifier."""

    code = "ALREADY_REGISTERED"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Identifier already registered: {identifier}")


class VerificationUnavailableError(KycError):
    """The external verification authority could not produce an outcome."""

    code = "VERIFICATION_UNAVAILABLE"
    retryable = True

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"Verification provider '{provider}' unavailable: {reason}")
