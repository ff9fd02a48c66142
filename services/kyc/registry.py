"""
Subject Registry
================

One Subject per canonical identifier. Registration happens at most once
per identifier; a bound Subject is never replaced or merged.

Version: 0.1.0
"""

from kyc_common.logging import get_logger
from kyc_common.storage import KeyValueStore
from services.kyc.errors import AlreadyRegisteredError
from services.kyc.models import PersonalData, Subject, canonicalize_identifier


logger = get_logger(__name__)


class SubjectRegistry:
    """
    Registry of verified-or-verifying subjects.

    Canonicalization happens here so all callers share one notion of
    identity.
    """

    def __init__(self, store: KeyValueStore[Subject]) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore[Subject]:
        return self._store

    async def register(
        self,
        identifier: str,
        personal_data: PersonalData,
        doc_photo_path: str | None = None,
    ) -> Subject:
        """
        Register a new subject.

        Args:
            identifier: Subject identifier (any case)
            personal_data: Personal fields to bind to the subject
            doc_photo_path: Optional path of the uploaded document photo

        Returns:
            The created Subject

        Raises:
            AlreadyRegisteredError: If the canonical identifier is taken
        """
        canonical = canonicalize_identifier(identifier)

        subject = Subject(
            identifier=canonical,
            name=personal_data.name,
            lastname=personal_data.lastname,
            national_id=personal_data.national_id,
            date_of_birth=personal_data.date_of_birth,
            email=personal_data.email,
            country=personal_data.country,
            doc_photo_path=doc_photo_path,
        )

        if not await self._store.insert_if_absent(canonical, subject):
            logger.info("subject_already_registered", identifier=canonical)
            raise AlreadyRegisteredError(canonical)

        logger.info(
            "subject_registered",
            identifier=canonical,
            user_id=subject.user_id,
        )
        return subject

    async def lookup(self, identifier: str) -> Subject | None:
        """Get the subject bound to ``identifier``, or None."""
        return await self._store.get(canonicalize_identifier(identifier))

    async def list_subjects(self) -> list[Subject]:
        """All registered subjects, oldest first."""
        subjects = await self._store.values()
        return sorted(subjects, key=lambda s: s.registered_at)
