"""
Storage Port
============

Abstract key-value port used by the KYC core. The core depends only on
this interface, so a durable backend can replace the in-memory one
without touching orchestration logic.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class KeyValueStore(ABC, Generic[T]):
    """
    Abstract base class for keyed entity stores.

    ``insert_if_absent`` must be atomic with respect to its own existence
    check. ``upsert`` is a blind last-writer-wins replacement.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name, used in logs and health output."""
        ...

    @abstractmethod
    async def get(self, key: str) -> T | None:
        """Return the value bound to ``key`` or None."""
        ...

    @abstractmethod
    async def insert_if_absent(self, key: str, value: T) -> bool:
        """
        Bind ``value`` to ``key`` unless a binding already exists.

        Returns:
            True if inserted, False if ``key`` was already bound
        """
        ...

    @abstractmethod
    async def upsert(self, key: str, value: T) -> None:
        """Bind ``value`` to ``key``, replacing any previous value."""
        ...

    @abstractmethod
    async def values(self) -> list[T]:
        """Return all stored values."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def clear(self) -> None:
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        ...
