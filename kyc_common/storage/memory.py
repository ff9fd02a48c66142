"""
In-Memory Store
===============

Dict-backed implementation of the storage port for development and
testing. Data lives for the lifetime of the process.

Version: 0.1.0
"""

import asyncio
from typing import Any, TypeVar

from kyc_common.logging import get_logger
from kyc_common.storage.base import KeyValueStore

logger = get_logger(__name__)

T = TypeVar("T")


class InMemoryStore(KeyValueStore[T]):
    """
    In-memory key-value store.

    Reads take no lock: per-key replacement of a dict entry is atomic on
    the event loop. Conditional inserts are serialised by an asyncio lock.
    """

    def __init__(self, name: str = "memory") -> None:
        self._name = name
        self._data: dict[str, T] = {}
        self._lock = asyncio.Lock()

        logger.debug("memory_store_initialized", store=name)

    @property
    def name(self) -> str:
        return self._name

    async def get(self, key: str) -> T | None:
        return self._data.get(key)

    async def insert_if_absent(self, key: str, value: T) -> bool:
        async with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    async def upsert(self, key: str, value: T) -> None:
        self._data[key] = value

    async def values(self) -> list[T]:
        return list(self._data.values())

    async def count(self) -> int:
        return len(self._data)

    async def clear(self) -> None:
        async with self._lock:
            self._data.clear()
        logger.debug("memory_store_cleared", store=self._name)

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "backend": "memory",
            "store": self._name,
            "entries": len(self._data),
        }
