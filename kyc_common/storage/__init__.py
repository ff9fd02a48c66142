"""
Storage Module
==============

Storage port and implementations for KYC entities.

Usage:
    from kyc_common.storage import InMemoryStore, KeyValueStore

    store: KeyValueStore[Subject] = InMemoryStore(name="subjects")
    inserted = await store.insert_if_absent("0xabc...", subject)
"""

from kyc_common.storage.base import KeyValueStore
from kyc_common.storage.memory import InMemoryStore

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
]
