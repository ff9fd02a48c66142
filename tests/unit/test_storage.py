"""
Unit tests for the in-memory store.
"""

import asyncio

import pytest

from kyc_common.storage import InMemoryStore, KeyValueStore


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    @pytest.fixture
    def store(self) -> InMemoryStore[str]:
        return InMemoryStore[str](name="test")

    def test_implements_port(self, store: InMemoryStore[str]) -> None:
        assert isinstance(store, KeyValueStore)
        assert store.name == "test"

    @pytest.mark.asyncio
    async def test_get_missing(self, store: InMemoryStore[str]) -> None:
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_insert_if_absent(self, store: InMemoryStore[str]) -> None:
        assert await store.insert_if_absent("k", "first") is True
        assert await store.insert_if_absent("k", "second") is False

        assert await store.get("k") == "first"

    @pytest.mark.asyncio
    async def test_upsert_overwrites(self, store: InMemoryStore[str]) -> None:
        await store.upsert("k", "first")
        await store.upsert("k", "second")

        assert await store.get("k") == "second"
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_concurrent_insert_if_absent_single_winner(
        self, store: InMemoryStore[str]
    ) -> None:
        results = await asyncio.gather(
            *(store.insert_if_absent("k", f"value-{i}") for i in range(20))
        )

        assert results.count(True) == 1
        winner = results.index(True)
        assert await store.get("k") == f"value-{winner}"

    @pytest.mark.asyncio
    async def test_values_and_clear(self, store: InMemoryStore[str]) -> None:
        await store.upsert("a", "1")
        await store.upsert("b", "2")

        assert sorted(await store.values()) == ["1", "2"]

        await store.clear()
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_health_check(self, store: InMemoryStore[str]) -> None:
        await store.upsert("a", "1")
        health = await store.health_check()

        assert health["status"] == "healthy"
        assert health["entries"] == 1
        assert health["store"] == "test"
