"""Unit tests for the in-memory realtime store."""

import asyncio

import pytest

from studio_cms.infrastructure.store import InMemoryRecordStore


async def settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_subscribe_delivers_initial_snapshot_asynchronously():
    store = InMemoryRecordStore({"features": {"a": {"name": "A", "order": 0}}})
    received: list = []

    store.subscribe_tree("features", received.append)
    assert received == []

    await settle()
    assert received == [{"a": {"name": "A", "order": 0}}]


@pytest.mark.asyncio
async def test_absent_path_delivers_none():
    store = InMemoryRecordStore()
    received: list = []
    store.subscribe_tree("features", received.append)
    await settle()
    assert received == [None]


@pytest.mark.asyncio
async def test_overlapping_subscribers_see_each_write():
    store = InMemoryRecordStore()
    parent: list = []
    child: list = []
    unrelated: list = []
    store.subscribe_tree("pricing", parent.append)
    store.subscribe_tree("pricing/monthly", child.append)
    store.subscribe_tree("features", unrelated.append)
    await settle()

    await store.write_field("pricing/monthly/k1/title", "Starter")
    await settle()

    assert parent[-1] == {"monthly": {"k1": {"title": "Starter"}}}
    assert child[-1] == {"k1": {"title": "Starter"}}
    assert unrelated == [None]


@pytest.mark.asyncio
async def test_unsubscribe_stops_delivery_and_is_idempotent():
    store = InMemoryRecordStore()
    received: list = []
    subscription = store.subscribe_tree("features", received.append)
    await settle()

    subscription.unsubscribe()
    subscription.unsubscribe()
    await store.write_field("features/a/name", "A")
    await settle()

    assert received == [None]
    assert store.subscription_count == 0


@pytest.mark.asyncio
async def test_append_record_allocates_key_before_write_lands():
    store = InMemoryRecordStore()
    pending = store.append_record("reviews", {"username": "jane"})
    assert len(pending.key) == 20

    key = await pending
    assert key == pending.key
    assert await store.read_tree(f"reviews/{key}") == {"username": "jane"}


@pytest.mark.asyncio
async def test_root_write_is_rejected():
    store = InMemoryRecordStore()
    with pytest.raises(ValueError):
        await store.write_field("", {"features": {}})


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_block_others():
    store = InMemoryRecordStore()
    received: list = []

    def broken(_snapshot):
        raise RuntimeError("boom")

    store.subscribe_tree("features", broken)
    store.subscribe_tree("features", received.append)
    await settle()

    assert received == [None]
