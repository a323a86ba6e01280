"""Unit tests for public contact and review submissions."""

import asyncio
from typing import Any

import pytest

from studio_cms.application.schemas import ContactCreate, ReviewCreate
from studio_cms.application.services import SubmissionService
from studio_cms.domain.exceptions import CooldownActiveError, StoreWriteError
from studio_cms.infrastructure.store import InMemoryRecordStore


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class RejectingStore(InMemoryRecordStore):
    async def write_field(self, path: str, value: Any) -> None:
        raise StoreWriteError(path, "offline")


def _contact() -> ContactCreate:
    return ContactCreate(name=" Jane ", email="jane@example.com", phone="+1 555", description="Need a logo")


def _review(rating: int = 5) -> ReviewCreate:
    return ReviewCreate(username="jane", rating=rating, description="Great work")


@pytest.mark.asyncio
async def test_contact_is_stored_with_timestamp():
    store = InMemoryRecordStore()
    service = SubmissionService(store, clock=FakeClock())

    key = await service.submit_contact("client-1", _contact())

    record = await store.read_tree(f"contacts/{key}")
    assert record["name"] == "Jane"
    assert record["email"] == "jane@example.com"
    assert isinstance(record["timestamp"], int)


@pytest.mark.asyncio
async def test_second_submission_within_cooldown_is_rejected():
    store = InMemoryRecordStore()
    clock = FakeClock()
    service = SubmissionService(store, clock=clock)

    await service.submit_contact("client-1", _contact())
    clock.now += 10
    with pytest.raises(CooldownActiveError) as excinfo:
        await service.submit_contact("client-1", _contact())

    assert str(excinfo.value) == "Please wait a minute before submitting another message."
    assert len(await store.read_tree("contacts")) == 1


@pytest.mark.asyncio
async def test_cooldown_expires_and_is_per_client():
    store = InMemoryRecordStore()
    clock = FakeClock()
    service = SubmissionService(store, clock=clock)

    await service.submit_contact("client-1", _contact())
    await service.submit_contact("client-2", _contact())
    clock.now += 61
    await service.submit_contact("client-1", _contact())

    assert len(await store.read_tree("contacts")) == 3


@pytest.mark.asyncio
async def test_contact_and_review_cooldowns_are_separate():
    store = InMemoryRecordStore()
    service = SubmissionService(store, clock=FakeClock())

    await service.submit_contact("client-1", _contact())
    await service.submit_review("client-1", _review())
    with pytest.raises(CooldownActiveError) as excinfo:
        await service.submit_review("client-1", _review())

    assert str(excinfo.value) == "Please wait a minute before submitting another review."


@pytest.mark.asyncio
async def test_failed_write_does_not_start_cooldown():
    service = SubmissionService(RejectingStore(), clock=FakeClock())
    with pytest.raises(StoreWriteError):
        await service.submit_contact("client-1", _contact())
    with pytest.raises(StoreWriteError):
        await service.submit_contact("client-1", _contact())


@pytest.mark.asyncio
async def test_review_order_is_its_timestamp_and_rating_is_clamped():
    store = InMemoryRecordStore()
    service = SubmissionService(store, clock=FakeClock())

    key = await service.submit_review("client-1", _review(rating=9))
    await asyncio.sleep(0)

    record = await store.read_tree(f"reviews/{key}")
    assert record["rating"] == 5
    assert record["order"] == record["timestamp"]
