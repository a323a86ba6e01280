"""Unit tests for reorder computation and the reorder coordinator."""

import asyncio
import itertools
from typing import Any

import pytest

from studio_cms.application.interfaces import ChangeNotifier
from studio_cms.application.services import OrderedCollectionView, ReorderCoordinator
from studio_cms.application.services.reorder_coordinator import changed_orders, compute_reorder
from studio_cms.domain.entities import OrderedRecord
from studio_cms.domain.exceptions import InvalidReorderError, ReorderFailedError, StoreWriteError
from studio_cms.infrastructure.store import InMemoryRecordStore


class RecordingNotifier(ChangeNotifier):
    def __init__(self):
        self.sent: list[tuple[str, str | None, str | None]] = []

    @property
    def sink_name(self) -> str:
        return "recording"

    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        self.sent.append((text, section, action))


class FailingAfterStore(InMemoryRecordStore):
    """Accepts ``allowed`` writes, then rejects every write."""

    def __init__(self, initial: dict, allowed: int):
        super().__init__(initial)
        self._allowed = allowed

    async def write_field(self, path: str, value: Any) -> None:
        if self._allowed <= 0:
            raise StoreWriteError(path, "disk full")
        self._allowed -= 1
        await super().write_field(path, value)


async def settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


def _records(*keys: str) -> list[OrderedRecord]:
    return [OrderedRecord(key, order) for order, key in enumerate(keys)]


def test_every_valid_move_is_a_renumbered_permutation():
    sequence = _records("a", "b", "c", "d")
    for source, destination in itertools.product(range(4), repeat=2):
        result = compute_reorder(sequence, source, destination)
        assert sorted(r.key for r in result) == ["a", "b", "c", "d"]
        assert [r.order for r in result] == [0, 1, 2, 3]
        assert result[destination].key == sequence[source].key


def test_same_index_leaves_orders_unchanged():
    sequence = _records("a", "b", "c")
    assert changed_orders(sequence, compute_reorder(sequence, 1, 1)) == {}


def test_move_first_to_last():
    sequence = _records("A", "B", "C")
    result = compute_reorder(sequence, 0, 2)
    assert [(r.key, r.order) for r in result] == [("B", 0), ("C", 1), ("A", 2)]


def test_reorder_closes_gaps_left_by_deletes():
    sequence = [OrderedRecord("a", 0), OrderedRecord("c", 2)]
    result = compute_reorder(sequence, 0, 0)
    assert changed_orders(sequence, result) == {"c": 1}


def test_cancelled_move_returns_none():
    assert compute_reorder(_records("a", "b"), 0, None) is None


@pytest.mark.parametrize("source,destination", [(3, 0), (0, 3), (-1, 0)])
def test_out_of_bounds_indices_are_rejected(source, destination):
    with pytest.raises(InvalidReorderError):
        compute_reorder(_records("a", "b", "c"), source, destination)


@pytest.mark.asyncio
async def test_reorder_writes_changed_orders_and_notifies_once():
    store = InMemoryRecordStore({"features": {"A": {"order": 0}, "B": {"order": 1}, "C": {"order": 2}}})
    notifier = RecordingNotifier()
    coordinator = ReorderCoordinator(store, notifier)

    async with OrderedCollectionView(store, "features") as view:
        result = await coordinator.reorder(view, 0, 2, section="Features", message="Reordered features")
        assert [r.key for r in view.records] == ["B", "C", "A"]
        await settle()

        assert sorted(result.written_keys) == ["A", "B", "C"]
        assert [r.key for r in view.records] == ["B", "C", "A"]
        assert not view.has_optimistic_state

    assert await store.read_tree("features") == {"A": {"order": 2}, "B": {"order": 0}, "C": {"order": 1}}
    assert [(s, a) for _, s, a in notifier.sent] == [("Features", "Reordered features")]


@pytest.mark.asyncio
async def test_same_index_reorder_writes_nothing_but_still_reports_once():
    store = InMemoryRecordStore({"features": {"A": {"order": 0}, "B": {"order": 1}}})
    notifier = RecordingNotifier()
    coordinator = ReorderCoordinator(store, notifier)

    async with OrderedCollectionView(store, "features") as view:
        result = await coordinator.reorder(view, 1, 1, section="Features", message="Reordered features")
        await settle()

    assert result.written_keys == []
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_cancelled_reorder_has_no_effect():
    store = InMemoryRecordStore({"features": {"A": {"order": 0}, "B": {"order": 1}}})
    notifier = RecordingNotifier()
    coordinator = ReorderCoordinator(store, notifier)

    async with OrderedCollectionView(store, "features") as view:
        result = await coordinator.reorder(view, 0, None, section="Features", message="Reordered features")
        await settle()

        assert result.cancelled
        assert not view.has_optimistic_state
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_invalid_reorder_has_no_side_effects():
    store = InMemoryRecordStore({"features": {"A": {"order": 0}}})
    coordinator = ReorderCoordinator(store)

    async with OrderedCollectionView(store, "features") as view:
        with pytest.raises(InvalidReorderError):
            await coordinator.reorder(view, 0, 5, section="Features", message="Reordered features")
        assert not view.has_optimistic_state


@pytest.mark.asyncio
async def test_write_failure_reports_partial_progress_without_notifying():
    store = FailingAfterStore({"features": {"A": {"order": 0}, "B": {"order": 1}, "C": {"order": 2}}}, allowed=1)
    notifier = RecordingNotifier()
    coordinator = ReorderCoordinator(store, notifier)

    async with OrderedCollectionView(store, "features") as view:
        with pytest.raises(ReorderFailedError) as excinfo:
            await coordinator.reorder(view, 0, 2, section="Features", message="Reordered features")
        await settle()

        # The successful write's snapshot is authoritative again.
        assert not view.has_optimistic_state

    assert len(excinfo.value.written_keys) == 1
    assert notifier.sent == []
