"""Ordered collection view — keyed store snapshots as sorted record lists.

The store delivers a collection as ``{key: {field: value, ...}}``. The view
flattens that mapping into ``OrderedRecord`` objects, optionally keeps only
one partition (e.g. ``type == "graphic"``), and sorts by ``order``. Ties
keep the store's iteration order, which for push keys is creation order.

A view may carry an optimistic override set by the reorder coordinator. While
a reorder is in flight, snapshots refresh the authoritative list but keep the
override; the first snapshot after the last reorder ends replaces it.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

from studio_cms.application.interfaces import RecordStore, Subscription
from studio_cms.domain.entities import OrderedRecord

logger = logging.getLogger(__name__)

Listener = Callable[[list[OrderedRecord]], None]


def _rank(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def flatten_tree(raw: Any) -> list[OrderedRecord]:
    """Pair each key with its fields; absent or malformed input yields ``[]``."""
    if not isinstance(raw, dict):
        return []

    records: list[OrderedRecord] = []
    for key, value in raw.items():
        if not isinstance(value, dict):
            logger.debug("Skipping non-record child '%s'", key)
            continue
        fields = {name: v for name, v in value.items() if name != "order"}
        records.append(OrderedRecord(key=str(key), order=_rank(value.get("order")), fields=fields))
    return records


def sort_by_order(records: Iterable[OrderedRecord]) -> list[OrderedRecord]:
    """Stable ascending sort; records without a numeric order go last."""
    return sorted(records, key=lambda r: (r.order is None, r.order if r.order is not None else 0))


def partition(
    records: Iterable[OrderedRecord], field: str, values: Iterable[str]
) -> dict[str, list[OrderedRecord]]:
    """Split records by a discriminant field, each partition sorted on its own.

    Records whose discriminant matches none of ``values`` are dropped.
    """
    groups: dict[str, list[OrderedRecord]] = {value: [] for value in values}
    for record in records:
        group = groups.get(record.get(field))
        if group is not None:
            group.append(record)
    return {value: sort_by_order(group) for value, group in groups.items()}


def derive(
    raw: Any, partition_field: str | None = None, partition_value: str | None = None
) -> list[OrderedRecord]:
    """Full derivation: flatten, optionally filter to one partition, sort."""
    records = flatten_tree(raw)
    if partition_field is not None:
        records = [r for r in records if r.get(partition_field) == partition_value]
    return sort_by_order(records)


class OrderedCollectionView:
    """Live, sorted view of one ordering domain.

    Usage:
        async with OrderedCollectionView(store, "features") as view:
            print([r.key for r in view.records])
    """

    def __init__(
        self,
        store: RecordStore,
        path: str,
        *,
        partition_field: str | None = None,
        partition_value: str | None = None,
    ):
        self._store = store
        self.path = path
        self._partition_field = partition_field
        self._partition_value = partition_value
        self._authoritative: list[OrderedRecord] = []
        self._optimistic: list[OrderedRecord] | None = None
        self._reorders_in_flight = 0
        self._subscription: Subscription | None = None
        self._listeners: list[Listener] = []
        self._waiters: list[asyncio.Future[list[OrderedRecord]]] = []
        self.snapshot_count = 0

    # ── Lifetime ────────────────────────────────────────────────────

    def open(self) -> "OrderedCollectionView":
        if self._subscription is None:
            self._subscription = self._store.subscribe_tree(self.path, self._on_snapshot)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for waiter in self._waiters:
            if not waiter.done():
                waiter.cancel()
        self._waiters.clear()

    @property
    def is_open(self) -> bool:
        return self._subscription is not None

    def __enter__(self) -> "OrderedCollectionView":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "OrderedCollectionView":
        self.open()
        try:
            await self.wait_for_snapshot()
        except BaseException:
            self.close()
            raise
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    # ── Snapshots ───────────────────────────────────────────────────

    def _on_snapshot(self, raw: Any) -> None:
        self._authoritative = derive(raw, self._partition_field, self._partition_value)
        if not self._reorders_in_flight:
            self._optimistic = None
        self.snapshot_count += 1

        records = self.records
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(records)
        self._notify_listeners(records)

    def _notify_listeners(self, records: list[OrderedRecord]) -> None:
        for listener in list(self._listeners):
            listener(records)

    async def next_snapshot(self, timeout: float | None = None) -> list[OrderedRecord]:
        """Wait for the next authoritative snapshot and return its records."""
        waiter: asyncio.Future[list[OrderedRecord]] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        return await asyncio.wait_for(waiter, timeout)

    async def wait_for_snapshot(self, timeout: float | None = None) -> list[OrderedRecord]:
        """Return at once if a snapshot has arrived, otherwise wait for the first."""
        if self.snapshot_count:
            return self.records
        return await self.next_snapshot(timeout)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every snapshot; returns a remover."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    # ── State ───────────────────────────────────────────────────────

    @property
    def records(self) -> list[OrderedRecord]:
        """Optimistic override when present, else the last authoritative list."""
        source = self._optimistic if self._optimistic is not None else self._authoritative
        return list(source)

    @property
    def authoritative_records(self) -> list[OrderedRecord]:
        return list(self._authoritative)

    @property
    def has_optimistic_state(self) -> bool:
        return self._optimistic is not None

    @property
    def reorder_in_flight(self) -> bool:
        return self._reorders_in_flight > 0

    def apply_optimistic(self, records: Iterable[OrderedRecord]) -> None:
        self._optimistic = list(records)

    def begin_reorder(self, records: Iterable[OrderedRecord]) -> None:
        """Show ``records`` and hold them until ``end_reorder`` releases the view."""
        self._reorders_in_flight += 1
        self.apply_optimistic(records)

    def end_reorder(self) -> None:
        """Release after the snapshots already queued by the reorder's writes.

        Stores queue their notifications with ``call_soon`` before a write
        returns, so a release queued now runs after every one of them.
        """
        asyncio.get_running_loop().call_soon(self._release_reorder)

    def _release_reorder(self) -> None:
        self._reorders_in_flight -= 1
        if self._reorders_in_flight or self._optimistic is None:
            return
        optimistic, self._optimistic = self._optimistic, None
        if optimistic != self._authoritative:
            logger.debug("Optimistic order of '%s' differs from the store; showing the store's", self.path)
            self._notify_listeners(self.records)

    def find(self, key: str) -> OrderedRecord | None:
        for record in self.records:
            if record.key == key:
                return record
        return None
