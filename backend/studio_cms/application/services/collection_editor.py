"""Collection editor — add / update / delete / reorder for one ordering domain."""

import asyncio
import logging
from collections.abc import Awaitable
from enum import Enum
from typing import Any, TypeVar

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.application.services.notifications import (
    format_content_change_alert,
    notify_in_background,
)
from studio_cms.application.services.ordered_collection_view import OrderedCollectionView
from studio_cms.application.services.reorder_coordinator import ReorderCoordinator, ReorderResult
from studio_cms.domain.collections import CollectionSchema
from studio_cms.domain.entities import OrderedRecord
from studio_cms.domain.exceptions import (
    ActionNotAllowedError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    InvalidFieldError,
)
from studio_cms.domain.paths import join_path
from studio_cms.infrastructure.logging.colored_logger import ContentLogger, ContentStage

logger = logging.getLogger(__name__)
plog = ContentLogger("ContentPipeline")

T = TypeVar("T")

PREVIEW_SIZE = 3


class EditorMode(str, Enum):
    EDITING = "editing"
    PREVIEWING = "previewing"


class SyncState(str, Enum):
    SYNCING = "syncing"
    SYNCED = "synced"


class CollectionEditor:
    """Binds one ordering domain to its editing actions.

    The editor owns a live ``OrderedCollectionView``; call ``open()`` before
    use and ``close()`` when done so the store subscription is released.
    ``sync_state`` is SYNCING from the start of a write until the store's own
    snapshot arrives with no other write in flight.
    """

    def __init__(
        self,
        schema: CollectionSchema,
        store: RecordStore,
        coordinator: ReorderCoordinator,
        notifier: ChangeNotifier | None = None,
    ):
        self.schema = schema
        self._store = store
        self._coordinator = coordinator
        self._notifier = notifier
        self._view = OrderedCollectionView(
            store,
            schema.path,
            partition_field=schema.partition_field,
            partition_value=schema.partition_value,
        )
        self._view.add_listener(self._on_snapshot)
        self.mode = EditorMode.EDITING
        self._in_flight = 0
        self._awaiting_echo = False

    # ── Lifetime ────────────────────────────────────────────────────

    def open(self) -> "CollectionEditor":
        self._view.open()
        return self

    def close(self) -> None:
        self._view.close()

    async def wait_until_loaded(self, timeout: float | None = None) -> list[OrderedRecord]:
        return await self._view.wait_for_snapshot(timeout)

    async def __aenter__(self) -> "CollectionEditor":
        self.open()
        try:
            await self.wait_until_loaded()
        except BaseException:
            self.close()
            raise
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    # ── State ───────────────────────────────────────────────────────

    @property
    def view(self) -> OrderedCollectionView:
        return self._view

    @property
    def records(self) -> list[OrderedRecord]:
        return self._view.records

    @property
    def sync_state(self) -> SyncState:
        if self._in_flight or self._awaiting_echo:
            return SyncState.SYNCING
        return SyncState.SYNCED

    def _on_snapshot(self, records: list[OrderedRecord]) -> None:
        if self._in_flight == 0:
            self._awaiting_echo = False

    async def _tracked(self, operation: Awaitable[T]) -> T:
        self._in_flight += 1
        try:
            result = await operation
        except BaseException:
            self._in_flight -= 1
            raise
        self._in_flight -= 1
        # The store queues its notification before a write returns, so the
        # echo is delivered no later than the next loop iteration.
        self._awaiting_echo = True
        asyncio.get_running_loop().call_soon(self._on_snapshot, [])
        return result

    def toggle_preview(self) -> EditorMode:
        self.mode = EditorMode.EDITING if self.mode is EditorMode.PREVIEWING else EditorMode.PREVIEWING
        return self.mode

    def preview(self) -> list[OrderedRecord]:
        """The records a visitor would see: the first few in display order."""
        return self.records[:PREVIEW_SIZE]

    def _require(self, key: str) -> OrderedRecord:
        record = self._view.find(key)
        if record is None:
            raise EntityNotFoundError(self.schema.section, key)
        return record

    def _notify(self, message: str) -> asyncio.Task | None:
        return notify_in_background(
            self._notifier,
            format_content_change_alert(self.schema.section, message),
            section=self.schema.section,
            action=message,
        )

    # ── Actions ─────────────────────────────────────────────────────

    async def add(self) -> str:
        """Append a record with the domain's defaults at ``order = count``."""
        if not self.schema.allows_add:
            raise ActionNotAllowedError(self.schema.section, "add")

        order = len(self.records)
        pending = self._store.append_record(self.schema.path, self.schema.new_record(order))
        await self._tracked(pending)
        plog.step_complete(ContentStage.ADD, f"{self.schema.domain}/{pending.key}", order=order)
        self._notify(self.schema.add_message)
        return pending.key

    async def update_field(self, key: str, field: str, value: Any) -> Any:
        """Write one field; returns the value as stored after input constraints."""
        field_spec = self.schema.field_spec(field)
        if field_spec is None:
            raise InvalidFieldError(self.schema.section, field)
        self._require(key)

        stored = field_spec.coerce(value)
        await self._tracked(
            self._store.write_field(join_path(self.schema.path, key, field), stored)
        )
        plog.detail(f"{self.schema.domain}/{key}.{field} updated")
        return stored

    async def delete(self, key: str, *, confirmed: bool = False) -> None:
        """Remove one record. Siblings keep their order; the gap closes on the next reorder."""
        if not confirmed:
            raise ConfirmationRequiredError(f"Deleting from {self.schema.section}")
        self._require(key)

        await self._tracked(self._store.delete_record(join_path(self.schema.path, key)))
        plog.step_complete(ContentStage.DELETE, f"{self.schema.domain}/{key}")
        self._notify(self.schema.delete_message)

    async def reorder(self, source_index: int, destination_index: int | None) -> ReorderResult:
        operation = self._coordinator.reorder(
            self._view,
            source_index,
            destination_index,
            section=self.schema.section,
            message=self.schema.reorder_message,
        )
        if destination_index is None:
            return await operation

        echo_pending = self._awaiting_echo
        result = await self._tracked(operation)
        if not result.changed:
            # Nothing was written, so no echo is coming for this reorder.
            self._awaiting_echo = echo_pending
        return result
