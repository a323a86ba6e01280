"""Realtime store persisted through SQLAlchemy.

Each top-level namespace (``features``, ``pricing``, ``footer`` …) is one
JSON document in the ``store_documents`` table. Writes are read-modify-write
on that document, serialised per namespace with an ``asyncio.Lock``.
A write-through cache of loaded documents feeds subscriber snapshots, so
notifications never hit the database.
"""

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from studio_cms.application.interfaces import RecordStore, Subscription
from studio_cms.application.interfaces.record_store import OnChange
from studio_cms.domain.exceptions import StoreWriteError
from studio_cms.domain.paths import get_in, prune, set_in, sorted_tree, split_path
from studio_cms.infrastructure.database.models import StoreDocumentModel
from studio_cms.infrastructure.store.subscription_hub import SubscriptionHub

logger = logging.getLogger(__name__)

_ABSENT = object()


class SQLAlchemyRecordStore(RecordStore):
    """Implements the RecordStore port on top of an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._hub = SubscriptionHub()
        self._cache: dict[str, Any] = {}
        self._all_loaded = False
        self._locks: dict[str, asyncio.Lock] = {}
        self._initial_reads: set[asyncio.Task] = set()

    def _lock_for(self, namespace: str) -> asyncio.Lock:
        lock = self._locks.get(namespace)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[namespace] = lock
        return lock

    # ── Reads ───────────────────────────────────────────────────────

    async def _load(self, namespace: str) -> Any:
        cached = self._cache.get(namespace, _ABSENT)
        if cached is not _ABSENT or self._all_loaded:
            return None if cached is _ABSENT else cached

        async with self._session_factory() as session:
            model = await session.get(StoreDocumentModel, namespace)
        data = model.data if model is not None else None
        self._cache[namespace] = data
        return data

    async def _load_all(self) -> None:
        if self._all_loaded:
            return
        async with self._session_factory() as session:
            result = await session.execute(select(StoreDocumentModel))
            for model in result.scalars().all():
                self._cache.setdefault(model.namespace, model.data)
        self._all_loaded = True

    def _snapshot(self, path: str) -> Any:
        segments = split_path(path)
        if not segments:
            root = {ns: data for ns, data in self._cache.items() if data is not None}
            return sorted_tree(root) or None
        return sorted_tree(get_in(self._cache.get(segments[0]), segments[1:]))

    async def read_tree(self, path: str) -> Any:
        segments = split_path(path)
        if segments:
            await self._load(segments[0])
        else:
            await self._load_all()
        return self._snapshot(path)

    def subscribe_tree(self, path: str, on_change: OnChange) -> Subscription:
        subscription = self._hub.add(path, on_change)

        async def _initial() -> None:
            try:
                snapshot = await self.read_tree(path)
            except Exception:
                logger.exception("Initial read of '%s' failed; delivering empty snapshot", path)
                snapshot = None
            self._hub.schedule(subscription, snapshot)

        task = asyncio.ensure_future(_initial())
        self._initial_reads.add(task)
        task.add_done_callback(self._initial_reads.discard)
        return subscription

    # ── Writes ──────────────────────────────────────────────────────

    async def write_field(self, path: str, value: Any) -> None:
        segments = split_path(path)
        if not segments:
            raise ValueError("Refusing to overwrite the store root")
        namespace, rest = segments[0], segments[1:]

        async with self._lock_for(namespace):
            try:
                data = await self._persist(namespace, rest, value)
            except SQLAlchemyError as exc:
                logger.error("Store write to '%s' failed: %s", path, exc)
                raise StoreWriteError(path, str(exc)) from exc
            self._cache[namespace] = data

        logger.debug("Wrote '%s'", path)
        self._hub.publish(path, self._snapshot)

    async def _persist(self, namespace: str, rest: list[str], value: Any) -> Any:
        async with self._session_factory() as session:
            model = await session.get(StoreDocumentModel, namespace)
            current = copy.deepcopy(model.data) if model is not None else None

            if rest:
                tree = current if isinstance(current, dict) else {}
                data = prune(set_in(tree, rest, value))
            else:
                data = prune(copy.deepcopy(value))

            if data is None:
                if model is not None:
                    await session.delete(model)
            elif model is None:
                session.add(StoreDocumentModel(namespace=namespace, data=data))
            else:
                # Reassign so the JSON column registers the change.
                model.data = data
                model.updated_at = datetime.now(timezone.utc)
            await session.commit()
        return data

    async def delete_record(self, path: str) -> None:
        await self.write_field(path, None)

    @property
    def subscription_count(self) -> int:
        return self._hub.subscription_count
