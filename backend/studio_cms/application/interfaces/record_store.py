"""Abstract keyed record store (port) — a realtime key-path tree.

Contract consumed by the application layer:

* ``subscribe_tree`` delivers the whole subtree at a path after every change
  to it, its descendants or its ancestors, plus an initial snapshot shortly
  after subscribing. Delivery never completes on its own; call
  ``Subscription.unsubscribe()`` (or use it as a context manager).
* ``write_field`` is last-write-wins with no conflict detection.
* ``append_record`` allocates the key synchronously; awaiting the returned
  ``PendingWrite`` resolves once the record is durable.

Every subscriber of an overlapping path sees each write, the writer's own
subscriptions included.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator
from typing import Any

from studio_cms.domain.paths import join_path
from studio_cms.domain.push_keys import generate_push_key

logger = logging.getLogger(__name__)

OnChange = Callable[[Any], None]


class Subscription:
    """Handle for one live subscription. Unsubscribing is idempotent."""

    def __init__(self, path: str, on_change: OnChange, release: Callable[["Subscription"], None]):
        self.path = path
        self._on_change = on_change
        self._release = release
        self.active = True

    def deliver(self, snapshot: Any) -> None:
        if self.active:
            self._on_change(snapshot)

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._release(self)

    __call__ = unsubscribe

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class PendingWrite:
    """Result of ``append_record``: the key now, durability when awaited."""

    def __init__(self, key: str, path: str, task: "asyncio.Future[str]"):
        self.key = key
        self.path = path
        self._task = task
        task.add_done_callback(self._log_failure)

    def _log_failure(self, task: "asyncio.Future[str]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Append to '%s' failed: %s", self.path, exc)

    @property
    def done(self) -> bool:
        return self._task.done()

    def __await__(self) -> Generator[Any, None, str]:
        return self._task.__await__()


class RecordStore(ABC):
    """Port for the realtime keyed store — implemented in the infrastructure layer."""

    @abstractmethod
    def subscribe_tree(self, path: str, on_change: OnChange) -> Subscription:
        """Watch the subtree at ``path``; ``on_change`` receives a snapshot or ``None``."""
        ...

    @abstractmethod
    async def read_tree(self, path: str) -> Any:
        """One-shot read of the subtree at ``path`` (``None`` when absent)."""
        ...

    @abstractmethod
    async def write_field(self, path: str, value: Any) -> None:
        """Upsert ``value`` at ``path``. ``None`` removes the node.

        Raises:
            StoreWriteError: If the write could not be persisted.
        """
        ...

    @abstractmethod
    async def delete_record(self, path: str) -> None:
        """Remove the subtree at ``path``."""
        ...

    def append_record(self, path: str, fields: dict[str, Any]) -> PendingWrite:
        """Write ``fields`` under a freshly generated key below ``path``.

        Must be called from a running event loop.
        """
        key = generate_push_key()
        record_path = join_path(path, key)

        async def _write() -> str:
            await self.write_field(record_path, fields)
            return key

        task = asyncio.ensure_future(_write())
        return PendingWrite(key, record_path, task)
