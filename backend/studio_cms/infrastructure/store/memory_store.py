"""Process-local realtime store — the whole tree lives in a dict."""

import logging
from typing import Any

from studio_cms.application.interfaces import RecordStore, Subscription
from studio_cms.application.interfaces.record_store import OnChange
from studio_cms.domain.paths import RawTree, get_in, prune, set_in, sorted_tree, split_path
from studio_cms.infrastructure.store.subscription_hub import SubscriptionHub

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """Implements the RecordStore port with an in-memory tree.

    Used by tests and by the ``memory`` store backend. Content is lost on
    restart.
    """

    def __init__(self, initial: RawTree | None = None) -> None:
        self._root: RawTree = prune(initial or {}) or {}
        self._hub = SubscriptionHub()

    def subscribe_tree(self, path: str, on_change: OnChange) -> Subscription:
        subscription = self._hub.add(path, on_change)
        self._hub.schedule(subscription, self._snapshot(path))
        return subscription

    async def read_tree(self, path: str) -> Any:
        return self._snapshot(path)

    async def write_field(self, path: str, value: Any) -> None:
        segments = split_path(path)
        if not segments:
            raise ValueError("Refusing to overwrite the store root")
        set_in(self._root, segments, value)
        logger.debug("Wrote '%s'", path)
        self._hub.publish(path, self._snapshot)

    async def delete_record(self, path: str) -> None:
        await self.write_field(path, None)

    def _snapshot(self, path: str) -> Any:
        return sorted_tree(get_in(self._root, split_path(path)))

    @property
    def subscription_count(self) -> int:
        return self._hub.subscription_count
