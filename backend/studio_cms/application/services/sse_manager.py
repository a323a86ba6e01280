"""SSE Manager — streams live snapshots of store subtrees to HTTP clients."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from studio_cms.application.interfaces import RecordStore
from studio_cms.domain.paths import join_path

logger = logging.getLogger(__name__)

# Paths a public client may watch. Contacts and the activity log stay private.
PUBLIC_STREAM_PATHS = frozenset(
    {"features", "services", "portfolio", "pricing", "pricing/monthly", "pricing/individual", "reviews", "footer"}
)


def format_sse(event_type: str, data: Any) -> str:
    return f"event: {event_type}\ndata: {json.dumps(data)}\n\n"


class SSEManager:
    """Bridges store subscriptions to Server-Sent-Event clients.

    Each connected client gets its own asyncio.Queue fed by a store
    subscription. Clients consume events via an async generator, and the
    subscription is released when the generator closes.
    """

    def __init__(self, store: RecordStore, max_queue: int = 100) -> None:
        self._store = store
        self._max_queue = max_queue
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self, path: str) -> AsyncGenerator[str, None]:
        """Yield a ``snapshot`` event for the current subtree and after every change.

        The generator automatically unsubscribes when the client disconnects.
        """
        path = join_path(path)
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._max_queue)

        def on_change(snapshot: Any) -> None:
            try:
                queue.put_nowait(format_sse("snapshot", {"path": path, "data": snapshot}))
            except asyncio.QueueFull:
                logger.warning("SSE client queue full on '%s' — disconnecting", path)
                subscription.unsubscribe()
                queue.get_nowait()
                queue.put_nowait(None)

        self._queues.append(queue)
        subscription = self._store.subscribe_tree(path, on_change)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            subscription.unsubscribe()
            self._queues.remove(queue)

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in self._queues:
            while not queue.empty():
                queue.get_nowait()
            queue.put_nowait(None)

    @property
    def client_count(self) -> int:
        return len(self._queues)
