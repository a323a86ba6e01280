"""Editor registry — one live CollectionEditor per ordering domain."""

import asyncio
import logging
from collections.abc import Iterator

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.application.services.collection_editor import CollectionEditor
from studio_cms.application.services.reorder_coordinator import ReorderCoordinator
from studio_cms.domain.collections import ALL_SCHEMAS, CollectionSchema
from studio_cms.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class EditorRegistry:
    """Owns every editor for the application's lifetime.

    ``open()`` subscribes all editors and waits for their first snapshot;
    ``close()`` releases every subscription.
    """

    def __init__(
        self,
        store: RecordStore,
        notifier: ChangeNotifier | None = None,
        schemas: tuple[CollectionSchema, ...] = ALL_SCHEMAS,
    ):
        coordinator = ReorderCoordinator(store, notifier)
        self._editors = {
            schema.domain: CollectionEditor(schema, store, coordinator, notifier)
            for schema in schemas
        }

    async def open(self, timeout: float | None = 10.0) -> None:
        for editor in self._editors.values():
            editor.open()
        try:
            await asyncio.gather(*(e.wait_until_loaded(timeout) for e in self._editors.values()))
        except BaseException:
            self.close()
            raise
        logger.info("Opened %d collection editors", len(self._editors))

    def close(self) -> None:
        for editor in self._editors.values():
            editor.close()

    def get(self, domain: str) -> CollectionEditor:
        editor = self._editors.get(domain)
        if editor is None:
            raise EntityNotFoundError("Collection", domain)
        return editor

    @property
    def domains(self) -> list[str]:
        return list(self._editors)

    def __iter__(self) -> Iterator[CollectionEditor]:
        return iter(self._editors.values())
