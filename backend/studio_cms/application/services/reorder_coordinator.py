"""Reorder coordinator — move one record and renumber its ordering domain.

The move itself is the pure ``compute_reorder``; the coordinator applies it
optimistically to a view, writes only the ``order`` fields that changed and
emits a single notification for the whole operation. Writes are not
transactional: a failure part-way leaves the store partly renumbered until
the next reorder. The view keeps the optimistic list for the whole
operation and only shows the store's order once every write's snapshot
has been delivered.
"""

import logging
from dataclasses import dataclass, field

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.application.services.notifications import (
    format_content_change_alert,
    notify_in_background,
)
from studio_cms.application.services.ordered_collection_view import OrderedCollectionView
from studio_cms.domain.entities import OrderedRecord
from studio_cms.domain.exceptions import InvalidReorderError, ReorderFailedError
from studio_cms.domain.paths import join_path
from studio_cms.infrastructure.logging.colored_logger import ContentLogger, ContentStage

logger = logging.getLogger(__name__)
plog = ContentLogger("ContentPipeline")


def compute_reorder(
    sequence: list[OrderedRecord], source_index: int, destination_index: int | None
) -> list[OrderedRecord] | None:
    """Move ``sequence[source_index]`` to ``destination_index`` and renumber 0..n-1.

    Returns ``None`` for a cancelled move (no destination). Every element gets
    ``order = position`` so gaps and duplicates left by earlier edits are
    closed. The input list is not modified.

    Raises:
        InvalidReorderError: If either index is outside the sequence.
    """
    if destination_index is None:
        return None

    size = len(sequence)
    if not (0 <= source_index < size and 0 <= destination_index < size):
        raise InvalidReorderError(source_index, destination_index, size)

    items = list(sequence)
    moved = items.pop(source_index)
    items.insert(destination_index, moved)
    return [record.with_order(position) for position, record in enumerate(items)]


def changed_orders(before: list[OrderedRecord], after: list[OrderedRecord]) -> dict[str, int]:
    """Map each key whose ``order`` differs between two lists to its new order."""
    previous = {record.key: record.order for record in before}
    return {
        record.key: int(record.order)
        for record in after
        if record.order is not None and previous.get(record.key) != record.order
    }


@dataclass
class ReorderResult:
    records: list[OrderedRecord]
    written_keys: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.written_keys)


class ReorderCoordinator:
    """Applies reorders against a RecordStore and reports them once."""

    def __init__(self, store: RecordStore, notifier: ChangeNotifier | None = None):
        self._store = store
        self._notifier = notifier

    async def reorder(
        self,
        view: OrderedCollectionView,
        source_index: int,
        destination_index: int | None,
        *,
        section: str,
        message: str,
    ) -> ReorderResult:
        """Move one record within ``view`` and persist the new order values.

        Raises:
            InvalidReorderError: Before any side effect, for bad indices.
            ReorderFailedError: When an ``order`` write is rejected; no retry.
        """
        current = view.records
        reordered = compute_reorder(current, source_index, destination_index)
        if reordered is None:
            logger.debug("Reorder of '%s' cancelled (no destination)", view.path)
            return ReorderResult(records=current, cancelled=True)

        changes = changed_orders(current, reordered)
        view.begin_reorder(reordered)

        written: list[str] = []
        try:
            with plog.timed_step(
                ContentStage.REORDER,
                f"{section}: {source_index}→{destination_index}",
                writes=len(changes),
            ):
                try:
                    for key, order in changes.items():
                        await self._store.write_field(join_path(view.path, key, "order"), order)
                        written.append(key)
                except Exception as exc:
                    raise ReorderFailedError(view.path, written, exc) from exc
        finally:
            view.end_reorder()

        notify_in_background(
            self._notifier,
            format_content_change_alert(section, message),
            section=section,
            action=message,
        )
        return ReorderResult(records=reordered, written_keys=written)
