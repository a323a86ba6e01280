"""Activity log sink — records every content change under ``activityLogs``."""

import logging

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.domain.entities import now_ms

logger = logging.getLogger(__name__)

ACTIVITY_LOG_PATH = "activityLogs"


class ActivityLogNotifier(ChangeNotifier):
    """Appends ``{action, section, timestamp}`` for structured alerts.

    Free-text alerts without a section/action pair are ignored.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    @property
    def sink_name(self) -> str:
        return "activity-log"

    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        if section is None or action is None:
            return
        pending = self._store.append_record(
            ACTIVITY_LOG_PATH,
            {"action": action, "section": section, "timestamp": now_ms()},
        )
        await pending
        logger.debug("Logged activity %s / %s as %s", section, action, pending.key)
