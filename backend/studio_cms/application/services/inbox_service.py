"""Read-side of the append-only paths: contact submissions and the activity log."""

from studio_cms.application.interfaces import RecordStore
from studio_cms.application.services.activity_log_notifier import ACTIVITY_LOG_PATH
from studio_cms.application.services.submission_service import CONTACTS_PATH
from studio_cms.domain.entities import (
    ActivityLogEntry,
    ContactSubmission,
    activity_from_raw,
    contact_from_raw,
)
from studio_cms.domain.exceptions import ConfirmationRequiredError, EntityNotFoundError
from studio_cms.domain.paths import join_path, record_children


class InboxService:
    """Newest-first listings; contacts can be deleted, activity is read-only."""

    def __init__(self, store: RecordStore):
        self._store = store

    async def list_contacts(self) -> list[ContactSubmission]:
        raw = await self._store.read_tree(CONTACTS_PATH)
        contacts = [contact_from_raw(key, value) for key, value in record_children(raw)]
        return sorted(contacts, key=lambda c: c.timestamp, reverse=True)

    async def delete_contact(self, key: str, *, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError("Deleting a contact submission")
        existing = await self._store.read_tree(join_path(CONTACTS_PATH, key))
        if not isinstance(existing, dict):
            raise EntityNotFoundError("Contact", key)
        await self._store.delete_record(join_path(CONTACTS_PATH, key))

    async def list_activity(self, limit: int | None = None) -> list[ActivityLogEntry]:
        raw = await self._store.read_tree(ACTIVITY_LOG_PATH)
        entries = [activity_from_raw(key, value) for key, value in record_children(raw)]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries if limit is None else entries[:limit]
