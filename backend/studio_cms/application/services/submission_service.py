"""Public submissions — contact messages and visitor reviews.

Each form has a client-side style cooldown keyed on the submitting client's
session id. It is advisory: a new session starts with no history.
"""

import logging
import time
from collections.abc import Callable

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.application.schemas.submission import ContactCreate, ReviewCreate
from studio_cms.application.services.notifications import (
    format_contact_submission_alert,
    format_review_submission_alert,
    notify_in_background,
)
from studio_cms.domain.collections import REVIEWS, clamp_rating
from studio_cms.domain.entities import now_ms
from studio_cms.domain.exceptions import CooldownActiveError

logger = logging.getLogger(__name__)

CONTACTS_PATH = "contacts"
DEFAULT_COOLDOWN_SECONDS = 60.0


class SubmissionCooldown:
    """Remembers the last successful submission per client."""

    def __init__(
        self,
        kind: str,
        seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.kind = kind
        self.seconds = seconds
        self._clock = clock
        self._last: dict[str, float] = {}

    def remaining(self, client_id: str) -> float:
        last = self._last.get(client_id)
        if last is None:
            return 0.0
        return max(0.0, self.seconds - (self._clock() - last))

    def check(self, client_id: str) -> None:
        remaining = self.remaining(client_id)
        if remaining > 0:
            raise CooldownActiveError(self.kind, remaining)

    def mark(self, client_id: str) -> None:
        self._last[client_id] = self._clock()


class SubmissionService:
    """Writes public form submissions straight to the store."""

    def __init__(
        self,
        store: RecordStore,
        notifier: ChangeNotifier | None = None,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._notifier = notifier
        self._contact_cooldown = SubmissionCooldown("message", cooldown_seconds, clock)
        self._review_cooldown = SubmissionCooldown("review", cooldown_seconds, clock)

    async def submit_contact(self, client_id: str, data: ContactCreate) -> str:
        """Store a contact message and alert the admin.

        Raises:
            CooldownActiveError: When this client submitted less than a cooldown ago.
            StoreWriteError: When the message could not be saved.
        """
        self._contact_cooldown.check(client_id)

        record = {
            "name": data.name.strip(),
            "email": str(data.email).strip(),
            "phone": data.phone.strip(),
            "description": data.description.strip(),
            "timestamp": now_ms(),
        }
        pending = self._store.append_record(CONTACTS_PATH, record)
        await pending

        self._contact_cooldown.mark(client_id)
        notify_in_background(
            self._notifier,
            format_contact_submission_alert(record["name"], record["email"], record["phone"]),
        )
        logger.info("Stored contact submission %s", pending.key)
        return pending.key

    async def submit_review(self, client_id: str, data: ReviewCreate) -> str:
        """Store a visitor review.

        The submission time doubles as its initial ``order`` so new reviews
        sort after every admin-ranked one until the next reorder.
        """
        self._review_cooldown.check(client_id)

        now = now_ms()
        rating = clamp_rating(data.rating)
        record = {
            "username": data.username.strip(),
            "rating": rating,
            "description": data.description.strip(),
            "order": now,
            "timestamp": now,
        }
        pending = self._store.append_record(REVIEWS.path, record)
        await pending

        self._review_cooldown.mark(client_id)
        notify_in_background(
            self._notifier,
            format_review_submission_alert(record["username"], rating),
        )
        logger.info("Stored review %s (rating %d)", pending.key, rating)
        return pending.key
