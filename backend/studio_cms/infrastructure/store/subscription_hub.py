"""In-process fan-out of store change notifications."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from studio_cms.application.interfaces.record_store import OnChange, Subscription
from studio_cms.domain.paths import paths_overlap

logger = logging.getLogger(__name__)


class SubscriptionHub:
    """Tracks live subscriptions and schedules snapshot delivery.

    Deliveries are queued on the running event loop with ``call_soon`` so a
    writer never re-enters its own listeners mid-write. Without a running
    loop they are delivered inline.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def add(self, path: str, on_change: OnChange) -> Subscription:
        subscription = Subscription(path, on_change, self._remove)
        self._subscriptions.append(subscription)
        logger.debug("Subscribed to '%s' (%d active)", path, len(self._subscriptions))
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return
        logger.debug("Unsubscribed from '%s' (%d active)", subscription.path, len(self._subscriptions))

    def publish(self, changed_path: str, snapshot_for: Callable[[str], Any]) -> int:
        """Notify every subscription overlapping ``changed_path``.

        Returns the number of deliveries scheduled.
        """
        targets = [s for s in self._subscriptions if paths_overlap(s.path, changed_path)]
        for subscription in targets:
            self.schedule(subscription, snapshot_for(subscription.path))
        return len(targets)

    def schedule(self, subscription: Subscription, snapshot: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._dispatch(subscription, snapshot)
            return
        loop.call_soon(self._dispatch, subscription, snapshot)

    @staticmethod
    def _dispatch(subscription: Subscription, snapshot: Any) -> None:
        try:
            subscription.deliver(snapshot)
        except Exception:
            logger.exception("Subscriber of '%s' raised while handling a snapshot", subscription.path)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)
