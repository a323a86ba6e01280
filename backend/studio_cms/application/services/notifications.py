"""Change notification helpers — alert formatting and fire-and-forget delivery.

Nothing here ever raises into the data path: ``deliver_safely`` logs and
swallows every sink failure, and ``notify_in_background`` does not make the
caller wait for delivery.
"""

import asyncio
import html
import logging
from datetime import datetime

from studio_cms.application.interfaces import ChangeNotifier

logger = logging.getLogger(__name__)

# Strong references so pending deliveries are not garbage-collected mid-flight.
_background_tasks: set[asyncio.Task] = set()


def _timestamp() -> str:
    return datetime.now().strftime("%m/%d/%Y, %I:%M:%S %p")


def format_admin_login_alert(email: str) -> str:
    return f"🔐 <b>Admin Login</b>\n\nEmail: {html.escape(email)}\nTime: {_timestamp()}"


def format_content_change_alert(section: str, action: str) -> str:
    return (
        f"✏️ <b>Content Update</b>\n\nSection: {html.escape(section)}\n"
        f"Action: {html.escape(action)}\nTime: {_timestamp()}"
    )


def format_contact_submission_alert(name: str, email: str, phone: str) -> str:
    return (
        f"📧 <b>New Contact Submission</b>\n\nName: {html.escape(name)}\n"
        f"Email: {html.escape(email)}\nPhone: {html.escape(phone)}\nTime: {_timestamp()}"
    )


def format_review_submission_alert(username: str, rating: int) -> str:
    return (
        f"⭐ <b>New Review</b>\n\nUser: {html.escape(username)}\n"
        f"Rating: {rating}/5\nTime: {_timestamp()}"
    )


async def deliver_safely(
    notifier: ChangeNotifier,
    text: str,
    *,
    section: str | None = None,
    action: str | None = None,
) -> bool:
    """Send through ``notifier``; returns False instead of raising on failure."""
    try:
        await notifier.send(text, section=section, action=action)
    except Exception as exc:
        logger.warning("Notification via %s failed: %s", notifier.sink_name, exc)
        return False
    return True


def notify_in_background(
    notifier: ChangeNotifier | None,
    text: str,
    *,
    section: str | None = None,
    action: str | None = None,
) -> asyncio.Task | None:
    """Schedule delivery without awaiting it. Must run inside an event loop."""
    if notifier is None:
        return None
    task = asyncio.ensure_future(deliver_safely(notifier, text, section=section, action=action))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


class CompositeNotifier(ChangeNotifier):
    """Fans one alert out to several sinks; a failing sink never affects the others."""

    def __init__(self, sinks: list[ChangeNotifier]):
        self._sinks = list(sinks)

    @property
    def sink_name(self) -> str:
        return "composite(" + ",".join(s.sink_name for s in self._sinks) + ")"

    @property
    def sinks(self) -> list[ChangeNotifier]:
        return list(self._sinks)

    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        for sink in self._sinks:
            await deliver_safely(sink, text, section=section, action=action)
