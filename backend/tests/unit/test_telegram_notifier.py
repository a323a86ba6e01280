"""Unit tests for the Telegram notifier."""

import json

import httpx
import pytest

from studio_cms.domain.exceptions import NotificationError
from studio_cms.infrastructure.telegram import TelegramNotifier


def _client(status_code: int = 200, seen: list | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json={"ok": status_code == 200})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_posts_html_message_to_chat():
    seen: list[httpx.Request] = []
    notifier = TelegramNotifier("123:abc", "42", http_client=_client(seen=seen))

    await notifier.send("<b>Hello</b>")

    assert len(seen) == 1
    assert seen[0].url.path == "/bot123:abc/sendMessage"
    assert json.loads(seen[0].content) == {"chat_id": "42", "text": "<b>Hello</b>", "parse_mode": "HTML"}


@pytest.mark.asyncio
async def test_non_200_response_raises_notification_error():
    notifier = TelegramNotifier("123:abc", "42", http_client=_client(status_code=403))
    with pytest.raises(NotificationError):
        await notifier.send("hi")


@pytest.mark.asyncio
async def test_unconfigured_notifier_skips_without_request():
    seen: list[httpx.Request] = []
    notifier = TelegramNotifier("", "", http_client=_client(seen=seen))

    await notifier.send("hi")

    assert not notifier.configured
    assert seen == []
