"""Telegram Bot API adapter — implements the ChangeNotifier interface.

Alerts are sent with ``sendMessage`` and ``parse_mode=HTML``. Callers go
through ``deliver_safely`` so a Telegram outage never reaches the data path.
"""

import logging

import httpx

from studio_cms.application.interfaces import ChangeNotifier
from studio_cms.domain.exceptions import NotificationError

logger = logging.getLogger(__name__)


class TelegramNotifier(ChangeNotifier):
    """Infrastructure adapter — posts alerts to one Telegram chat."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._bot_token = bot_token.strip()
        self._chat_id = chat_id.strip()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def sink_name(self) -> str:
        return "telegram"

    @property
    def configured(self) -> bool:
        return bool(self._bot_token and self._chat_id)

    def _get_client(self) -> tuple[httpx.AsyncClient, bool]:
        """Return the injected client, or a fresh one the caller must close."""
        if self._http_client is not None:
            return self._http_client, False
        return httpx.AsyncClient(timeout=self._timeout), True

    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        if not self.configured:
            logger.debug("Telegram not configured — skipping alert")
            return

        url = f"{self._base_url}/bot{self._bot_token}/sendMessage"
        payload = {"chat_id": self._chat_id, "text": text, "parse_mode": "HTML"}

        client, should_close = self._get_client()
        try:
            response = await client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(self.sink_name, f"Request failed: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            raise NotificationError(
                self.sink_name,
                f"Telegram API returned {response.status_code}: {response.text[:200]}",
            )
        logger.debug("Telegram alert delivered")
