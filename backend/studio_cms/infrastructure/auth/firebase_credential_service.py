"""Firebase Identity Toolkit adapter — email/password sign-in over REST."""

import logging
from typing import Any

import httpx

from studio_cms.application.interfaces import CredentialService
from studio_cms.domain.entities import Principal
from studio_cms.domain.exceptions import CredentialError

logger = logging.getLogger(__name__)


class FirebaseCredentialService(CredentialService):
    """Infrastructure adapter — talks to ``identitytoolkit.googleapis.com``.

    Identity Toolkit ID tokens are stateless, so signing out only drops
    the local principal.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "firebase"

    async def _post(self, operation: str, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self._api_key:
            raise CredentialError(operation, "Firebase API key is not configured")

        url = f"{self._base_url}/{endpoint}"
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        try:
            response = await client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as exc:
            raise CredentialError(operation, f"Request failed: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            # Identity Toolkit reports EMAIL_NOT_FOUND / INVALID_PASSWORD etc.;
            # keep it in the log only.
            message = _error_message(response)
            logger.info("Identity Toolkit %s rejected: %s", endpoint, message)
            raise CredentialError(operation, message)
        return response.json()

    async def sign_in(self, identifier: str, secret: str) -> Principal:
        data = await self._post(
            "Sign in",
            "accounts:signInWithPassword",
            {"email": identifier, "password": secret, "returnSecureToken": True},
        )
        return Principal(
            uid=data.get("localId", ""),
            email=data.get("email", identifier),
            id_token=data.get("idToken"),
        )

    async def sign_out(self, principal: Principal) -> None:
        logger.debug("Signed out %s", principal.email)

    async def request_reset(self, identifier: str) -> None:
        await self._post(
            "Password reset",
            "accounts:sendOobCode",
            {"requestType": "PASSWORD_RESET", "email": identifier},
        )


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"
