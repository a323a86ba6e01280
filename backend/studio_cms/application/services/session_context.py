"""Session context — explicit, observable authentication state.

Replaces an ambient global "current user": every component that needs the
principal is handed a ``SessionContext`` and may subscribe to its changes.
A context starts in the loading state and leaves it on first resolution.
"""

import logging
import secrets
from collections.abc import Callable

from studio_cms.application.interfaces import ChangeNotifier, CredentialService, Subscription
from studio_cms.application.services.notifications import (
    format_admin_login_alert,
    notify_in_background,
)
from studio_cms.domain.entities import Principal
from studio_cms.domain.exceptions import CredentialError

logger = logging.getLogger(__name__)

SessionListener = Callable[["SessionContext"], None]


class SessionContext:
    """Holds the current principal (or its absence) for one client session."""

    def __init__(self, credentials: CredentialService, notifier: ChangeNotifier | None = None):
        self._credentials = credentials
        self._notifier = notifier
        self._principal: Principal | None = None
        self._loading = True
        self._subscriptions: list[Subscription] = []

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    def subscribe(self, listener: SessionListener) -> Subscription:
        """Call ``listener`` on every change; immediately too if already resolved."""
        subscription = Subscription("session", lambda _: listener(self), self._subscriptions.remove)
        self._subscriptions.append(subscription)
        if not self._loading:
            subscription.deliver(self)
        return subscription

    def resolve(self, principal: Principal | None) -> None:
        self._principal = principal
        self._loading = False
        for subscription in list(self._subscriptions):
            try:
                subscription.deliver(self)
            except Exception:
                logger.exception("Session listener raised")

    async def sign_in(self, identifier: str, secret: str) -> Principal:
        """Authenticate through the credential service.

        Raises:
            CredentialError: Generic failure; the context resolves to signed-out.
        """
        try:
            principal = await self._credentials.sign_in(identifier, secret)
        except CredentialError:
            logger.warning("Sign-in rejected by %s", self._credentials.provider_name)
            self.resolve(None)
            raise

        self.resolve(principal)
        notify_in_background(
            self._notifier,
            format_admin_login_alert(principal.email),
            section="Auth",
            action="Admin login",
        )
        return principal

    async def sign_out(self) -> None:
        principal = self._principal
        if principal is not None:
            await self._credentials.sign_out(principal)
        self.resolve(None)

    async def request_reset(self, identifier: str) -> None:
        await self._credentials.request_reset(identifier)


class SessionRegistry:
    """Issues opaque bearer tokens, one ``SessionContext`` per signed-in client."""

    def __init__(self, credentials: CredentialService, notifier: ChangeNotifier | None = None):
        self._credentials = credentials
        self._notifier = notifier
        self._sessions: dict[str, SessionContext] = {}

    def new_context(self) -> SessionContext:
        return SessionContext(self._credentials, self._notifier)

    async def sign_in(self, identifier: str, secret: str) -> tuple[str, SessionContext]:
        context = self.new_context()
        await context.sign_in(identifier, secret)
        token = secrets.token_urlsafe(32)
        self._sessions[token] = context
        return token, context

    def get(self, token: str | None) -> SessionContext | None:
        if not token:
            return None
        context = self._sessions.get(token)
        if context is None or not context.is_authenticated:
            return None
        return context

    async def sign_out(self, token: str) -> None:
        context = self._sessions.pop(token, None)
        if context is not None:
            await context.sign_out()

    async def request_reset(self, identifier: str) -> None:
        await self._credentials.request_reset(identifier)

    @property
    def active_count(self) -> int:
        return sum(1 for c in self._sessions.values() if c.is_authenticated)
