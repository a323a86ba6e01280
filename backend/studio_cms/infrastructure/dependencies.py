"""FastAPI dependency injection — wires infrastructure to the application layer.

Long-lived collaborators (store, editors, sessions, cooldowns) live in one
``ServiceContainer`` attached to ``app.state`` by the lifespan. Request
dependencies read from it, so tests can install a container built around an
in-memory store and fake sinks.
"""

import logging
import uuid

from fastapi import Depends, HTTPException, Request, Response, status

from studio_cms.config import Settings, get_settings
from studio_cms.application.interfaces import ChangeNotifier, CredentialService, RecordStore
from studio_cms.application.services import (
    ActivityLogNotifier,
    CompositeNotifier,
    ContentSeeder,
    EditorRegistry,
    FooterService,
    InboxService,
    LandingService,
    SessionContext,
    SessionRegistry,
    SSEManager,
    SubmissionService,
)
from studio_cms.infrastructure.auth import FirebaseCredentialService, StaticCredentialService
from studio_cms.infrastructure.store import InMemoryRecordStore, SQLAlchemyRecordStore
from studio_cms.infrastructure.telegram import TelegramNotifier

logger = logging.getLogger(__name__)

CLIENT_COOKIE = "studio_client"


def build_record_store(settings: Settings) -> RecordStore:
    if settings.store_backend == "memory":
        logger.warning("Using the in-memory store — content is lost on restart")
        return InMemoryRecordStore()
    if settings.store_backend != "sql":
        raise ValueError(f"Unknown store_backend '{settings.store_backend}'")

    from studio_cms.infrastructure.database import async_session_factory

    return SQLAlchemyRecordStore(async_session_factory)


def build_notifier(settings: Settings, store: RecordStore) -> ChangeNotifier:
    sinks: list[ChangeNotifier] = [
        TelegramNotifier(
            bot_token=settings.telegram_bot_token,
            chat_id=settings.telegram_chat_id,
            base_url=settings.telegram_api_base,
            timeout=settings.telegram_timeout,
        )
    ]
    if settings.activity_log_enabled:
        sinks.append(ActivityLogNotifier(store))
    return CompositeNotifier(sinks)


def build_credentials(settings: Settings) -> CredentialService:
    if settings.auth_backend == "firebase":
        return FirebaseCredentialService(
            api_key=settings.firebase_api_key,
            base_url=settings.identity_toolkit_base_url,
        )
    if settings.auth_backend != "static":
        raise ValueError(f"Unknown auth_backend '{settings.auth_backend}'")
    if not settings.admin_password_hash:
        logger.warning("ADMIN_PASSWORD_HASH is not configured; admin sign-in is disabled.")
    return StaticCredentialService(
        email=settings.admin_email,
        password_hash=settings.admin_password_hash,
        salt=settings.admin_password_salt,
    )


class ServiceContainer:
    """Every process-wide service, built around one store and one notifier."""

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        notifier: ChangeNotifier | None,
        credentials: CredentialService,
    ):
        self.settings = settings
        self.store = store
        self.notifier = notifier
        self.editors = EditorRegistry(store, notifier)
        self.sessions = SessionRegistry(credentials, notifier)
        self.submissions = SubmissionService(
            store, notifier, cooldown_seconds=settings.submission_cooldown_seconds
        )
        self.footer = FooterService(store, notifier)
        self.inbox = InboxService(store)
        self.landing = LandingService(store)
        self.sse = SSEManager(store)
        self.seeder = ContentSeeder(store)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ServiceContainer":
        settings = settings or get_settings()
        store = build_record_store(settings)
        return cls(settings, store, build_notifier(settings, store), build_credentials(settings))

    async def start(self, seed: bool = True) -> None:
        if seed:
            try:
                await self.seeder.seed_file(self.settings.seed_file)
            except Exception:
                logger.exception("Failed to seed default content — continuing without it")
        await self.editors.open()

    async def stop(self) -> None:
        await self.sse.shutdown()
        self.editors.close()


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service is starting")
    return container


def get_editor_registry(container: ServiceContainer = Depends(get_container)) -> EditorRegistry:
    return container.editors


def get_session_registry(container: ServiceContainer = Depends(get_container)) -> SessionRegistry:
    return container.sessions


def get_submission_service(container: ServiceContainer = Depends(get_container)) -> SubmissionService:
    return container.submissions


def get_footer_service(container: ServiceContainer = Depends(get_container)) -> FooterService:
    return container.footer


def get_inbox_service(container: ServiceContainer = Depends(get_container)) -> InboxService:
    return container.inbox


def get_landing_service(container: ServiceContainer = Depends(get_container)) -> LandingService:
    return container.landing


def get_sse_manager(container: ServiceContainer = Depends(get_container)) -> SSEManager:
    return container.sse


def get_session_token(request: Request) -> str | None:
    """Bearer token from the Authorization header, else the session cookie."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(get_settings().session_cookie_name)


def require_admin(
    token: str | None = Depends(get_session_token),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> SessionContext:
    context = sessions.get(token)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context


def get_client_id(request: Request, response: Response) -> str:
    """Stable per-browser id for submission cooldowns, issued as a cookie."""
    client_id = request.cookies.get(CLIENT_COOKIE)
    if not client_id:
        client_id = uuid.uuid4().hex
        response.set_cookie(CLIENT_COOKIE, client_id, httponly=True, samesite="lax")
    return client_id
