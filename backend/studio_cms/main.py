"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studio_cms.config import Settings, get_settings
from studio_cms.infrastructure.dependencies import ServiceContainer
from studio_cms.infrastructure.logging.log_config import setup_logging
from studio_cms.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _create_tables(settings: Settings) -> None:
    """Create the store table, and the SQLite data directory when needed."""
    from studio_cms.infrastructure.database import Base, engine

    if settings.database_url.startswith("sqlite:///"):
        db_path = Path(settings.database_url.removeprefix("sqlite:///"))
        db_path.parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed content, open editors."""
    settings = get_settings()
    setup_logging()

    # 1. Create the backing table for the SQL store
    if settings.store_backend == "sql":
        await _create_tables(settings)

    # 2. Build services unless a container was installed up front
    container = getattr(app.state, "container", None)
    if container is None:
        container = ServiceContainer.from_settings(settings)
        app.state.container = container

    # 3. Seed empty namespaces and open every collection editor
    await container.start()
    logger.info("Studio CMS ready (%s store, %s auth)", settings.store_backend, settings.auth_backend)

    yield

    # Shutdown
    await container.stop()


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studio_cms.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
