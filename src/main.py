"""SongPicker FastAPI application entry point.

Wires together the document store, catalog store, selection engine, and
routes via dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml`` and configures structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.document_store import IDocumentStore
from src.models.selection import SelectionAlgorithm
from src.providers.document_store.json_file_store import JSONFileDocumentStore
from src.providers.document_store.memory_store import MemoryDocumentStore
from src.services.catalog_query import DEFAULT_SUGGESTION_LIMIT
from src.services.catalog_store import CatalogStore
from src.services.selection_engine import SelectionEngine
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def build_document_store(app_settings: Settings) -> IDocumentStore:
    """Return the document store named by ``catalog_backend``."""
    backend = app_settings.catalog_backend.lower()
    if backend == "json":
        return JSONFileDocumentStore(app_settings.catalog_dir)
    if backend == "memory":
        return MemoryDocumentStore()
    raise ConfigurationError(
        f"Unknown catalog backend '{app_settings.catalog_backend}' (expected 'json' or 'memory')"
    )


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(
    app_settings: Settings,
    app_config: dict[str, Any] | None = None,
    document_store: IDocumentStore | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    app_config = app_config if app_config is not None else config
    documents = document_store or build_document_store(app_settings)
    try:
        default_algorithm = SelectionAlgorithm(app_settings.default_algorithm)
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown default algorithm '{app_settings.default_algorithm}'"
        ) from exc

    return {
        "document_store": documents,
        "catalog_store": CatalogStore(documents),
        "selection_engine": SelectionEngine(),
        "default_algorithm": default_algorithm,
        "suggestion_limit": app_config.get("suggestions", {}).get("limit", DEFAULT_SUGGESTION_LIMIT),
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    document_store: IDocumentStore | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to build providers from.  Uses module-level ``settings``
        if not provided.
    document_store:
        Pre-built store to use instead of the configured backend (tests).
    """
    s = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise all providers and services on startup."""
        components = _build_all(s, document_store=document_store)
        for key, value in components.items():
            setattr(application.state, key, value)

        # Missing collections are created empty rather than reported.
        await components["catalog_store"].initialize()

        _logger.info(
            "app_startup",
            version="0.1.0",
            environment=s.app_env,
            store=components["document_store"].get_provider_name(),
        )
        yield
        _logger.info("app_shutdown")

    application = FastAPI(
        title="SongPicker API",
        version="0.1.0",
        description=(
            "Register songs by title and artist, browse and search the catalog, "
            "and pick a song at random, per artist, or weighted by catalog size."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=s.cors_origins)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
