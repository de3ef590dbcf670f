"""Composition root: build a PopcornSession from AppConfig."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from popcorn.application.detail import WindowTitle
from popcorn.application.session import PopcornSession
from popcorn.domain.ports.watchlist_storage import WatchlistStoragePort
from popcorn.infrastructure.config.schema import AppConfig
from popcorn.infrastructure.omdb.client import HttpxOmdbClient
from popcorn.infrastructure.persistence.storage_factory import (
    create_watchlist_storage,
)

log = structlog.get_logger(__name__)


@asynccontextmanager
async def open_session(
    config: AppConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
    storage: WatchlistStoragePort | None = None,
) -> AsyncIterator[PopcornSession]:
    """Wire and yield a session; cancel fetches and close resources on exit.

    Order matters:
        1. Watchlist storage (loaded synchronously by the watchlist store)
        2. HTTP client (owned here unless injected)
        3. OMDb catalog client
        4. Session (selection, watchlist, search, detail, window title)

    Raises:
        ValueError: No OMDb API key configured.
    """
    if not config.omdb_api_key:
        raise ValueError(
            "omdb_api_key is not configured (set omdb.api_key or POPCORN_OMDB_API_KEY)"
        )

    # 1) Storage
    owns_storage = storage is None
    if storage is None:
        storage = create_watchlist_storage(
            config.storage_backend,
            path=config.storage_path,
            key=config.storage_key,
        )
    log.info("watchlist_storage_initialized", backend=type(storage).__name__)

    # 2) HTTP client
    owns_http = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.http_timeout_seconds),
            headers={"User-Agent": config.http_user_agent},
            follow_redirects=True,
        )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    try:
        # 3) Catalog
        catalog = HttpxOmdbClient(
            api_key=config.omdb_api_key,
            http_client=http_client,
            base_url=config.omdb_base_url,
        )

        # 4) Session
        session = PopcornSession(
            catalog=catalog,
            storage=storage,
            window_title=WindowTitle(
                default=config.default_window_title,
                detail_format=config.detail_title_format,
            ),
            min_query_length=config.min_query_length,
        )
        log.info(
            "session_initialized",
            app=config.app_name,
            environment=config.environment,
            watched=len(session.watched),
        )

        try:
            yield session
        finally:
            await session.aclose()
    finally:
        if owns_http:
            await http_client.aclose()
            log.info("http_client_closed")
        close = getattr(storage, "close", None)
        if owns_storage and callable(close):
            close()
