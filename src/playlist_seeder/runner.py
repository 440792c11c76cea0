"""Wires clients, stores and services together for a single run."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from playlist_seeder.config import Settings, get_settings
from playlist_seeder.database import async_session
from playlist_seeder.services.archiver import AssetArchiver
from playlist_seeder.services.auth import TokenProvider
from playlist_seeder.services.covers import BackfillSummary, CoverBackfill
from playlist_seeder.services.importer import ImportSummary, PlaylistImporter
from playlist_seeder.services.linker import RelationLinker
from playlist_seeder.services.pagination import PagedFetcher
from playlist_seeder.services.preflight import PreflightReport, run_preflight
from playlist_seeder.services.spotify import SpotifyClient
from playlist_seeder.services.storage import LocalContentStore
from playlist_seeder.services.upserter import EntityUpserter

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass
class RunContext:
    """Everything one run needs, built once and passed down explicitly."""

    settings: Settings
    session: AsyncSession
    spotify: SpotifyClient
    archiver: AssetArchiver


@asynccontextmanager
async def session_factory_for(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield the session factory for `settings.database_url`.

    An explicit factory wins. The application engine is reused when the URL
    matches it; any other URL gets its own engine, disposed on exit.
    """
    if session_factory is not None:
        yield session_factory
        return
    if settings.database_url == get_settings().database_url:
        yield async_session
        return

    logger.info("Using database %s", settings.database_url)
    run_engine = create_async_engine(settings.database_url, echo=settings.debug)
    try:
        yield async_sessionmaker(run_engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await run_engine.dispose()


@asynccontextmanager
async def run_context(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[RunContext]:
    """Open the session and HTTP clients for a run and close them afterwards."""
    token_provider = TokenProvider(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
        token_url=settings.spotify_token_url,
    )
    spotify = SpotifyClient(token_provider, base_url=settings.spotify_base_url)
    store = LocalContentStore(settings.media_root, settings.media_base_url)

    async with (
        session_factory_for(settings, session_factory) as factory,
        factory() as session,
        httpx.AsyncClient(timeout=30.0, follow_redirects=True) as download_client,
    ):
        archiver = AssetArchiver(session, store, settings.media_container, download_client)
        try:
            yield RunContext(settings, session, spotify, archiver)
        finally:
            await spotify.close()
            await token_provider.close()


async def run_import(
    playlist_id: str | None = None,
    settings: Settings | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> ImportSummary:
    """Import a playlist (the configured one unless given).

    Raises:
        ConfigurationError: Before any network call, if required settings are missing.
        ImportAbortedError: On a fatal authentication or fetch failure.
    """
    settings = settings or get_settings()
    playlist = settings.require_import_config(playlist_id)

    async with run_context(settings, session_factory) as ctx:
        fetcher = PagedFetcher(
            ctx.spotify.get_playlist_tracks,
            page_size=settings.page_size,
            delay=settings.request_delay,
            sleep=sleep,
        )
        importer = PlaylistImporter(
            spotify=ctx.spotify,
            fetcher=fetcher,
            upserter=EntityUpserter(ctx.session),
            linker=RelationLinker(ctx.session),
            archiver=ctx.archiver,
            record_delay=settings.request_delay,
            sleep=sleep,
        )
        return await importer.run(playlist)


async def run_cover_backfill(
    settings: Settings | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> BackfillSummary:
    """Archive covers for stored albums that have none."""
    settings = settings or get_settings()
    settings.require_credentials()

    async with run_context(settings, session_factory) as ctx:
        backfill = CoverBackfill(
            ctx.session, ctx.spotify, ctx.archiver, delay=settings.request_delay, sleep=sleep
        )
        return await backfill.run()


async def run_check(
    settings: Settings | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> PreflightReport:
    """Report configuration and database readiness."""
    settings = settings or get_settings()
    async with (
        session_factory_for(settings, session_factory) as factory,
        factory() as session,
    ):
        return await run_preflight(settings, session)
