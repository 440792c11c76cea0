"""Backfill covers for albums already in the catalog."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from pydantic import ValidationError
from sqlalchemy import Row, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.models import Album
from playlist_seeder.services.archiver import AssetArchiver
from playlist_seeder.services.base import APIError, AuthenticationError
from playlist_seeder.services.errors import AssetArchiveError
from playlist_seeder.services.spotify import SpotifyClient

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass
class BackfillSummary:
    total: int = 0
    processed: int = 0
    success: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def log(self) -> None:
        logger.info("ALBUM COVER BACKFILL SUMMARY")
        logger.info("=" * 50)
        logger.info(
            "Total albums: %d, processed: %d, success: %d, skipped: %d, failed: %d",
            self.total,
            self.processed,
            self.success,
            self.skipped,
            self.failed,
        )
        for index, error in enumerate(self.errors, start=1):
            logger.warning("%d. %s", index, error)


class CoverBackfill:
    """Walks every stored album and archives the cover of those without one.

    Album details are re-fetched from Spotify since covers are not kept on
    the album row. A token failure stops the run; everything else is counted
    per album.
    """

    def __init__(
        self,
        session: AsyncSession,
        spotify: SpotifyClient,
        archiver: AssetArchiver,
        delay: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.session = session
        self.spotify = spotify
        self.archiver = archiver
        self.delay = delay
        self._sleep = sleep

    async def run(self) -> BackfillSummary:
        summary = BackfillSummary()
        await self.archiver.ensure_container()

        # Plain rows: a failed cover commit rolls back and expires loaded entities
        result = await self.session.execute(
            select(Album.id, Album.spotify_id, Album.name).order_by(Album.name)
        )
        albums = list(result.all())
        summary.total = len(albums)
        if not albums:
            logger.info("No albums found in database")
            return summary

        logger.info("Processing %d albums (~%ds)", len(albums), int(len(albums) * self.delay))
        for index, album in enumerate(albums):
            logger.info(
                "Progress: %.1f%% (%d/%d) %s",
                (index + 1) / len(albums) * 100,
                index + 1,
                len(albums),
                album.name,
            )
            await self._process_album(album, summary)
            summary.processed += 1

            if index < len(albums) - 1:
                await self._sleep(self.delay)

        summary.log()
        return summary

    async def _process_album(self, album: Row, summary: BackfillSummary) -> None:
        """Archive one album's cover; any failure short of a token error is counted."""
        try:
            await self._archive_album(album, summary)
        except AuthenticationError:
            raise
        except (APIError, ValidationError, AssetArchiveError) as e:
            self._fail(album, summary, str(e))
        except SQLAlchemyError as e:
            await self.session.rollback()
            self._fail(album, summary, f"database error: {e}")

    async def _archive_album(self, album: Row, summary: BackfillSummary) -> None:
        if await self.archiver.has_cover(album.id):
            logger.info("  Album cover already exists, skipping")
            summary.skipped += 1
            return

        details = await self.spotify.get_album_or_none(album.spotify_id)
        if details is None:
            self._fail(album, summary, "not found on Spotify")
            return

        media = await self.archiver.archive_cover(details, album.id)
        if media is None:
            self._fail(album, summary, "no cover available")
        else:
            summary.success += 1

    @staticmethod
    def _fail(album: Row, summary: BackfillSummary, reason: str) -> None:
        summary.failed += 1
        summary.errors.append(f"Album {album.name}: {reason}")
        logger.error("  Failed to process album %s: %s", album.name, reason)
