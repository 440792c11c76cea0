"""Playlist import orchestration."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, NoReturn

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.schemas.external import SpotifyPlaylistItem, SpotifyTrack
from playlist_seeder.services.archiver import AssetArchiver
from playlist_seeder.services.base import APIError
from playlist_seeder.services.errors import (
    AssetArchiveError,
    ImportAbortedError,
    InvalidRecordError,
)
from playlist_seeder.services.linker import RelationLinker
from playlist_seeder.services.pagination import PagedFetcher
from playlist_seeder.services.spotify import SpotifyClient
from playlist_seeder.services.upserter import EntityUpserter, parse_record

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

# Log overall progress every this many records
PROGRESS_EVERY = 100


class ImportState(StrEnum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    FETCHING = "fetching"
    PROCESSING_RECORDS = "processing_records"
    LINKING_PLAYLIST = "linking_playlist"
    SUMMARIZING = "summarizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class ImportSummary:
    """Outcome of one import run."""

    playlist_spotify_id: str
    playlist_name: str | None = None
    playlist_id: int | None = None
    attempted: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    artist_ids: set[str] = field(default_factory=set)
    album_ids: set[str] = field(default_factory=set)
    track_ids: set[str] = field(default_factory=set)
    covers_archived: int = 0
    covers_failed: int = 0
    playlist_links: int = 0
    errors: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def artists(self) -> int:
        return len(self.artist_ids)

    @property
    def albums(self) -> int:
        return len(self.album_ids)

    @property
    def tracks(self) -> int:
        return len(self.track_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            "playlist_spotify_id": self.playlist_spotify_id,
            "playlist_name": self.playlist_name,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "skipped": self.skipped,
            "failed": self.failed,
            "artists": self.artists,
            "albums": self.albums,
            "tracks": self.tracks,
            "covers_archived": self.covers_archived,
            "covers_failed": self.covers_failed,
            "playlist_links": self.playlist_links,
            "errors": list(self.errors),
            "elapsed_seconds": round(self.elapsed_seconds, 1),
        }

    def log(self) -> None:
        """Write the final report to the log."""
        logger.info("IMPORT SUMMARY")
        logger.info("=" * 50)
        logger.info("Playlist: %s (%s)", self.playlist_name, self.playlist_spotify_id)
        logger.info(
            "Records: %d attempted, %d succeeded, %d skipped, %d failed",
            self.attempted,
            self.succeeded,
            self.skipped,
            self.failed,
        )
        logger.info("Artists: %d, albums: %d, tracks: %d", self.artists, self.albums, self.tracks)
        logger.info(
            "Covers archived: %d, failed: %d; playlist entries linked: %d",
            self.covers_archived,
            self.covers_failed,
            self.playlist_links,
        )
        if self.errors:
            logger.warning("ERRORS ENCOUNTERED (%d):", len(self.errors))
            for index, error in enumerate(self.errors, start=1):
                logger.warning("%d. %s", index, error)
        logger.info("Total processing time: %.1f seconds", self.elapsed_seconds)


class PlaylistImporter:
    """Imports one playlist: its tracks, albums, artists, covers and entries.

    Records are processed strictly in source order, one at a time, with a
    fixed delay between them. Authentication and fetch failures abort the run;
    anything that goes wrong with a single record is logged, counted and
    skipped.
    """

    def __init__(
        self,
        spotify: SpotifyClient,
        fetcher: PagedFetcher,
        upserter: EntityUpserter,
        linker: RelationLinker,
        archiver: AssetArchiver,
        record_delay: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.spotify = spotify
        self.fetcher = fetcher
        self.upserter = upserter
        self.linker = linker
        self.archiver = archiver
        self.record_delay = record_delay
        self._sleep = sleep
        self.state = ImportState.IDLE

    @property
    def session(self) -> AsyncSession:
        return self.upserter.session

    async def run(self, playlist_id: str) -> ImportSummary:
        """Run the import.

        Raises:
            ImportAbortedError: On authentication, fetch or playlist store failure.
        """
        started = time.monotonic()
        summary = ImportSummary(playlist_spotify_id=playlist_id)
        logger.info("Starting import of playlist %s", playlist_id)

        self.state = ImportState.AUTHENTICATING
        try:
            await self.spotify.token_provider.get_token()
        except APIError as e:
            self._abort(e)

        self.state = ImportState.FETCHING
        try:
            playlist_data = await self.spotify.get_playlist(playlist_id)
            logger.info(
                "Playlist: %r by %s, %d tracks",
                playlist_data.name,
                playlist_data.owner.display_name or playlist_data.owner.id,
                playlist_data.tracks.total,
            )
            items = await self.fetcher.fetch_all(playlist_id)
        except (APIError, ValidationError) as e:
            self._abort(e)

        await self._prepare_store()

        try:
            playlist = await self.upserter.upsert_playlist(playlist_data)
        except SQLAlchemyError as e:
            await self.session.rollback()
            self._abort(e)
        summary.playlist_name = playlist.name
        summary.playlist_id = playlist.id

        self.state = ImportState.PROCESSING_RECORDS
        track_ids = await self._process_records(items, summary)

        self.state = ImportState.LINKING_PLAYLIST
        await self._link_playlist(summary.playlist_id, items, track_ids, summary)

        self.state = ImportState.SUMMARIZING
        summary.elapsed_seconds = time.monotonic() - started
        summary.log()

        self.state = ImportState.DONE
        return summary

    def _abort(self, error: Exception) -> NoReturn:
        stage = self.state.value
        self.state = ImportState.ABORTED
        logger.error("Import aborted during %s: %s", stage, error)
        raise ImportAbortedError(stage, error) from error

    async def _prepare_store(self) -> None:
        try:
            await self.archiver.ensure_container()
        except (OSError, ValueError) as e:
            logger.warning("Could not prepare content store, covers will fail: %s", e)

    async def _process_records(
        self, items: list[dict[str, Any]], summary: ImportSummary
    ) -> dict[str, int]:
        """Upsert every record. Returns local track ids keyed by Spotify track id."""
        total = len(items)
        seen_albums: set[str] = set()
        track_ids: dict[str, int] = {}
        logger.info("Processing %d records", total)

        for index, raw in enumerate(items):
            if index % PROGRESS_EVERY == 0 or index == total - 1:
                logger.info(
                    "Progress: %.1f%% (%d/%d)", (index + 1) / total * 100, index + 1, total
                )

            summary.attempted += 1
            try:
                track = parse_record(SpotifyPlaylistItem, raw).track
                if track is None:
                    summary.skipped += 1
                    logger.info("Record %d/%d has no track, skipping", index + 1, total)
                else:
                    logger.info("Processing track %d/%d: %s", index + 1, total, track.name)
                    track_ids[track.id] = await self._process_track(track, seen_albums, summary)
                    summary.succeeded += 1
            except (InvalidRecordError, SQLAlchemyError) as e:
                await self.session.rollback()
                summary.failed += 1
                message = f"Record {index + 1} {_describe(raw)}: {e}"
                summary.errors.append(message)
                logger.error("Failed to import %s", message)

            if index < total - 1:
                await self._sleep(self.record_delay)

        return track_ids

    async def _process_track(
        self, track: SpotifyTrack, seen_albums: set[str], summary: ImportSummary
    ) -> int:

        artist_ids = []
        for artist_data in track.artists:
            artist = await self.upserter.upsert_artist(artist_data)
            artist_ids.append(artist.id)
            summary.artist_ids.add(artist_data.id)

        album = await self.upserter.upsert_album(track.album)
        album_id = album.id
        summary.album_ids.add(track.album.id)
        logger.info("  Album: %s", album.name)

        if track.album.id in seen_albums:
            logger.debug("  Album cover already handled in this run")
        else:
            seen_albums.add(track.album.id)
            try:
                if await self.archiver.archive_cover(track.album, album_id) is not None:
                    summary.covers_archived += 1
            except AssetArchiveError as e:
                summary.covers_failed += 1
                summary.errors.append(str(e))
                logger.warning("  %s", e)

        await self.linker.link_album_artists(album_id, artist_ids)

        stored = await self.upserter.upsert_track(track, album_id)
        summary.track_ids.add(track.id)
        logger.info("  Track: %s", stored.name)

        await self.linker.link_track_artists(stored.id, artist_ids)
        return stored.id

    async def _link_playlist(
        self,
        playlist_id: int,
        items: list[dict[str, Any]],
        track_ids: dict[str, int],
        summary: ImportSummary,
    ) -> None:
        logger.info("Creating playlist-track relationships")
        for position, raw in enumerate(items, start=1):
            try:
                item = parse_record(SpotifyPlaylistItem, raw)
            except InvalidRecordError:
                # Already reported while processing records
                continue
            if item.track is None:
                continue

            try:
                track_id = track_ids.get(item.track.id)
                if track_id is None:
                    stored = await self.upserter.find_track(item.track.id)
                    if stored is None:
                        continue
                    track_id = stored.id
                await self.linker.link_playlist_track(
                    playlist_id,
                    track_id,
                    position,
                    added_at=item.added_at,
                    added_by_id=item.added_by.id if item.added_by else None,
                    added_by_name=item.added_by.display_name if item.added_by else None,
                )
                summary.playlist_links += 1
            except SQLAlchemyError as e:
                await self.session.rollback()
                message = f"Playlist entry {position} ({item.track.name!r}): {e}"
                summary.errors.append(message)
                logger.error("Failed to link %s", message)


def _describe(raw: Any) -> str:
    track = raw.get("track") if isinstance(raw, dict) else None
    if isinstance(track, dict):
        return f"{track.get('name')!r} ({track.get('id')})"
    return "(no track data)"
