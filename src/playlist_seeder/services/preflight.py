"""Readiness report: configuration and database contents."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.config import Settings
from playlist_seeder.models import (
    Album,
    AlbumArtist,
    Artist,
    Media,
    Playlist,
    PlaylistTrack,
    Track,
    TrackArtist,
)

logger = logging.getLogger(__name__)

COUNTED_MODELS = {
    "artists": Artist,
    "albums": Album,
    "tracks": Track,
    "playlists": Playlist,
    "album_artists": AlbumArtist,
    "track_artists": TrackArtist,
    "playlist_tracks": PlaylistTrack,
    "media": Media,
}


def mask(value: str, visible: int = 4) -> str:
    if not value:
        return "<missing>"
    return value[:visible] + "..." if len(value) > visible else "..."


async def catalog_counts(session: AsyncSession) -> dict[str, int]:
    """Row count per catalog table."""
    counts = {}
    for name, model in COUNTED_MODELS.items():
        result = await session.execute(select(func.count()).select_from(model))
        counts[name] = result.scalar_one()
    return counts


@dataclass
class PreflightReport:
    settings: dict[str, str] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    database_ok: bool = False
    database_error: str | None = None
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return not self.missing and self.database_ok

    def log(self) -> None:
        logger.info("Configuration:")
        for name, value in self.settings.items():
            logger.info("  %s: %s", name, value)
        if self.database_ok:
            logger.info("Database connection successful")
            for name, count in self.counts.items():
                logger.info("  %s: %d records", name, count)
        else:
            logger.error("Database check failed: %s", self.database_error)
        if self.missing:
            logger.error("Missing required settings: %s", ", ".join(self.missing))


async def run_preflight(settings: Settings, session: AsyncSession) -> PreflightReport:
    """Check settings and the database without touching the Spotify API."""
    report = PreflightReport(
        settings={
            "SPOTIFY_CLIENT_ID": mask(settings.spotify_client_id),
            "SPOTIFY_CLIENT_SECRET": mask(settings.spotify_client_secret),
            "SPOTIFY_PLAYLIST_ID": settings.spotify_playlist_id or "<missing>",
            "DATABASE_URL": settings.database_url.split("///")[-1] or "<missing>",
            "MEDIA_ROOT": settings.media_root,
        }
    )
    for name in ("spotify_client_id", "spotify_client_secret", "spotify_playlist_id"):
        if not getattr(settings, name):
            report.missing.append(name.upper())

    try:
        report.counts = await catalog_counts(session)
        report.database_ok = True
    except SQLAlchemyError as e:
        report.database_error = str(e)

    return report
