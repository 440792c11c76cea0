"""Natural-key upserts of Spotify records into local entities."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.database import utcnow
from playlist_seeder.models import Album, Artist, Playlist, Track
from playlist_seeder.schemas.external import (
    SpotifyAlbum,
    SpotifyArtist,
    SpotifyPlaylist,
    SpotifyTrack,
)
from playlist_seeder.services.errors import InvalidRecordError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _record_label(data: Any) -> str:
    """Best-effort human readable name for a raw record."""
    if not isinstance(data, dict):
        return repr(data)
    if isinstance(data.get("track"), dict):
        data = data["track"]
    name = data.get("name") or "<unnamed>"
    return f"{name!r} ({data.get('id') or 'no id'})"


def parse_record(model: type[ModelT], data: Any) -> ModelT:
    """Validate a raw API record into its input struct.

    Raises:
        InvalidRecordError: Naming the record and every missing or invalid field.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidRecordError(_record_label(data), problems) from e


def join_values(values: list[str] | None) -> str | None:
    """Flatten a list of strings for storage; empty or missing lists become None."""
    if not values:
        return None
    return ",".join(values)


class EntityUpserter:
    """Creates or updates artists, albums, tracks and playlists by Spotify ID.

    On update every mutable field is overwritten with the incoming value and
    `updated_at` is stamped; `created_at` is never touched. Each call commits,
    so earlier records survive a later failure. Database errors propagate.
    """

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow) -> None:
        self.session = session
        self._clock = clock

    async def _find(self, model: type, spotify_id: str) -> Any:
        result = await self.session.execute(select(model).where(model.spotify_id == spotify_id))
        return result.scalar_one_or_none()

    async def _save(self, model: type, spotify_id: str, fields: dict[str, Any]) -> Any:
        entity = await self._find(model, spotify_id)
        if entity is None:
            now = self._clock()
            entity = model(spotify_id=spotify_id, created_at=now, updated_at=now, **fields)
            self.session.add(entity)
        else:
            for key, value in fields.items():
                setattr(entity, key, value)
            entity.updated_at = self._clock()
        await self.session.commit()
        return entity

    async def upsert_artist(self, data: SpotifyArtist) -> Artist:
        """Create or update an artist."""
        return await self._save(
            Artist,
            data.id,
            {
                "name": data.name,
                "spotify_url": data.spotify_url,
                "popularity": data.popularity,
                "genres": join_values(data.genres),
            },
        )

    async def upsert_album(self, data: SpotifyAlbum) -> Album:
        """Create or update an album."""
        return await self._save(
            Album,
            data.id,
            {
                "name": data.name,
                "album_type": data.album_type,
                "total_tracks": data.total_tracks,
                "release_date": data.release_date,
                "release_date_precision": data.release_date_precision,
                "spotify_url": data.spotify_url,
            },
        )

    async def upsert_track(self, data: SpotifyTrack, album_id: int) -> Track:
        """Create or update a track bound to the given local album."""
        return await self._save(
            Track,
            data.id,
            {
                "name": data.name,
                "album_id": album_id,
                "track_number": data.track_number,
                "disc_number": data.disc_number,
                "duration_ms": data.duration_ms,
                "popularity": data.popularity,
                "preview_url": data.preview_url,
                "spotify_url": data.spotify_url,
                "isrc": data.isrc,
                "explicit": data.explicit,
                "available_markets": join_values(data.available_markets),
            },
        )

    async def upsert_playlist(self, data: SpotifyPlaylist) -> Playlist:
        """Create or update a playlist, snapshotting its track total."""
        return await self._save(
            Playlist,
            data.id,
            {
                "name": data.name,
                "description": data.description,
                "owner_id": data.owner.id,
                "owner_name": data.owner.display_name,
                "owner_url": data.owner.spotify_url,
                "public": data.public,
                "collaborative": data.collaborative,
                "total_tracks": data.tracks.total,
                "spotify_url": data.spotify_url,
            },
        )

    async def find_track(self, spotify_id: str) -> Track | None:
        """Look up a stored track by its Spotify ID."""
        return await self._find(Track, spotify_id)
