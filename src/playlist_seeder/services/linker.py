"""Idempotent many-to-many links between imported entities."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.database import utcnow
from playlist_seeder.models import AlbumArtist, PlaylistTrack, TrackArtist

logger = logging.getLogger(__name__)


class RelationLinker:
    """Upserts join rows keyed by their full composite key.

    Every link commits on its own: a failure part way through a set of
    artists leaves the links made before it in place.
    """

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow) -> None:
        self.session = session
        self._clock = clock

    async def link_album_artists(
        self, album_id: int, artist_ids: Iterable[int]
    ) -> list[AlbumArtist]:
        """Link an album to each artist, skipping pairs that already exist."""
        links = []
        for artist_id in dict.fromkeys(artist_ids):
            result = await self.session.execute(
                select(AlbumArtist).where(
                    AlbumArtist.album_id == album_id, AlbumArtist.artist_id == artist_id
                )
            )
            link = result.scalar_one_or_none()
            if link is None:
                link = AlbumArtist(album_id=album_id, artist_id=artist_id, created_at=self._clock())
                self.session.add(link)
                await self.session.commit()
            links.append(link)
        return links

    async def link_track_artists(
        self, track_id: int, artist_ids: Iterable[int]
    ) -> list[TrackArtist]:
        """Link a track to each artist, skipping pairs that already exist."""
        links = []
        for artist_id in dict.fromkeys(artist_ids):
            result = await self.session.execute(
                select(TrackArtist).where(
                    TrackArtist.track_id == track_id, TrackArtist.artist_id == artist_id
                )
            )
            link = result.scalar_one_or_none()
            if link is None:
                link = TrackArtist(track_id=track_id, artist_id=artist_id, created_at=self._clock())
                self.session.add(link)
                await self.session.commit()
            links.append(link)
        return links

    async def link_playlist_track(
        self,
        playlist_id: int,
        track_id: int,
        position: int,
        added_at: datetime | None = None,
        added_by_id: str | None = None,
        added_by_name: str | None = None,
    ) -> PlaylistTrack:
        """Place a track at a 1-based position, refreshing who added it and when."""
        if position < 1:
            raise ValueError(f"Playlist positions start at 1, got {position}")

        result = await self.session.execute(
            select(PlaylistTrack).where(
                PlaylistTrack.playlist_id == playlist_id,
                PlaylistTrack.track_id == track_id,
                PlaylistTrack.position == position,
            )
        )
        entry = result.scalar_one_or_none()
        now = self._clock()
        if entry is None:
            entry = PlaylistTrack(
                playlist_id=playlist_id,
                track_id=track_id,
                position=position,
                added_at=added_at,
                added_by_id=added_by_id,
                added_by_name=added_by_name,
                created_at=now,
                updated_at=now,
            )
            self.session.add(entry)
        else:
            entry.added_at = added_at
            entry.added_by_id = added_by_id
            entry.added_by_name = added_by_name
            entry.updated_at = now
        await self.session.commit()
        return entry
