"""Track and track credits ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from playlist_seeder.database import Base, utcnow

if TYPE_CHECKING:
    from playlist_seeder.models.album import Album
    from playlist_seeder.models.artist import Artist
    from playlist_seeder.models.playlist import PlaylistTrack


class Track(Base):
    """Track imported from Spotify, bound to its album."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(primary_key=True)
    spotify_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    album_id: Mapped[int] = mapped_column(ForeignKey("albums.id", ondelete="CASCADE"), index=True)
    track_number: Mapped[int] = mapped_column(default=1)
    disc_number: Mapped[int] = mapped_column(default=1)
    duration_ms: Mapped[int] = mapped_column(default=0)
    popularity: Mapped[int | None] = mapped_column(nullable=True)
    preview_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    spotify_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    isrc: Mapped[str | None] = mapped_column(String(20), nullable=True)
    explicit: Mapped[bool] = mapped_column(default=False)
    available_markets: Mapped[str | None] = mapped_column(Text, nullable=True)  # Comma separated
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    album: Mapped[Album] = relationship(back_populates="tracks")
    artist_credits: Mapped[list[TrackArtist]] = relationship(
        back_populates="track", cascade="all, delete-orphan"
    )
    playlist_entries: Mapped[list[PlaylistTrack]] = relationship(
        back_populates="track", cascade="all, delete-orphan"
    )


class TrackArtist(Base):
    """Association between a track and an artist."""

    __tablename__ = "track_artists"
    __table_args__ = (UniqueConstraint("track_id", "artist_id", name="uq_track_artist"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    track_id: Mapped[int] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"), index=True)
    artist_id: Mapped[int] = mapped_column(ForeignKey("artists.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    track: Mapped[Track] = relationship(back_populates="artist_credits")
    artist: Mapped[Artist] = relationship(back_populates="track_credits")
