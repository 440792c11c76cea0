"""Artist and album credits ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from playlist_seeder.database import Base, utcnow

if TYPE_CHECKING:
    from playlist_seeder.models.album import Album
    from playlist_seeder.models.track import TrackArtist


class Artist(Base):
    """Artist imported from Spotify, keyed by its Spotify ID."""

    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(primary_key=True)
    spotify_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    spotify_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    popularity: Mapped[int | None] = mapped_column(nullable=True)
    genres: Mapped[str | None] = mapped_column(Text, nullable=True)  # Comma separated
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    album_credits: Mapped[list[AlbumArtist]] = relationship(
        back_populates="artist", cascade="all, delete-orphan"
    )
    track_credits: Mapped[list[TrackArtist]] = relationship(
        back_populates="artist", cascade="all, delete-orphan"
    )


class AlbumArtist(Base):
    """Association between an album and an artist."""

    __tablename__ = "album_artists"
    __table_args__ = (UniqueConstraint("album_id", "artist_id", name="uq_album_artist"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    album_id: Mapped[int] = mapped_column(ForeignKey("albums.id", ondelete="CASCADE"), index=True)
    artist_id: Mapped[int] = mapped_column(ForeignKey("artists.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    album: Mapped[Album] = relationship(back_populates="artist_credits")
    artist: Mapped[Artist] = relationship(back_populates="album_credits")
