"""Album ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from playlist_seeder.database import Base, utcnow

if TYPE_CHECKING:
    from playlist_seeder.models.artist import AlbumArtist
    from playlist_seeder.models.media import Media
    from playlist_seeder.models.track import Track


class Album(Base):
    """Album imported from Spotify."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(primary_key=True)
    spotify_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    album_type: Mapped[str] = mapped_column(String(50))  # album, single, compilation
    total_tracks: Mapped[int] = mapped_column(default=0)
    # Kept as text: Spotify dates may be YYYY, YYYY-MM or YYYY-MM-DD
    release_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    release_date_precision: Mapped[str | None] = mapped_column(String(10), nullable=True)
    spotify_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    artist_credits: Mapped[list[AlbumArtist]] = relationship(
        back_populates="album", cascade="all, delete-orphan"
    )
    tracks: Mapped[list[Track]] = relationship(back_populates="album", cascade="all, delete-orphan")
    media: Mapped[list[Media]] = relationship(back_populates="album", cascade="all, delete-orphan")
