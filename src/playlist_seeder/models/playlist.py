"""Playlist and playlist entry ORM models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from playlist_seeder.database import Base, utcnow

if TYPE_CHECKING:
    from playlist_seeder.models.track import Track


class Playlist(Base):
    """Playlist imported from Spotify."""

    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(primary_key=True)
    spotify_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[str] = mapped_column(String(255))
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    public: Mapped[bool | None] = mapped_column(nullable=True)
    collaborative: Mapped[bool] = mapped_column(default=False)
    total_tracks: Mapped[int] = mapped_column(default=0)  # Snapshot at import time
    spotify_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    entries: Mapped[list[PlaylistTrack]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistTrack.position",
    )


class PlaylistTrack(Base):
    """A track at a given position in a playlist.

    The same track may appear at several positions, so the position is part
    of the uniqueness key.
    """

    __tablename__ = "playlist_tracks"
    __table_args__ = (
        UniqueConstraint("playlist_id", "track_id", "position", name="uq_playlist_track_position"),
        CheckConstraint("position >= 1", name="ck_playlist_track_position_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), index=True
    )
    track_id: Mapped[int] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column()  # 1-based, source order
    added_at: Mapped[datetime | None] = mapped_column(nullable=True)
    added_by_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    added_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    playlist: Mapped[Playlist] = relationship(back_populates="entries")
    track: Mapped[Track] = relationship(back_populates="playlist_entries")
