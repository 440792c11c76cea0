"""Pydantic schemas for the import and catalog endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImportAccepted(BaseModel):
    """Response when an import has been scheduled."""

    status: str = Field(default="accepted", description="Scheduling status")
    playlist_id: str = Field(description="Spotify playlist ID being imported")


class CatalogStats(BaseModel):
    """Row counts of the local catalog."""

    artists: int = Field(description="Number of artists")
    albums: int = Field(description="Number of albums")
    tracks: int = Field(description="Number of tracks")
    playlists: int = Field(description="Number of playlists")
    album_artists: int = Field(description="Album-artist links")
    track_artists: int = Field(description="Track-artist links")
    playlist_tracks: int = Field(description="Playlist entries")
    media: int = Field(description="Stored media records")


class MediaResponse(BaseModel):
    """A stored media record."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Media ID")
    album_id: int = Field(description="Album the media belongs to")
    type: str = Field(description="Media type, e.g. album_cover")
    filename: str = Field(description="Stored filename")
    url: str = Field(description="Content store URL")
    source_url: str | None = Field(default=None, description="Original Spotify image URL")
    width: int | None = Field(default=None, description="Width in pixels")
    height: int | None = Field(default=None, description="Height in pixels")
    file_size: int | None = Field(default=None, description="Size in bytes")
    mime_type: str | None = Field(default=None, description="MIME type")
    created_at: datetime = Field(description="When the media was stored")


class MediaListResponse(BaseModel):
    """Recent media records."""

    total: int = Field(description="Total number of media records")
    results: list[MediaResponse] = Field(default_factory=list, description="Media records")
