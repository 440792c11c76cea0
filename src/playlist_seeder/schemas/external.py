"""Pydantic schemas for Spotify Web API payloads."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpotifyTokenResponse(BaseModel):
    """Response from the client credentials token endpoint."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1, description="Bearer token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(ge=0, description="Lifetime in seconds")


class SpotifyImage(BaseModel):
    """An image reference. Spotify lists the largest image first."""

    model_config = ConfigDict(extra="ignore")

    url: str = Field(min_length=1, description="Image URL")
    width: int | None = Field(default=None, description="Width in pixels")
    height: int | None = Field(default=None, description="Height in pixels")


class SpotifyUser(BaseModel):
    """Public user object (playlist owner, playlist entry author)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Spotify user ID")
    display_name: str | None = Field(default=None, description="Display name")
    external_urls: dict[str, str] = Field(default_factory=dict, description="External URLs")

    @property
    def spotify_url(self) -> str | None:
        return self.external_urls.get("spotify")


class SpotifyArtist(BaseModel):
    """Artist object. Simplified artists (inside tracks) carry no popularity or genres."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="Spotify artist ID")
    name: str = Field(min_length=1, description="Artist name")
    external_urls: dict[str, str] = Field(default_factory=dict, description="External URLs")
    popularity: int | None = Field(default=None, description="Popularity 0-100")
    genres: list[str] | None = Field(default=None, description="Genre tags")

    @property
    def spotify_url(self) -> str | None:
        return self.external_urls.get("spotify")


class SpotifyAlbum(BaseModel):
    """Album object as embedded in a track or returned by /albums/{id}."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="Spotify album ID")
    name: str = Field(min_length=1, description="Album name")
    album_type: str = Field(default="album", description="album, single or compilation")
    total_tracks: int = Field(default=0, description="Number of tracks")
    release_date: str | None = Field(default=None, description="YYYY, YYYY-MM or YYYY-MM-DD")
    release_date_precision: str | None = Field(default=None, description="year, month or day")
    external_urls: dict[str, str] = Field(default_factory=dict, description="External URLs")
    images: list[SpotifyImage] = Field(default_factory=list, description="Cover images")
    artists: list[SpotifyArtist] = Field(default_factory=list, description="Album artists")

    @field_validator("images", mode="before")
    @classmethod
    def null_to_empty(cls, v: list[Any] | None) -> list[Any]:
        """Spotify occasionally sends null instead of an empty list."""
        return v or []

    @property
    def spotify_url(self) -> str | None:
        return self.external_urls.get("spotify")


class SpotifyExternalIds(BaseModel):
    """External identifiers attached to a track."""

    model_config = ConfigDict(extra="ignore")

    isrc: str | None = Field(default=None, description="International Standard Recording Code")


class SpotifyTrack(BaseModel):
    """Full track object as found in playlist items."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="Spotify track ID")
    name: str = Field(min_length=1, description="Track name")
    album: SpotifyAlbum = Field(description="Album the track belongs to")
    artists: list[SpotifyArtist] = Field(default_factory=list, description="Track artists")
    track_number: int = Field(default=1, description="Position on its disc")
    disc_number: int = Field(default=1, description="Disc number")
    duration_ms: int = Field(default=0, description="Duration in milliseconds")
    popularity: int | None = Field(default=None, description="Popularity 0-100")
    preview_url: str | None = Field(default=None, description="30 second preview URL")
    explicit: bool = Field(default=False, description="Explicit lyrics flag")
    external_urls: dict[str, str] = Field(default_factory=dict, description="External URLs")
    external_ids: SpotifyExternalIds | None = Field(default=None, description="External IDs")
    available_markets: list[str] | None = Field(default=None, description="ISO market codes")

    @property
    def spotify_url(self) -> str | None:
        return self.external_urls.get("spotify")

    @property
    def isrc(self) -> str | None:
        return self.external_ids.isrc if self.external_ids else None


class SpotifyPlaylistItem(BaseModel):
    """One entry of a playlist's track list.

    `track` is null for entries whose track was removed from Spotify.
    """

    model_config = ConfigDict(extra="ignore")

    added_at: datetime | None = Field(default=None, description="When the entry was added")
    added_by: SpotifyUser | None = Field(default=None, description="Who added the entry")
    is_local: bool = Field(default=False, description="Local file, not in the catalog")
    track: SpotifyTrack | None = Field(default=None, description="The track")

    @field_validator("added_at")
    @classmethod
    def to_naive_utc(cls, v: datetime | None) -> datetime | None:
        """Store timestamps as naive UTC like the rest of the schema."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class SpotifyPaging(BaseModel):
    """A page of a paginated collection. Items stay raw until processed one by one."""

    model_config = ConfigDict(extra="ignore")

    total: int = Field(ge=0, description="Total number of items in the collection")
    limit: int = Field(default=0, description="Requested page size")
    offset: int = Field(default=0, description="Offset of the first item")
    next: str | None = Field(default=None, description="URL of the next page")
    items: list[dict[str, Any]] = Field(default_factory=list, description="Raw items")


class SpotifyPlaylistTracksRef(BaseModel):
    """Track summary embedded in a playlist object."""

    model_config = ConfigDict(extra="ignore")

    total: int = Field(default=0, description="Number of entries in the playlist")


class SpotifyPlaylist(BaseModel):
    """Playlist metadata."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="Spotify playlist ID")
    name: str = Field(description="Playlist name")
    description: str | None = Field(default=None, description="Playlist description")
    owner: SpotifyUser = Field(description="Playlist owner")
    public: bool | None = Field(default=None, description="Public visibility")
    collaborative: bool = Field(default=False, description="Collaborative flag")
    external_urls: dict[str, str] = Field(default_factory=dict, description="External URLs")
    tracks: SpotifyPlaylistTracksRef = Field(
        default_factory=SpotifyPlaylistTracksRef, description="Track summary"
    )

    @property
    def spotify_url(self) -> str | None:
        return self.external_urls.get("spotify")
