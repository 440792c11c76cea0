"""Pydantic schemas for external payloads and API responses."""

from playlist_seeder.schemas.external import (
    SpotifyAlbum,
    SpotifyArtist,
    SpotifyImage,
    SpotifyPaging,
    SpotifyPlaylist,
    SpotifyPlaylistItem,
    SpotifyTokenResponse,
    SpotifyTrack,
    SpotifyUser,
)
from playlist_seeder.schemas.imports import (
    CatalogStats,
    ImportAccepted,
    MediaListResponse,
    MediaResponse,
)

__all__ = [
    # Spotify payloads
    "SpotifyAlbum",
    "SpotifyArtist",
    "SpotifyImage",
    "SpotifyPaging",
    "SpotifyPlaylist",
    "SpotifyPlaylistItem",
    "SpotifyTokenResponse",
    "SpotifyTrack",
    "SpotifyUser",
    # API responses
    "CatalogStats",
    "ImportAccepted",
    "MediaListResponse",
    "MediaResponse",
]
