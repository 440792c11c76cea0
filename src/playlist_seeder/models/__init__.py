"""SQLAlchemy ORM models."""

from playlist_seeder.models.album import Album
from playlist_seeder.models.artist import AlbumArtist, Artist
from playlist_seeder.models.media import Media
from playlist_seeder.models.playlist import Playlist, PlaylistTrack
from playlist_seeder.models.track import Track, TrackArtist

__all__ = [
    "Album",
    "AlbumArtist",
    "Artist",
    "Media",
    "Playlist",
    "PlaylistTrack",
    "Track",
    "TrackArtist",
]
