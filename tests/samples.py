"""Builders for Spotify API payloads used across the tests."""

from typing import Any

from playlist_seeder.services.storage import ContentStore


def artist_payload(artist_id: str, name: str) -> dict[str, Any]:
    return {
        "id": artist_id,
        "name": name,
        "external_urls": {"spotify": f"https://open.spotify.com/artist/{artist_id}"},
    }


def album_payload(
    album_id: str,
    name: str,
    artists: list[dict[str, Any]] | None = None,
    images: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    if images is None:
        images = [
            {"url": f"https://i.scdn.co/image/{album_id}-640", "width": 640, "height": 640},
            {"url": f"https://i.scdn.co/image/{album_id}-300", "width": 300, "height": 300},
        ]
    return {
        "id": album_id,
        "name": name,
        "album_type": "album",
        "total_tracks": 10,
        "release_date": "1997-05-21",
        "release_date_precision": "day",
        "external_urls": {"spotify": f"https://open.spotify.com/album/{album_id}"},
        "images": images,
        "artists": artists or [],
    }


def track_payload(
    track_id: str,
    name: str,
    album: dict[str, Any],
    artists: list[dict[str, Any]],
    track_number: int = 1,
    isrc: str | None = "GBAYE0000001",
) -> dict[str, Any]:
    return {
        "id": track_id,
        "name": name,
        "album": album,
        "artists": artists,
        "track_number": track_number,
        "disc_number": 1,
        "duration_ms": 240000,
        "popularity": 70,
        "preview_url": None,
        "explicit": False,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "external_ids": {"isrc": isrc} if isrc else {},
        "available_markets": ["GB", "US"],
    }


def item_payload(
    track: dict[str, Any] | None,
    added_at: str = "2024-01-15T10:30:00Z",
    added_by: str = "curator",
) -> dict[str, Any]:
    return {
        "added_at": added_at,
        "added_by": {"id": added_by, "display_name": added_by.title()},
        "is_local": False,
        "track": track,
    }


def playlist_payload(playlist_id: str = "pl1", total: int = 3) -> dict[str, Any]:
    return {
        "id": playlist_id,
        "name": "Road Trip",
        "description": "Songs for the drive",
        "owner": {"id": "curator", "display_name": "Curator"},
        "public": True,
        "collaborative": False,
        "external_urls": {"spotify": f"https://open.spotify.com/playlist/{playlist_id}"},
        "tracks": {"total": total},
    }


def example_items() -> list[dict[str, Any]]:
    """Three entries: two by artist X on album A, one by artist Y on album B."""
    artist_x = artist_payload("X", "Artist X")
    artist_y = artist_payload("Y", "Artist Y")
    album_a = album_payload("A", "Album A", artists=[artist_x])
    album_b = album_payload("B", "Album B", artists=[artist_y])
    return [
        item_payload(track_payload("T1", "First", album_a, [artist_x], track_number=1)),
        item_payload(track_payload("T2", "Second", album_a, [artist_x], track_number=2)),
        item_payload(track_payload("T3", "Third", album_b, [artist_y])),
    ]


def paging_payload(items: list[dict[str, Any]], total: int, offset: int = 0) -> dict[str, Any]:
    return {"total": total, "limit": 100, "offset": offset, "next": None, "items": items}


class MemoryContentStore(ContentStore):
    """Content store keeping objects in a dict."""

    def __init__(self) -> None:
        self.containers: set[str] = set()
        self.objects: dict[tuple[str, str], bytes] = {}

    async def exists(self, container: str) -> bool:
        return container in self.containers

    async def create(self, container: str) -> None:
        self.containers.add(container)

    async def put(self, container: str, key: str, data: bytes, content_type: str) -> str:
        self.objects[(container, key)] = data
        return f"memory://{container}/{key}"
