"""Spotify Web API client service."""

from typing import Any

from playlist_seeder.config import get_settings
from playlist_seeder.schemas.external import SpotifyAlbum, SpotifyPaging, SpotifyPlaylist
from playlist_seeder.services.auth import TokenProvider
from playlist_seeder.services.base import BaseAPIClient, NotFoundError

# Spotify returns at most 100 playlist items per request
MAX_PAGE_SIZE = 100


class SpotifyClient(BaseAPIClient):
    """Client for the Spotify Web API.

    Every request carries a bearer token from the shared `TokenProvider`.
    Pacing between requests is left to the callers (see `PagedFetcher`).
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the Spotify client.

        Args:
            token_provider: Source of bearer tokens.
            base_url: Spotify Web API base URL. If not provided, uses settings.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self.token_provider = token_provider
        base = base_url or settings.spotify_base_url
        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated GET request.

        Raises:
            AuthenticationError: If no token can be obtained or it is rejected.
        """
        token = await self.token_provider.get_token()
        request_headers = {"Authorization": f"Bearer {token}"}
        if headers:
            request_headers.update(headers)
        return await super().get(endpoint, params=params, headers=request_headers)

    async def get_playlist(self, playlist_id: str) -> SpotifyPlaylist:
        """Get playlist metadata (name, owner, visibility, track total).

        Raises:
            NotFoundError: If the playlist does not exist or is private.
        """
        data = await self.get(f"/playlists/{playlist_id}")
        return SpotifyPlaylist.model_validate(data)

    async def get_playlist_tracks(
        self,
        playlist_id: str,
        limit: int = MAX_PAGE_SIZE,
        offset: int = 0,
    ) -> SpotifyPaging:
        """Get one page of a playlist's entries.

        Args:
            playlist_id: Spotify playlist ID.
            limit: Page size (capped at 100).
            offset: Index of the first entry.

        Returns:
            The page, with items left as raw dictionaries.
        """
        params: dict[str, Any] = {
            "limit": min(limit, MAX_PAGE_SIZE),
            "offset": offset,
        }
        data = await self.get(f"/playlists/{playlist_id}/tracks", params=params)
        return SpotifyPaging.model_validate(data)

    async def get_album(self, album_id: str) -> SpotifyAlbum:
        """Get full album details, including its cover images.

        Raises:
            NotFoundError: If the album is not found.
        """
        data = await self.get(f"/albums/{album_id}")
        return SpotifyAlbum.model_validate(data)

    async def get_album_or_none(self, album_id: str) -> SpotifyAlbum | None:
        """Get album details, returning None if not found."""
        try:
            return await self.get_album(album_id)
        except NotFoundError:
            return None
