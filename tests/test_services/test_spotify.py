"""Tests for the Spotify Web API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from samples import album_payload, item_payload, paging_payload, playlist_payload

from playlist_seeder.services.base import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    parse_retry_after,
)
from playlist_seeder.services.spotify import SpotifyClient


@pytest.fixture
def token_provider() -> MagicMock:
    provider = MagicMock()
    provider.get_token = AsyncMock(return_value="test-token")
    return provider


@pytest.fixture
def spotify_client(token_provider: MagicMock) -> SpotifyClient:
    """Create a Spotify client for testing."""
    return SpotifyClient(token_provider, base_url="https://api.example.com/v1")


@pytest.fixture
def mock_http(spotify_client: SpotifyClient):
    """Patch the client's HTTP layer; tests set `request.return_value`."""
    with patch.object(spotify_client, "_get_client") as mock_get_client:
        mock_client = AsyncMock()
        mock_get_client.return_value = mock_client
        yield mock_client


class TestSpotifyClientInit:
    """Tests for Spotify client initialization."""

    def test_base_url_from_settings(self, token_provider: MagicMock) -> None:
        """Test that the base URL falls back to settings."""
        with patch("playlist_seeder.services.spotify.get_settings") as mock:
            mock.return_value.spotify_base_url = "https://api.spotify.com/v1/"
            client = SpotifyClient(token_provider)

        assert client.base_url == "https://api.spotify.com/v1"

    def test_default_headers(self, spotify_client: SpotifyClient) -> None:
        """Test that default headers ask for JSON."""
        assert spotify_client.default_headers == {"Accept": "application/json"}


class TestAuthenticatedRequests:
    """Tests for bearer token handling."""

    async def test_bearer_token_is_sent(
        self, spotify_client: SpotifyClient, token_provider: MagicMock, mock_http: AsyncMock
    ) -> None:
        """Test that each request carries the provider's token."""
        mock_http.request.return_value = httpx.Response(200, json=playlist_payload())

        await spotify_client.get_playlist("pl1")

        token_provider.get_token.assert_awaited_once()
        call_kwargs = mock_http.request.call_args.kwargs
        assert call_kwargs["headers"]["Authorization"] == "Bearer test-token"
        assert call_kwargs["headers"]["Accept"] == "application/json"
        assert call_kwargs["url"] == "playlists/pl1"

    async def test_token_failure_skips_request(
        self, spotify_client: SpotifyClient, token_provider: MagicMock, mock_http: AsyncMock
    ) -> None:
        """Test that no request is made when no token can be obtained."""
        token_provider.get_token.side_effect = AuthenticationError("bad credentials")

        with pytest.raises(AuthenticationError):
            await spotify_client.get_playlist("pl1")

        mock_http.request.assert_not_called()

    async def test_rejected_token(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that a 401 response raises AuthenticationError."""
        mock_http.request.return_value = httpx.Response(401, text="token expired")

        with pytest.raises(AuthenticationError, match="token expired"):
            await spotify_client.get_playlist("pl1")


class TestRateLimiting:
    """Tests for 429 handling."""

    async def test_retry_after_seconds(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        mock_http.request.return_value = httpx.Response(429, headers={"Retry-After": "5"})

        with pytest.raises(RateLimitError) as exc_info:
            await spotify_client.get_playlist("pl1")

        assert exc_info.value.retry_after == 5

    async def test_retry_after_past_http_date(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that an HTTP-date header still raises RateLimitError."""
        mock_http.request.return_value = httpx.Response(
            429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            await spotify_client.get_playlist("pl1")

        assert exc_info.value.retry_after == 0

    @pytest.mark.parametrize("value", [None, "", "soon", "-3"])
    def test_unparseable_retry_after(self, value: str | None) -> None:
        assert parse_retry_after(value) is None


class TestGetPlaylist:
    """Tests for playlist metadata retrieval."""

    async def test_get_playlist_success(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test successful playlist retrieval."""
        mock_http.request.return_value = httpx.Response(200, json=playlist_payload(total=250))

        playlist = await spotify_client.get_playlist("pl1")

        assert playlist.id == "pl1"
        assert playlist.name == "Road Trip"
        assert playlist.owner.display_name == "Curator"
        assert playlist.tracks.total == 250
        assert playlist.spotify_url == "https://open.spotify.com/playlist/pl1"

    async def test_get_playlist_not_found(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that a missing playlist raises NotFoundError."""
        mock_http.request.return_value = httpx.Response(404, json={})

        with pytest.raises(NotFoundError):
            await spotify_client.get_playlist("missing")


class TestGetPlaylistTracks:
    """Tests for playlist page retrieval."""

    async def test_page_params(self, spotify_client: SpotifyClient, mock_http: AsyncMock) -> None:
        """Test that limit and offset are passed through."""
        items = [item_payload(None)]
        mock_http.request.return_value = httpx.Response(
            200, json=paging_payload(items, total=150, offset=100)
        )

        page = await spotify_client.get_playlist_tracks("pl1", limit=50, offset=100)

        assert page.total == 150
        assert page.items == items
        call_kwargs = mock_http.request.call_args.kwargs
        assert call_kwargs["url"] == "playlists/pl1/tracks"
        assert call_kwargs["params"] == {"limit": 50, "offset": 100}

    async def test_limit_is_capped(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that the page size never exceeds the API maximum."""
        mock_http.request.return_value = httpx.Response(200, json=paging_payload([], total=0))

        await spotify_client.get_playlist_tracks("pl1", limit=500)

        assert mock_http.request.call_args.kwargs["params"]["limit"] == 100

    async def test_server_error(self, spotify_client: SpotifyClient, mock_http: AsyncMock) -> None:
        """Test that a server error raises APIError with its status."""
        mock_http.request.return_value = httpx.Response(502, text="Bad Gateway")

        with pytest.raises(APIError) as exc_info:
            await spotify_client.get_playlist_tracks("pl1")

        assert exc_info.value.status_code == 502


class TestGetAlbum:
    """Tests for album retrieval."""

    async def test_get_album_success(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that album details include cover images."""
        mock_http.request.return_value = httpx.Response(200, json=album_payload("A", "Album A"))

        album = await spotify_client.get_album("A")

        assert album.name == "Album A"
        assert album.images[0].width == 640

    async def test_get_album_or_none_not_found(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that get_album_or_none returns None for missing albums."""
        mock_http.request.return_value = httpx.Response(404, json={})

        assert await spotify_client.get_album_or_none("missing") is None

    async def test_get_album_or_none_propagates_other_errors(
        self, spotify_client: SpotifyClient, mock_http: AsyncMock
    ) -> None:
        """Test that errors other than 404 still raise."""
        mock_http.request.return_value = httpx.Response(500, text="boom")

        with pytest.raises(APIError):
            await spotify_client.get_album_or_none("A")
