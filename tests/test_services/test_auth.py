"""Tests for the client credentials token provider."""

import base64
from unittest.mock import patch

import httpx
import pytest

from playlist_seeder.config import ConfigurationError
from playlist_seeder.services.auth import TokenProvider
from playlist_seeder.services.base import AuthenticationError

TOKEN_URL = "https://accounts.example.com/api/token"


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def token_client(responses: list[httpx.Response], requests: list[httpx.Request]):
    """HTTP client answering token requests from a list of canned responses."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses[min(len(requests), len(responses)) - 1]

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_provider(http_client: httpx.AsyncClient, clock: FakeClock) -> TokenProvider:
    return TokenProvider(
        client_id="my-id",
        client_secret="my-secret",
        token_url=TOKEN_URL,
        http_client=http_client,
        clock=clock,
    )


class TestTokenProviderInit:
    """Tests for token provider initialization."""

    def test_missing_credentials_raise(self) -> None:
        """Test that missing credentials are reported before any request."""
        with patch("playlist_seeder.services.auth.get_settings") as mock:
            mock.return_value.spotify_client_id = ""
            mock.return_value.spotify_client_secret = ""
            mock.return_value.spotify_token_url = TOKEN_URL
            with pytest.raises(ConfigurationError) as exc_info:
                TokenProvider()

        assert exc_info.value.missing == ["SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"]

    def test_credentials_from_settings(self) -> None:
        """Test that credentials fall back to settings."""
        with patch("playlist_seeder.services.auth.get_settings") as mock:
            mock.return_value.spotify_client_id = "settings-id"
            mock.return_value.spotify_client_secret = "settings-secret"
            mock.return_value.spotify_token_url = TOKEN_URL
            provider = TokenProvider()

        assert provider.token_url == TOKEN_URL
        expected = base64.b64encode(b"settings-id:settings-secret").decode()
        assert provider.authorization_header == f"Basic {expected}"


class TestGetToken:
    """Tests for token exchange and caching."""

    async def test_exchange_sends_client_credentials(self, clock: FakeClock) -> None:
        """Test that the exchange posts the grant type with basic auth."""
        requests: list[httpx.Request] = []
        responses = [httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600})]
        provider = make_provider(token_client(responses, requests), clock)

        token = await provider.get_token()

        assert token == "tok-1"
        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == TOKEN_URL
        assert request.content == b"grant_type=client_credentials"
        expected = base64.b64encode(b"my-id:my-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"

    async def test_token_is_cached_until_expiry(self, clock: FakeClock) -> None:
        """Test that a valid token is reused without another request."""
        requests: list[httpx.Request] = []
        responses = [
            httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600}),
            httpx.Response(200, json={"access_token": "tok-2", "expires_in": 3600}),
        ]
        provider = make_provider(token_client(responses, requests), clock)

        assert await provider.get_token() == "tok-1"
        clock.now += 3599
        assert await provider.get_token() == "tok-1"
        assert len(requests) == 1

    async def test_expired_token_is_refreshed(self, clock: FakeClock) -> None:
        """Test that a new exchange happens once the expiry instant passes."""
        requests: list[httpx.Request] = []
        responses = [
            httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600}),
            httpx.Response(200, json={"access_token": "tok-2", "expires_in": 3600}),
        ]
        provider = make_provider(token_client(responses, requests), clock)

        assert await provider.get_token() == "tok-1"
        clock.now += 3600
        assert not provider.has_valid_token
        assert await provider.get_token() == "tok-2"
        assert len(requests) == 2

    async def test_invalidate_forces_exchange(self, clock: FakeClock) -> None:
        """Test that invalidate drops the cached token."""
        requests: list[httpx.Request] = []
        responses = [
            httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600}),
            httpx.Response(200, json={"access_token": "tok-2", "expires_in": 3600}),
        ]
        provider = make_provider(token_client(responses, requests), clock)

        await provider.get_token()
        provider.invalidate()

        assert await provider.get_token() == "tok-2"

    async def test_rejected_credentials(self, clock: FakeClock) -> None:
        """Test that a non-success status raises AuthenticationError."""
        requests: list[httpx.Request] = []
        responses = [httpx.Response(400, json={"error": "invalid_client"})]
        provider = make_provider(token_client(responses, requests), clock)

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.get_token()

        assert exc_info.value.status_code == 400
        assert "invalid_client" in str(exc_info.value)
        assert not provider.has_valid_token

    async def test_malformed_response(self, clock: FakeClock) -> None:
        """Test that a response without a token raises AuthenticationError."""
        requests: list[httpx.Request] = []
        responses = [httpx.Response(200, json={"token_type": "Bearer"})]
        provider = make_provider(token_client(responses, requests), clock)

        with pytest.raises(AuthenticationError, match="Malformed token response"):
            await provider.get_token()

    async def test_non_json_response(self, clock: FakeClock) -> None:
        """Test that a non-JSON body raises AuthenticationError."""
        requests: list[httpx.Request] = []
        responses = [httpx.Response(200, text="<html>oops</html>")]
        provider = make_provider(token_client(responses, requests), clock)

        with pytest.raises(AuthenticationError, match="Malformed token response"):
            await provider.get_token()

    async def test_network_error(self, clock: FakeClock) -> None:
        """Test that transport failures raise AuthenticationError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        provider = make_provider(client, clock)

        with pytest.raises(AuthenticationError, match="Token request failed") as exc_info:
            await provider.get_token()

        assert exc_info.value.status_code is None

    async def test_close_keeps_injected_client_open(self, clock: FakeClock) -> None:
        """Test that close leaves a caller-owned client alone."""
        client = token_client([], [])
        provider = make_provider(client, clock)

        await provider.close()

        assert not client.is_closed
        await client.aclose()
