"""Client credentials token provider for the Spotify Web API."""

import base64
import logging
import time
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from playlist_seeder.config import ConfigurationError, get_settings
from playlist_seeder.schemas.external import SpotifyTokenResponse
from playlist_seeder.services.base import AuthenticationError

logger = logging.getLogger(__name__)


class TokenProvider:
    """Obtains and caches a bearer token using the client credentials grant.

    The token is reused until its absolute expiry passes; then the next call
    exchanges the client id and secret for a new one. There is no retry here:
    an `AuthenticationError` goes straight back to the caller.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the token provider.

        Args:
            client_id: Spotify client ID. If not provided, uses settings.
            client_secret: Spotify client secret. If not provided, uses settings.
            token_url: Token endpoint. If not provided, uses settings.
            http_client: Client used for the exchange. Created on demand if omitted.
            clock: Monotonic clock in seconds, used for expiry tracking.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self._client_id = client_id or settings.spotify_client_id
        self._client_secret = client_secret or settings.spotify_client_secret
        self.token_url = token_url or settings.spotify_token_url

        missing = []
        if not self._client_id:
            missing.append("SPOTIFY_CLIENT_ID")
        if not self._client_secret:
            missing.append("SPOTIFY_CLIENT_SECRET")
        if missing:
            raise ConfigurationError(missing)

        self._http_client = http_client
        self._owns_client = http_client is None
        self._clock = clock
        self._timeout = timeout
        self._access_token: str | None = None
        self._expires_at: float = 0.0

    @property
    def authorization_header(self) -> str:
        """Basic authorization value carrying the encoded client credentials."""
        raw = f"{self._client_id}:{self._client_secret}".encode()
        return f"Basic {base64.b64encode(raw).decode()}"

    @property
    def has_valid_token(self) -> bool:
        return self._access_token is not None and self._clock() < self._expires_at

    async def get_token(self) -> str:
        """Return a valid access token, exchanging credentials if needed.

        Raises:
            AuthenticationError: If the exchange fails or the response is malformed.
        """
        if self.has_valid_token:
            return self._access_token  # type: ignore[return-value]

        client = self._get_client()
        try:
            response = await client.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                headers={
                    "Authorization": self.authorization_header,
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
        except httpx.RequestError as e:
            raise AuthenticationError(f"Token request failed: {e}", status_code=None) from e

        if not response.is_success:
            raise AuthenticationError(
                f"Token endpoint returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            token = SpotifyTokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AuthenticationError(
                f"Malformed token response: {e}", status_code=response.status_code
            ) from e

        self._access_token = token.access_token
        self._expires_at = self._clock() + token.expires_in
        logger.info("Spotify access token obtained (expires in %ss)", token.expires_in)
        return token.access_token

    def invalidate(self) -> None:
        """Forget the cached token so the next call performs a new exchange."""
        self._access_token = None
        self._expires_at = 0.0

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
