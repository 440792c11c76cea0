"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required configuration is missing before a run starts."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required configuration: {', '.join(missing)}")
        self.missing = missing


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Playlist Seeder"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./playlist_seeder.db"

    # Spotify Web API
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    spotify_base_url: str = "https://api.spotify.com/v1"
    spotify_playlist_id: str = ""

    # Import pacing
    request_delay: float = 1.0
    page_size: int = 100

    # Content store for album covers
    media_root: str = "./media"
    media_base_url: str = "http://localhost:8000/media"
    media_container: str = "album-covers"

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Spotify returns at most 100 playlist items per page."""
        if not 1 <= v <= 100:
            raise ValueError("PAGE_SIZE must be between 1 and 100")
        return v

    @field_validator("request_delay")
    @classmethod
    def validate_request_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("REQUEST_DELAY must not be negative")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.spotify_client_id or not self.spotify_client_secret:
            warnings.append(
                "SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET are not set - imports will not work"
            )

        if not self.spotify_playlist_id:
            warnings.append("SPOTIFY_PLAYLIST_ID is not set - a playlist must be passed explicitly")

        if self.request_delay < 1.0:
            warnings.append(
                "REQUEST_DELAY is below 1 second - Spotify may start rate limiting requests"
            )

        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings

    def _missing_credentials(self) -> list[str]:
        missing = []
        if not self.spotify_client_id:
            missing.append("SPOTIFY_CLIENT_ID")
        if not self.spotify_client_secret:
            missing.append("SPOTIFY_CLIENT_SECRET")
        if not self.database_url:
            missing.append("DATABASE_URL")
        return missing

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless API credentials and the database are set."""
        missing = self._missing_credentials()
        if missing:
            raise ConfigurationError(missing)

    def require_import_config(self, playlist_id: str | None = None) -> str:
        """Check everything an import needs and return the playlist to import.

        Raises:
            ConfigurationError: If credentials, the database URL or the
                playlist id are missing.
        """
        playlist = playlist_id or self.spotify_playlist_id
        missing = self._missing_credentials()
        if not playlist:
            missing.append("SPOTIFY_PLAYLIST_ID")
        if missing:
            raise ConfigurationError(missing)
        return playlist


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
