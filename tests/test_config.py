"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from playlist_seeder.config import ConfigurationError, Settings


def make_settings(**overrides) -> Settings:
    values = {
        "spotify_client_id": "client-id",
        "spotify_client_secret": "client-secret",
        "spotify_playlist_id": "pl1",
        "request_delay": 1.0,
        "debug": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestValidation:
    """Tests for field validation."""

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size: int) -> None:
        with pytest.raises(ValidationError, match="PAGE_SIZE"):
            make_settings(page_size=page_size)

    def test_negative_delay(self) -> None:
        with pytest.raises(ValidationError, match="REQUEST_DELAY"):
            make_settings(request_delay=-1)

    def test_defaults(self) -> None:
        settings = make_settings()
        assert settings.page_size == 100
        assert settings.spotify_base_url == "https://api.spotify.com/v1"
        assert settings.media_container == "album-covers"


class TestRuntimeWarnings:
    """Tests for configuration warnings."""

    def test_no_warnings(self) -> None:
        assert make_settings().validate_runtime_config() == []

    def test_warnings(self) -> None:
        settings = make_settings(
            spotify_client_secret="", spotify_playlist_id="", request_delay=0.2, debug=True
        )

        warnings = settings.validate_runtime_config()

        assert len(warnings) == 4
        assert any("SPOTIFY_CLIENT_ID" in warning for warning in warnings)
        assert any("rate limiting" in warning for warning in warnings)


class TestRequireImportConfig:
    """Tests for pre-run configuration checks."""

    def test_returns_configured_playlist(self) -> None:
        assert make_settings().require_import_config() == "pl1"

    def test_explicit_playlist_wins(self) -> None:
        assert make_settings().require_import_config("other") == "other"

    def test_lists_every_missing_value(self) -> None:
        settings = make_settings(spotify_client_id="", spotify_playlist_id="")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require_import_config()

        assert exc_info.value.missing == ["SPOTIFY_CLIENT_ID", "SPOTIFY_PLAYLIST_ID"]
        assert "SPOTIFY_CLIENT_ID, SPOTIFY_PLAYLIST_ID" in str(exc_info.value)

    def test_require_credentials_ignores_playlist(self) -> None:
        make_settings(spotify_playlist_id="").require_credentials()

    def test_require_credentials_missing_secret(self) -> None:
        with pytest.raises(ConfigurationError, match="SPOTIFY_CLIENT_SECRET"):
            make_settings(spotify_client_secret="").require_credentials()
