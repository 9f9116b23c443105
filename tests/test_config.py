"""Tests for environment configuration."""

import os
from unittest.mock import patch


class TestSettings:
    """Settings configuration tests."""

    def test_settings_has_app_name(self) -> None:
        """Settings should default app_name to fedauth."""
        from fedauth.config import Settings

        settings = Settings()
        assert settings.app_name == "fedauth"

    def test_settings_has_app_version(self) -> None:
        """Settings should have app_version attribute."""
        from fedauth.config import Settings

        settings = Settings()
        assert settings.app_version == "0.1.0"

    def test_settings_reads_from_environment(self) -> None:
        """Settings should read DEBUG from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from fedauth.config import Settings

            settings = Settings()
            assert settings.debug is True

    def test_firebase_endpoints_have_defaults(self) -> None:
        """Identity Toolkit and Secure Token URLs should point at Google."""
        from fedauth.config import Settings

        settings = Settings()
        assert settings.identity_toolkit_url == "https://identitytoolkit.googleapis.com/v1"
        assert settings.secure_token_url == "https://securetoken.googleapis.com/v1"

    def test_provider_settings_read_from_environment(self) -> None:
        """OAuth client settings should be read from environment variables."""
        env = {
            "FIREBASE_API_KEY": "api-key",
            "GOOGLE_CLIENT_ID": "google-id",
            "FACEBOOK_APP_ID": "facebook-id",
            "FACEBOOK_GRAPH_VERSION": "v20.0",
        }
        with patch.dict(os.environ, env):
            from fedauth.config import Settings

            settings = Settings()
            assert settings.firebase_api_key == "api-key"
            assert settings.google_client_id == "google-id"
            assert settings.facebook_app_id == "facebook-id"
            assert settings.facebook_graph_version == "v20.0"

    def test_http_timeout_is_positive(self) -> None:
        """Outbound HTTP timeout should have a positive default."""
        from fedauth.config import Settings

        settings = Settings()
        assert settings.http_timeout > 0


class TestGetSettings:
    """get_settings caching tests."""

    def test_get_settings_is_cached(self) -> None:
        """get_settings should return the same instance on repeated calls."""
        from fedauth.config import get_settings

        assert get_settings() is get_settings()
