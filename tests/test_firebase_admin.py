"""Tests for Firebase Admin SDK setup."""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def reset_initialized():
    """Each test starts with an uninitialized module."""
    import fedauth.auth.firebase_admin as module

    module._initialized = False
    yield
    module._initialized = False


def settings_with_path(path: str) -> MagicMock:
    settings = MagicMock()
    settings.firebase_credentials_path = path
    return settings


class TestInitializeFirebase:
    """initialize_firebase tests."""

    def test_uses_service_account_file(self) -> None:
        """Configured path should be loaded as a certificate."""
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("sa.json")),
            patch("fedauth.auth.firebase_admin.credentials") as mock_credentials,
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            assert initialize_firebase() is True

        mock_credentials.Certificate.assert_called_once_with("sa.json")
        mock_sdk.initialize_app.assert_called_once_with(mock_credentials.Certificate.return_value)

    def test_empty_path_uses_application_default(self) -> None:
        """No path should fall back to application default credentials."""
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("")),
            patch("fedauth.auth.firebase_admin.credentials") as mock_credentials,
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            assert initialize_firebase() is True

        mock_credentials.ApplicationDefault.assert_called_once_with()
        mock_credentials.Certificate.assert_not_called()
        mock_sdk.initialize_app.assert_called_once()

    def test_missing_file_returns_false(self) -> None:
        """Missing service account file should leave the SDK uninitialized."""
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("missing.json")),
            patch("fedauth.auth.firebase_admin.credentials") as mock_credentials,
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            mock_credentials.Certificate.side_effect = FileNotFoundError("missing.json")
            assert initialize_firebase() is False

        mock_sdk.initialize_app.assert_not_called()

    def test_is_idempotent(self) -> None:
        """Repeated calls should initialize only once."""
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("sa.json")),
            patch("fedauth.auth.firebase_admin.credentials"),
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            initialize_firebase()
            initialize_firebase()

        mock_sdk.initialize_app.assert_called_once()

    def test_existing_default_app_counts_as_initialized(self) -> None:
        """An already-initialized default app should be accepted."""
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("sa.json")),
            patch("fedauth.auth.firebase_admin.credentials"),
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            mock_sdk.initialize_app.side_effect = ValueError("The default Firebase app already exists.")
            assert initialize_firebase() is True

    def test_malformed_service_account_returns_false(self) -> None:
        """Invalid service account file should not be reported as ready."""
        import fedauth.auth.firebase_admin as module
        from fedauth.auth.firebase_admin import initialize_firebase

        with (
            patch("fedauth.auth.firebase_admin.get_settings", return_value=settings_with_path("bad.json")),
            patch("fedauth.auth.firebase_admin.credentials") as mock_credentials,
            patch("fedauth.auth.firebase_admin.firebase_admin") as mock_sdk,
        ):
            mock_credentials.Certificate.side_effect = ValueError(
                "Invalid service account certificate"
            )
            assert initialize_firebase() is False

        assert module._initialized is False
        mock_sdk.initialize_app.assert_not_called()
