"""Composition root.

Builds an AuthOrchestrator wired to Firebase and the social OAuth
adapters from settings. Callers own the returned instance; there is no
process-wide orchestrator.
"""

from typing import Optional

from fedauth.auth.facebook_oauth import FacebookOAuthAdapter
from fedauth.auth.firebase_backend import FirebaseIdentityBackend
from fedauth.auth.google_oauth import GoogleOAuthAdapter
from fedauth.auth.protocol import AuthObserver
from fedauth.auth.providers import AccountProvider
from fedauth.config import Settings, get_settings
from fedauth.services.auth_orchestrator import AuthOrchestrator


def build_orchestrator(
    settings: Optional[Settings] = None,
    observer: Optional[AuthObserver] = None,
) -> AuthOrchestrator:
    """Create an orchestrator with its own backend session.

    Args:
        settings: Settings to configure collaborators with. Defaults to
            the cached application settings.
        observer: Observer to attach before returning.

    Returns:
        A ready-to-use AuthOrchestrator.

    Raises:
        ValueError: If the Firebase API key is not configured.
    """
    settings = settings or get_settings()
    if not settings.firebase_api_key:
        msg = "FIREBASE_API_KEY is required. Set it in your environment or .env file."
        raise ValueError(msg)

    backend = FirebaseIdentityBackend(
        api_key=settings.firebase_api_key,
        identity_toolkit_url=settings.identity_toolkit_url,
        secure_token_url=settings.secure_token_url,
    )
    adapters = {
        AccountProvider.GOOGLE: GoogleOAuthAdapter(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
        ),
        AccountProvider.FACEBOOK: FacebookOAuthAdapter(
            app_id=settings.facebook_app_id,
            app_secret=settings.facebook_app_secret,
            redirect_uri=settings.facebook_redirect_uri,
            graph_version=settings.facebook_graph_version,
        ),
    }

    orchestrator = AuthOrchestrator(backend=backend, adapters=adapters)
    orchestrator.observer = observer
    return orchestrator
