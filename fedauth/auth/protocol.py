"""Protocols for the collaborators the orchestrator consumes.

FirebaseIdentityBackend, GoogleOAuthAdapter and FacebookOAuthAdapter
implement these, and tests substitute doubles with the same shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fedauth.auth.providers import AccountProvider
    from fedauth.auth.results import AuthenticationResult
    from fedauth.auth.schemas import Credential, User


class IdentityBackend(Protocol):
    """System of record for accounts, credentials and the current session."""

    @property
    def current_session(self) -> User | None:
        """User of the active session, or None when signed out."""
        ...

    @property
    def current_provider_ids(self) -> list[str]:
        """Provider ids linked to the signed-in user, empty when signed out."""
        ...

    async def create_account(self, email: str, password: str) -> User:
        """Register an email/password account and sign it in."""
        ...

    async def sign_in(self, email: str, password: str) -> User:
        """Sign in with email and password."""
        ...

    async def sign_in_with_credential(self, credential: Credential) -> User:
        """Sign in with a credential obtained from an OAuth adapter.

        Raises:
            IdentityBackendError: With `email` set when the email already
                belongs to an account using a different credential.
        """
        ...

    async def sign_out(self) -> None:
        """End the current session. Succeeds when there is no session."""
        ...

    async def send_password_reset(self, email: str) -> None:
        """Send a password reset email."""
        ...

    async def reauthenticate(self, email: str, password: str) -> User:
        """Re-verify the signed-in user's password and refresh the session."""
        ...

    async def update_password(self, new_password: str) -> None:
        """Change the signed-in user's password."""
        ...

    async def fetch_providers(self, email: str) -> list[str]:
        """Provider ids registered to the email, empty if none."""
        ...

    async def send_email_verification(self) -> None:
        """Send a verification email to the signed-in user."""
        ...

    async def get_id_token(self, force_refresh: bool = False) -> str:
        """ID token of the signed-in user."""
        ...


class ConsentHandler(Protocol):
    """Presents an OAuth consent page and returns the authorization code."""

    async def request_consent(self, authorization_url: str, state: str) -> str | None:
        ...


class OAuthAdapter(Protocol):
    """Social provider integration that produces backend credentials."""

    provider: AccountProvider
    client_id: str | None
    ui_binding: ConsentHandler | None

    def authorization_url(self, state: str) -> str:
        """Consent URL the user must visit."""
        ...

    async def sign_in(self) -> Credential | None:
        """Run the consent flow through the UI binding.

        Returns None when the flow finished without usable tokens.
        """
        ...

    async def credential_from_code(self, code: str) -> Credential:
        """Exchange an authorization code for a backend credential."""
        ...

    async def sign_out(self) -> None:
        """Forget any tokens held for the provider."""
        ...


class AuthObserver(Protocol):
    """Receives the terminal result of each reported operation."""

    def auth_complete(
        self, result: AuthenticationResult, provider: AccountProvider
    ) -> None:
        ...
