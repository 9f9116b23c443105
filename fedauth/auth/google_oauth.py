"""Google sign-in adapter for obtaining Firebase credentials."""

from typing import Optional
from urllib.parse import urlencode

import httpx

from fedauth.auth.errors import MissingCredentialError, OAuthAdapterError
from fedauth.auth.oauth import BaseOAuthAdapter
from fedauth.auth.providers import AccountProvider
from fedauth.auth.schemas import Credential
from fedauth.config import get_settings
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)

# OAuth configuration
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_REVOKE_URL = "https://oauth2.googleapis.com/revoke"
GOOGLE_SCOPES = ["openid", "email", "profile"]


class GoogleOAuthAdapter(BaseOAuthAdapter):
    """Adapter for Google sign-in via the authorization-code flow."""

    provider = AccountProvider.GOOGLE

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
    ) -> None:
        """Initialize Google OAuth adapter.

        Args:
            client_id: OAuth client id. Defaults to settings.
            client_secret: OAuth client secret. Defaults to settings.
            redirect_uri: Registered redirect URI. Defaults to settings.
        """
        settings = get_settings()
        super().__init__(client_id or settings.google_client_id)
        self._client_secret = client_secret or settings.google_client_secret
        self._redirect_uri = redirect_uri or settings.google_redirect_uri
        self._timeout = settings.http_timeout
        self._access_token: Optional[str] = None

    def authorization_url(self, state: str) -> str:
        """
        Generate OAuth authorization URL.

        Args:
            state: CSRF protection state parameter.

        Returns:
            Authorization URL for Google OAuth.
        """
        params = {
            "client_id": self.client_id or "",
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "prompt": "select_account",
            "state": state,
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def credential_from_code(self, code: str) -> Credential:
        """
        Exchange authorization code for a Google credential.

        Args:
            code: Authorization code from OAuth callback.

        Returns:
            Credential carrying the Google ID token and access token.

        Raises:
            OAuthAdapterError: If Google rejects the code.
            MissingCredentialError: If the response carries no ID token.
        """
        data = {
            "client_id": self.client_id or "",
            "client_secret": self._client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self._redirect_uri,
        }

        async with httpx.AsyncClient() as client:
            response = await client.post(GOOGLE_TOKEN_URL, data=data, timeout=self._timeout)

        if response.status_code != 200:
            logger.error(f"Google token exchange failed: {response.status_code}")
            raise OAuthAdapterError(
                f"Google token exchange failed: {response.text}",
                status_code=response.status_code,
            )

        token_data = response.json()
        id_token = token_data.get("id_token")
        access_token = token_data.get("access_token")
        if not id_token:
            raise MissingCredentialError("Google did not return an ID token")

        self._access_token = access_token
        return Credential(
            provider=AccountProvider.GOOGLE,
            id_token=id_token,
            access_token=access_token,
        )

    async def sign_out(self) -> None:
        """Revoke the held access token and forget it.

        Revocation is best effort; the local token is dropped either way.
        """
        token, self._access_token = self._access_token, None
        if token is None:
            return

        try:
            async with httpx.AsyncClient() as client:
                await client.post(
                    GOOGLE_REVOKE_URL,
                    data={"token": token},
                    timeout=self._timeout,
                )
        except httpx.HTTPError as e:
            logger.debug(f"Google token revocation failed: {e}")
