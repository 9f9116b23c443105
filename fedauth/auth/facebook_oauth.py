"""Facebook Login adapter for obtaining Firebase credentials."""

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

FACEBOOK_DIALOG_URL = "https://www.facebook.com/{version}/dialog/oauth"
FACEBOOK_TOKEN_URL = "https://graph.facebook.com/{version}/oauth/access_token"
FACEBOOK_PERMISSIONS = ["email"]


class FacebookOAuthAdapter(BaseOAuthAdapter):
    """Adapter for Facebook Login via the authorization-code flow."""

    provider = AccountProvider.FACEBOOK

    def __init__(
        self,
        app_id: Optional[str] = None,
        app_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        graph_version: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        super().__init__(app_id or settings.facebook_app_id)
        self._app_secret = app_secret or settings.facebook_app_secret
        self._redirect_uri = redirect_uri or settings.facebook_redirect_uri
        self._version = graph_version or settings.facebook_graph_version
        self._timeout = settings.http_timeout
        self._access_token: Optional[str] = None

    def authorization_url(self, state: str) -> str:
        """Login dialog URL requesting the email permission."""
        params = {
            "client_id": self.client_id or "",
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": ",".join(FACEBOOK_PERMISSIONS),
            "state": state,
        }
        return f"{FACEBOOK_DIALOG_URL.format(version=self._version)}?{urlencode(params)}"

    async def credential_from_code(self, code: str) -> Credential:
        """
        Exchange authorization code for a Facebook credential.

        Args:
            code: Authorization code from the login dialog redirect.

        Returns:
            Credential carrying the Facebook access token.

        Raises:
            OAuthAdapterError: If Facebook rejects the code.
            MissingCredentialError: If no access token was issued.
        """
        params = {
            "client_id": self.client_id or "",
            "client_secret": self._app_secret,
            "redirect_uri": self._redirect_uri,
            "code": code,
        }

        async with httpx.AsyncClient() as client:
            response = await client.get(
                FACEBOOK_TOKEN_URL.format(version=self._version),
                params=params,
                timeout=self._timeout,
            )

        if response.status_code != 200:
            logger.error(f"Facebook token exchange failed: {response.status_code}")
            raise OAuthAdapterError(
                f"Facebook token exchange failed: {response.text}",
                status_code=response.status_code,
            )

        access_token = response.json().get("access_token")
        if not access_token:
            raise MissingCredentialError("Facebook did not return an access token")

        self._access_token = access_token
        return Credential(provider=AccountProvider.FACEBOOK, access_token=access_token)

    async def sign_out(self) -> None:
        """Forget the held access token."""
        self._access_token = None
