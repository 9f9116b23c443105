"""Firebase Authentication backend.

Implements the IdentityBackend protocol with:
- Identity Toolkit REST API for account and session operations
- Secure Token API for ID token refresh
- Firebase Admin SDK for provider lookup by email

The signed-in session lives on the instance, so one instance represents
one end user's session.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from firebase_admin import auth
from firebase_admin.auth import UserNotFoundError
from firebase_admin.exceptions import FirebaseError

from fedauth.auth.errors import (
    ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL,
    IdentityBackendError,
    NoActiveSessionError,
)
from fedauth.auth.schemas import Credential, User
from fedauth.config import get_settings
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _Session:
    """Tokens and profile of the signed-in user."""

    user: User
    id_token: str
    refresh_token: str
    provider_ids: list[str] = field(default_factory=list)


def _parse_millis(value: Optional[str]) -> Optional[datetime]:
    """Convert a millisecond epoch string to an aware datetime."""
    if not value:
        return None
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def _error_from_response(response: httpx.Response) -> IdentityBackendError:
    """Build an IdentityBackendError from an Identity Toolkit error body.

    Error messages look like "EMAIL_EXISTS" or
    "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been disabled".
    """
    try:
        message = response.json().get("error", {}).get("message", "")
    except ValueError:
        message = ""
    code = message.split(" : ", 1)[0] if message else None
    return IdentityBackendError(
        message or f"Identity backend error: {response.status_code}",
        code=code,
        status_code=response.status_code,
    )


class FirebaseIdentityBackend:
    """Firebase Authentication client holding one user session."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        identity_toolkit_url: Optional[str] = None,
        secure_token_url: Optional[str] = None,
        request_uri: str = "http://localhost",
    ):
        """Initialize backend.

        Args:
            api_key: Firebase web API key. Defaults to settings.
            identity_toolkit_url: Identity Toolkit base URL. Defaults to settings.
            secure_token_url: Secure Token base URL. Defaults to settings.
            request_uri: Continue URI sent with IdP sign-ins.
        """
        settings = get_settings()
        self.api_key = api_key or settings.firebase_api_key
        self.identity_toolkit_url = identity_toolkit_url or settings.identity_toolkit_url
        self.secure_token_url = secure_token_url or settings.secure_token_url
        self.request_uri = request_uri
        self.timeout = settings.http_timeout
        self._session: Optional[_Session] = None

    # Session state

    @property
    def current_session(self) -> Optional[User]:
        return self._session.user if self._session else None

    @property
    def current_provider_ids(self) -> list[str]:
        return list(self._session.provider_ids) if self._session else []

    def _require_session(self) -> _Session:
        if self._session is None:
            raise NoActiveSessionError()
        return self._session

    # HTTP helpers

    async def _post(self, method: str, payload: dict[str, Any]) -> dict:
        """Call an Identity Toolkit accounts method.

        Raises:
            IdentityBackendError: If the API call fails.
        """
        url = f"{self.identity_toolkit_url}/accounts:{method}"

        async with httpx.AsyncClient() as client:
            response = await client.post(
                url, params={"key": self.api_key}, json=payload, timeout=self.timeout
            )

        if response.status_code != 200:
            error = _error_from_response(response)
            logger.warning(f"accounts:{method} failed: {error.code}")
            raise error

        return response.json()

    async def _open_session(self, data: dict) -> User:
        """Replace the session with the one described by a sign-in response."""
        id_token = data["idToken"]
        lookup = await self._post("lookup", {"idToken": id_token})
        users = lookup.get("users") or [{}]
        info = users[0]

        user = User(
            uid=data.get("localId") or info["localId"],
            email=info.get("email") or data.get("email"),
            creation_date=_parse_millis(info.get("createdAt")),
            last_sign_in_date=_parse_millis(info.get("lastLoginAt")),
        )
        self._session = _Session(
            user=user,
            id_token=id_token,
            refresh_token=data.get("refreshToken", ""),
            provider_ids=[
                p["providerId"] for p in info.get("providerUserInfo", []) if "providerId" in p
            ],
        )
        return user

    # Accounts

    async def create_account(self, email: str, password: str) -> User:
        data = await self._post(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info(f"Created account {data.get('localId')}")
        return await self._open_session(data)

    async def sign_in(self, email: str, password: str) -> User:
        data = await self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return await self._open_session(data)

    async def sign_in_with_credential(self, credential: Credential) -> User:
        """Sign in with an IdP credential.

        When the email already belongs to an account with a different
        credential the API answers 200 with needConfirmation set; that is
        surfaced as an error carrying the conflicting email.
        """
        data = await self._post(
            "signInWithIdp",
            {
                "postBody": credential.idp_post_body(),
                "requestUri": self.request_uri,
                "returnIdpCredential": True,
                "returnSecureToken": True,
            },
        )

        if data.get("needConfirmation"):
            raise IdentityBackendError(
                "An account already exists with the same email but a different sign-in credential",
                code=ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL,
                status_code=200,
                email=data.get("email"),
            )

        return await self._open_session(data)

    async def sign_out(self) -> None:
        self._session = None

    async def send_password_reset(self, email: str) -> None:
        await self._post("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def send_email_verification(self) -> None:
        session = self._require_session()
        await self._post(
            "sendOobCode", {"requestType": "VERIFY_EMAIL", "idToken": session.id_token}
        )

    async def reauthenticate(self, email: str, password: str) -> User:
        session = self._require_session()
        data = await self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        if data.get("localId") != session.user.uid:
            raise IdentityBackendError(
                "Credentials belong to a different user", code="USER_MISMATCH"
            )
        return await self._open_session(data)

    async def update_password(self, new_password: str) -> None:
        session = self._require_session()
        data = await self._post(
            "update",
            {"idToken": session.id_token, "password": new_password, "returnSecureToken": True},
        )
        session.id_token = data.get("idToken", session.id_token)
        session.refresh_token = data.get("refreshToken", session.refresh_token)

    async def fetch_providers(self, email: str) -> list[str]:
        """Provider ids linked to the account registered for `email`.

        Uses the Admin SDK, since the client-side lookup hides providers
        when email enumeration protection is enabled.
        """
        try:
            record = await asyncio.to_thread(auth.get_user_by_email, email)
        except UserNotFoundError:
            return []
        except FirebaseError as e:
            raise IdentityBackendError(str(e), code=e.code) from e

        return [info.provider_id for info in record.provider_data]

    # Tokens

    async def get_id_token(self, force_refresh: bool = False) -> str:
        session = self._require_session()
        if not force_refresh:
            return session.id_token

        url = f"{self.secure_token_url}/token"
        data = {"grant_type": "refresh_token", "refresh_token": session.refresh_token}

        async with httpx.AsyncClient() as client:
            response = await client.post(
                url, params={"key": self.api_key}, data=data, timeout=self.timeout
            )

        if response.status_code != 200:
            raise _error_from_response(response)

        token_data = response.json()
        session.id_token = token_data["id_token"]
        session.refresh_token = token_data.get("refresh_token", session.refresh_token)
        return session.id_token
