"""Authentication schemas for fedauth."""

from datetime import datetime
from enum import Enum
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from fedauth.auth.providers import AccountProvider


class AuthError(str, Enum):
    """ID token verification error types."""

    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    MISSING_TOKEN = "missing_token"


class User(BaseModel):
    """Authenticated principal derived from a backend session."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(min_length=1)
    email: str | None = None
    creation_date: datetime | None = None
    last_sign_in_date: datetime | None = None


class FirebaseUser(BaseModel):
    """Caller identity decoded from a verified Firebase ID token."""

    uid: str
    email: str


class Credential(BaseModel):
    """Opaque proof of identity accepted by the identity backend."""

    model_config = ConfigDict(frozen=True)

    provider: AccountProvider
    id_token: str | None = None
    access_token: str | None = None

    def idp_post_body(self) -> str:
        """Encode the token material the way signInWithIdp expects it."""
        params = {"providerId": self.provider.value}
        if self.id_token:
            params["id_token"] = self.id_token
        if self.access_token:
            params["access_token"] = self.access_token
        return urlencode(params)
