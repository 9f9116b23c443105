"""Authentication module for fedauth."""

from fedauth.auth.errors import (
    IdentityBackendError,
    MissingCredentialError,
    NoActiveSessionError,
    OAuthAdapterError,
)
from fedauth.auth.protocol import AuthObserver, ConsentHandler, IdentityBackend, OAuthAdapter
from fedauth.auth.providers import AccountProvider
from fedauth.auth.results import (
    AuthenticationResult,
    Failure,
    NoAccount,
    PreflightSuccess,
    Success,
    WrongProvider,
    WrongProviderResponse,
)
from fedauth.auth.schemas import AuthError, Credential, FirebaseUser, User

__all__ = [
    "AccountProvider",
    "AuthError",
    "AuthObserver",
    "AuthenticationResult",
    "ConsentHandler",
    "Credential",
    "Failure",
    "FirebaseUser",
    "IdentityBackend",
    "IdentityBackendError",
    "MissingCredentialError",
    "NoAccount",
    "NoActiveSessionError",
    "OAuthAdapter",
    "OAuthAdapterError",
    "PreflightSuccess",
    "Success",
    "User",
    "WrongProvider",
    "WrongProviderResponse",
]
