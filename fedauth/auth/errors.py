"""Error types raised by fedauth collaborators."""

from typing import Optional

# Error code the backend adapter uses when an email is already registered
# under another provider.
ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL = "ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL"


class IdentityBackendError(Exception):
    """Exception raised when an identity backend call fails."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        email: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        # Conflicting account email, set when the backend reports that the
        # email already belongs to a different credential.
        self.email = email


class NoActiveSessionError(IdentityBackendError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self, message: str = "No user is signed in"):
        super().__init__(message, code="NO_ACTIVE_SESSION")


class OAuthAdapterError(Exception):
    """Exception raised when an OAuth token exchange fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialError(OAuthAdapterError):
    """OAuth flow finished without supplying a usable token."""
