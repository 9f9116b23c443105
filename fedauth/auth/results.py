"""Terminal outcomes of authentication attempts.

Every login, signup, social login and email availability check ends in
exactly one of these values:

- Success: backend call succeeded, carries the session user (may be None)
- Failure: error that provider resolution could not explain
- NoAccount: no account exists for the email
- WrongProvider: the account exists under a different provider
- PreflightSuccess: the email may be used for email authentication
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from fedauth.auth.providers import AccountProvider
from fedauth.auth.schemas import User


@dataclass(frozen=True)
class Success:
    """Successful authentication."""

    user: Optional[User]


@dataclass(frozen=True)
class Failure:
    """Failed authentication."""

    error: Exception


@dataclass(frozen=True)
class NoAccount:
    """No account is registered for the email."""

    email: str


@dataclass(frozen=True)
class WrongProvider:
    """Authentication was attempted with the wrong provider."""

    use_provider: AccountProvider
    with_email: str


@dataclass(frozen=True)
class PreflightSuccess:
    """Email is safe to use with email authentication."""

    email: str


AuthenticationResult = Union[Success, Failure, NoAccount, WrongProvider, PreflightSuccess]


class WrongProviderResponse(NamedTuple):
    """What a backend sign-in error says about a provider conflict."""

    is_wrong_provider: bool
    email: Optional[str]
