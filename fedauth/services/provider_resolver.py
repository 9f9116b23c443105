"""Provider resolution.

Decides whether the provider a user is signing in with is the provider
their account was registered with. Resolution only reads the backend's
provider registry; it never creates or modifies accounts.

Only the first provider id the backend returns is treated as the
provider of record. Accounts linked to several providers are not
disambiguated.
"""

from dataclasses import dataclass
from typing import Union

from result import Err, Ok, Result

from fedauth.auth.protocol import IdentityBackend
from fedauth.auth.providers import AccountProvider
from fedauth.utils.logging import get_logger
from fedauth.utils.outcome import capture_async

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProviderMatches:
    """The attempted provider is the provider of record."""


@dataclass(frozen=True)
class NoProviderFound:
    """No account provider is registered for the email."""


@dataclass(frozen=True)
class ProviderMismatch:
    """The account was registered with a different provider."""

    actual: AccountProvider


Resolution = Union[ProviderMatches, NoProviderFound, ProviderMismatch]


class ProviderResolver:
    """Resolves the correct provider for an email."""

    def __init__(self, backend: IdentityBackend) -> None:
        self.backend = backend

    async def resolve_correct_provider(
        self, attempted: AccountProvider, email: str
    ) -> Result[Resolution, Exception]:
        """Compare the attempted provider with the account's provider of record.

        Args:
            attempted: Provider the user is signing in with
            email: Email of the account

        Returns:
            Ok with the resolution, or Err with the backend lookup error
        """
        lookup = await capture_async(self.backend.fetch_providers, email)
        if lookup.is_err():
            logger.warning(f"Provider lookup failed: {lookup.unwrap_err()}")
            return Err(lookup.unwrap_err())

        provider_ids = lookup.unwrap()
        if not provider_ids:
            return Ok(NoProviderFound())

        actual = AccountProvider.parse(provider_ids[0])
        if actual is None:
            logger.info(f"Unsupported provider of record: {provider_ids[0]}")
            return Ok(NoProviderFound())

        if actual != attempted:
            logger.info(
                f"Provider mismatch: attempted={attempted.value}, registered={actual.value}"
            )
            return Ok(ProviderMismatch(actual=actual))

        return Ok(ProviderMatches())
