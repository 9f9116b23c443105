"""Authentication orchestration.

Coordinates signup, email login, social login, logout, password reset,
reauthentication and token retrieval against an identity backend and the
social OAuth adapters.

Signup, login, social login and email availability checks report exactly
one AuthenticationResult to the attached observer. The remaining
operations return their outcome directly and raise backend errors
unmodified.

The observer, UI binding and client id are set once during setup. They
are not guarded against being changed while operations are in flight; a
report goes to whichever observer is attached when the operation
completes. Concurrent operations are neither serialized nor de-duplicated.
"""

import weakref
from collections.abc import Mapping
from typing import Optional

from fedauth.auth.errors import MissingCredentialError
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
from fedauth.auth.schemas import Credential, User
from fedauth.services.provider_resolver import (
    NoProviderFound,
    ProviderMismatch,
    ProviderResolver,
)
from fedauth.utils.logging import get_logger
from fedauth.utils.outcome import capture_async

logger = get_logger(__name__)


class AuthOrchestrator:
    """Provider-aware authentication flows over an identity backend."""

    def __init__(
        self,
        backend: IdentityBackend,
        adapters: Optional[Mapping[AccountProvider, OAuthAdapter]] = None,
        resolver: Optional[ProviderResolver] = None,
    ) -> None:
        """
        Args:
            backend: Identity backend holding accounts and the session.
            adapters: OAuth adapter per social provider.
            resolver: Provider resolver. Defaults to one over `backend`.
        """
        self.backend = backend
        self.adapters: dict[AccountProvider, OAuthAdapter] = dict(adapters or {})
        self.resolver = resolver or ProviderResolver(backend)
        self._observer: Optional[weakref.ReferenceType[AuthObserver]] = None
        self._ui_binding: Optional[weakref.ReferenceType[ConsentHandler]] = None

    # Configuration

    @property
    def observer(self) -> Optional[AuthObserver]:
        """Recipient of authentication results. Held weakly."""
        if self._observer is None:
            return None
        return self._observer()

    @observer.setter
    def observer(self, observer: Optional[AuthObserver]) -> None:
        self._observer = weakref.ref(observer) if observer is not None else None

    @property
    def ui_binding(self) -> Optional[ConsentHandler]:
        """Consent handler shared by the social adapters. Held weakly."""
        if self._ui_binding is None:
            return None
        return self._ui_binding()

    @ui_binding.setter
    def ui_binding(self, handler: Optional[ConsentHandler]) -> None:
        self._ui_binding = weakref.ref(handler) if handler is not None else None
        for adapter in self.adapters.values():
            adapter.ui_binding = handler

    @property
    def google_client_id(self) -> Optional[str]:
        adapter = self.adapters.get(AccountProvider.GOOGLE)
        return adapter.client_id if adapter else None

    @google_client_id.setter
    def google_client_id(self, client_id: Optional[str]) -> None:
        self._adapter(AccountProvider.GOOGLE).client_id = client_id

    # Session state

    @property
    def current_user(self) -> Optional[User]:
        """User of the backend's current session, read on every access."""
        return self.backend.current_session

    @property
    def account_type(self) -> Optional[AccountProvider]:
        """Provider of the signed-in account, or None."""
        provider_ids = self.backend.current_provider_ids
        if not provider_ids:
            return None
        return AccountProvider.parse(provider_ids[0])

    # Signup

    async def signup(self, email: str, password: str) -> None:
        """Create an email/password account and send a verification email."""
        outcome = await capture_async(self.backend.create_account, email, password)
        if outcome.is_err():
            self._report(Failure(outcome.unwrap_err()), AccountProvider.EMAIL)
            return

        verification = await capture_async(self.backend.send_email_verification)
        if verification.is_err():
            logger.warning(f"Verification email not sent: {verification.unwrap_err()}")

        self._report(Success(self.current_user), AccountProvider.EMAIL)

    # Email authentication

    async def check_email_availability(self, email: str) -> None:
        """Check that the email is not registered with a social provider.

        Reports PreflightSuccess when no conflicting provider is found,
        WrongProvider when one is, and Failure if the lookup fails.
        """
        resolution = await self.resolver.resolve_correct_provider(AccountProvider.EMAIL, email)
        if resolution.is_err():
            self._report(Failure(resolution.unwrap_err()), AccountProvider.EMAIL)
            return

        outcome = resolution.unwrap()
        if isinstance(outcome, ProviderMismatch):
            self._report(WrongProvider(outcome.actual, email), AccountProvider.EMAIL)
        else:
            self._report(PreflightSuccess(email), AccountProvider.EMAIL)

    async def login(self, email: str, password: str) -> None:
        """Sign in with email and password.

        The provider of record is resolved first; the backend sign-in is
        only attempted when the account is registered with email.
        """
        resolution = await self.resolver.resolve_correct_provider(AccountProvider.EMAIL, email)
        if resolution.is_err():
            self._report(Failure(resolution.unwrap_err()), AccountProvider.EMAIL)
            return

        outcome = resolution.unwrap()
        if isinstance(outcome, ProviderMismatch):
            self._report(WrongProvider(outcome.actual, email), AccountProvider.EMAIL)
            return
        if isinstance(outcome, NoProviderFound):
            self._report(NoAccount(email), AccountProvider.EMAIL)
            return

        sign_in = await capture_async(self.backend.sign_in, email, password)
        if sign_in.is_err():
            self._report(Failure(sign_in.unwrap_err()), AccountProvider.EMAIL)
        else:
            self._report(Success(self.current_user), AccountProvider.EMAIL)

    # Social authentication

    async def login_with_google(self) -> None:
        await self.login_with_social(AccountProvider.GOOGLE)

    async def login_with_facebook(self) -> None:
        await self.login_with_social(AccountProvider.FACEBOOK)

    async def login_with_social(self, provider: AccountProvider) -> None:
        """Run the provider's consent flow and sign in with its credential.

        Does nothing when no UI binding is attached to the adapter.

        Raises:
            ValueError: If `provider` is not social or has no adapter.
        """
        adapter = self._adapter(provider)
        if adapter.ui_binding is None:
            logger.warning(f"No UI binding attached for {provider.value} sign-in")
            return

        obtained = await capture_async(adapter.sign_in)
        if obtained.is_err():
            self._report(Failure(obtained.unwrap_err()), provider)
            return

        credential = obtained.unwrap()
        if credential is None:
            error = MissingCredentialError(f"{provider.value} sign-in returned no credential")
            self._report(Failure(error), provider)
            return

        await self._sign_in_with_credential(provider, credential)

    async def login_with_authorization_code(self, provider: AccountProvider, code: str) -> None:
        """Finish a redirect-based social login from its authorization code.

        Raises:
            ValueError: If `provider` is not social or has no adapter.
        """
        adapter = self._adapter(provider)
        obtained = await capture_async(adapter.credential_from_code, code)
        if obtained.is_err():
            self._report(Failure(obtained.unwrap_err()), provider)
            return

        await self._sign_in_with_credential(provider, obtained.unwrap())

    def authorization_url(self, provider: AccountProvider, state: str) -> str:
        """Consent URL for a redirect-based social login."""
        return self._adapter(provider).authorization_url(state)

    async def _sign_in_with_credential(
        self, provider: AccountProvider, credential: Credential
    ) -> None:
        outcome = await capture_async(self.backend.sign_in_with_credential, credential)
        if outcome.is_ok():
            self._report(Success(self.current_user), provider)
            return

        error = outcome.unwrap_err()

        # Local OAuth state may disagree with the backend after a failure
        await self._sign_out_adapters()

        response = self.does_error_contain_wrong_provider(error, provider)
        if not response.is_wrong_provider or response.email is None:
            self._report(Failure(error), provider)
            return

        resolution = await self.resolver.resolve_correct_provider(provider, response.email)
        if resolution.is_ok() and isinstance(resolution.unwrap(), ProviderMismatch):
            actual = resolution.unwrap().actual
            self._report(WrongProvider(actual, response.email), provider)
        else:
            self._report(Failure(error), provider)

    def does_error_contain_wrong_provider(
        self, error: Exception, provider: AccountProvider
    ) -> WrongProviderResponse:
        """Extract the conflicting account email from a sign-in error.

        Args:
            error: Error raised by the backend credential sign-in
            provider: Provider the user attempted

        Returns:
            WrongProviderResponse; email is None when the error names no
            conflicting account, in which case the provider cannot be resolved
        """
        email = getattr(error, "email", None)
        if isinstance(email, str) and email:
            logger.debug(f"{provider.value} sign-in conflicts with an existing account")
            return WrongProviderResponse(True, email)
        return WrongProviderResponse(False, None)

    # Session management

    async def logout(self) -> bool:
        """Sign out of every OAuth adapter and then the backend.

        Returns:
            Whether the backend sign-out succeeded
        """
        await self._sign_out_adapters()

        outcome = await capture_async(self.backend.sign_out)
        if outcome.is_err():
            logger.warning(f"Backend sign-out failed: {outcome.unwrap_err()}")
            return False
        return True

    async def reset_password(self, email: str) -> None:
        await self.backend.send_password_reset(email)

    async def reauthenticate(self, email: str, password: str) -> None:
        await self.backend.reauthenticate(email, password)

    async def change_password(self, new_password: str) -> None:
        await self.backend.update_password(new_password)

    async def get_token(self) -> Optional[str]:
        """Force-refresh and return the current user's ID token.

        Returns:
            ID token, or None when no user is signed in
        """
        if self.backend.current_session is None:
            return None
        return await self.backend.get_id_token(force_refresh=True)

    # Helpers

    def _adapter(self, provider: AccountProvider) -> OAuthAdapter:
        if not provider.is_social:
            raise ValueError(f"{provider.value} is not a social provider")
        adapter = self.adapters.get(provider)
        if adapter is None:
            raise ValueError(f"No OAuth adapter configured for {provider.value}")
        return adapter

    async def _sign_out_adapters(self) -> None:
        for provider, adapter in self.adapters.items():
            outcome = await capture_async(adapter.sign_out)
            if outcome.is_err():
                logger.debug(f"{provider.value} sign-out failed: {outcome.unwrap_err()}")

    def _report(self, result: AuthenticationResult, provider: AccountProvider) -> None:
        observer = self.observer
        if observer is None:
            logger.debug(f"No observer attached; dropping {type(result).__name__} result")
            return
        observer.auth_complete(result, provider)
