"""Shared behaviour for social provider OAuth adapters."""

import secrets
import weakref
from typing import Optional

from fedauth.auth.protocol import ConsentHandler
from fedauth.auth.providers import AccountProvider
from fedauth.auth.schemas import Credential
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)


class BaseOAuthAdapter:
    """Authorization-code flow that ends in a backend credential.

    Subclasses supply `authorization_url`, `credential_from_code` and
    `sign_out`. The UI binding is held weakly; once its owner is gone the
    adapter behaves as if none were attached.
    """

    provider: AccountProvider

    def __init__(self, client_id: Optional[str] = None) -> None:
        self.client_id = client_id
        self._ui_binding: Optional[weakref.ReferenceType[ConsentHandler]] = None

    @property
    def ui_binding(self) -> Optional[ConsentHandler]:
        """Consent handler used by `sign_in`, if still alive."""
        if self._ui_binding is None:
            return None
        return self._ui_binding()

    @ui_binding.setter
    def ui_binding(self, handler: Optional[ConsentHandler]) -> None:
        self._ui_binding = weakref.ref(handler) if handler is not None else None

    def authorization_url(self, state: str) -> str:
        raise NotImplementedError

    async def credential_from_code(self, code: str) -> Credential:
        raise NotImplementedError

    async def sign_out(self) -> None:
        raise NotImplementedError

    async def sign_in(self) -> Optional[Credential]:
        """Ask the UI binding for consent and exchange the returned code.

        Returns:
            Credential for the backend, or None if no UI binding is attached
            or the consent step returned no code.

        Raises:
            OAuthAdapterError: If the token exchange fails.
            MissingCredentialError: If the provider returned no usable token.
        """
        handler = self.ui_binding
        if handler is None:
            logger.warning(f"{self.provider.value} sign-in requested without a UI binding")
            return None

        state = secrets.token_urlsafe(16)
        code = await handler.request_consent(self.authorization_url(state), state)
        if not code:
            return None

        return await self.credential_from_code(code)
