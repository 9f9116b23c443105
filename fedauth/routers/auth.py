"""Authentication API endpoints.

Each request gets its own orchestrator, backend session and observer,
so concurrent requests never share reported results.
"""

import secrets
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from fedauth.auth.errors import IdentityBackendError
from fedauth.auth.middleware import get_current_user
from fedauth.auth.providers import AccountProvider
from fedauth.auth.results import (
    AuthenticationResult,
    Failure,
    NoAccount,
    PreflightSuccess,
    Success,
    WrongProvider,
)
from fedauth.auth.schemas import FirebaseUser, User
from fedauth.factory import build_orchestrator
from fedauth.services.auth_orchestrator import AuthOrchestrator
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Authentication"])


class SocialProvider(str, Enum):
    """Social providers addressable from the API."""

    GOOGLE = "google"
    FACEBOOK = "facebook"

    @property
    def account_provider(self) -> AccountProvider:
        return AccountProvider[self.name]


class CredentialsRequest(BaseModel):
    """Request body for signup and login."""

    email: str
    password: str


class EmailRequest(BaseModel):
    """Request body for email-only operations."""

    email: str


class CallbackRequest(BaseModel):
    """Request body for OAuth callback."""

    code: str


class AuthUrlResponse(BaseModel):
    """Response for OAuth URL endpoint."""

    url: str
    state: str


class AuthResultResponse(BaseModel):
    """Serialized AuthenticationResult."""

    status: str
    provider: str
    email: Optional[str] = None
    use_provider: Optional[str] = None
    user: Optional[User] = None
    id_token: Optional[str] = None


class ResultCollector:
    """Observer that keeps the last reported result."""

    def __init__(self) -> None:
        self.result: Optional[AuthenticationResult] = None
        self.provider: Optional[AccountProvider] = None

    def auth_complete(self, result: AuthenticationResult, provider: AccountProvider) -> None:
        self.result = result
        self.provider = provider


def get_orchestrator() -> AuthOrchestrator:
    """Build a request-scoped orchestrator."""
    return build_orchestrator()


async def _issued_token(orchestrator: AuthOrchestrator) -> Optional[str]:
    """ID token issued by the sign-in that just completed.

    A token that cannot be read is left out of the response.
    """
    try:
        return await orchestrator.backend.get_id_token(force_refresh=False)
    except IdentityBackendError as e:
        logger.warning(f"ID token unavailable after sign-in: {e.code}")
        return None


async def _respond(
    orchestrator: AuthOrchestrator, collector: ResultCollector
) -> AuthResultResponse:
    """Turn the collected result into a response, raising on Failure."""
    result = collector.result
    provider = (collector.provider or AccountProvider.EMAIL).value

    if result is None:
        # Social login without a UI binding never reports
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "no_result"},
        )

    if isinstance(result, Failure):
        code = getattr(result.error, "code", None) or "authentication_failed"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": code, "provider": provider},
        )

    if isinstance(result, Success):
        return AuthResultResponse(
            status="success",
            provider=provider,
            user=result.user,
            id_token=await _issued_token(orchestrator),
        )

    if isinstance(result, WrongProvider):
        return AuthResultResponse(
            status="wrong_provider",
            provider=provider,
            email=result.with_email,
            use_provider=result.use_provider.value,
        )

    if isinstance(result, NoAccount):
        return AuthResultResponse(status="no_account", provider=provider, email=result.email)

    if isinstance(result, PreflightSuccess):
        return AuthResultResponse(
            status="preflight_success", provider=provider, email=result.email
        )

    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/signup", response_model=AuthResultResponse)
async def signup(
    request: CredentialsRequest,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> AuthResultResponse:
    """Create an email/password account."""
    collector = ResultCollector()
    orchestrator.observer = collector
    await orchestrator.signup(request.email, request.password)
    return await _respond(orchestrator, collector)


@router.post("/login", response_model=AuthResultResponse)
async def login(
    request: CredentialsRequest,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> AuthResultResponse:
    """Sign in with email and password."""
    collector = ResultCollector()
    orchestrator.observer = collector
    await orchestrator.login(request.email, request.password)
    return await _respond(orchestrator, collector)


@router.post("/check-email", response_model=AuthResultResponse)
async def check_email(
    request: EmailRequest,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> AuthResultResponse:
    """Check whether an email can be used for email authentication."""
    collector = ResultCollector()
    orchestrator.observer = collector
    await orchestrator.check_email_availability(request.email)
    return await _respond(orchestrator, collector)


@router.post("/password-reset", status_code=status.HTTP_204_NO_CONTENT)
async def password_reset(
    request: EmailRequest,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> None:
    """Send a password reset email."""
    try:
        await orchestrator.reset_password(request.email)
    except IdentityBackendError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": e.code or "password_reset_failed"},
        ) from e


@router.get("/{provider}/url", response_model=AuthUrlResponse)
async def get_social_auth_url(
    provider: SocialProvider,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> AuthUrlResponse:
    """
    Get the consent URL for a social provider.

    The returned state must be echoed back by the client for CSRF checks.
    """
    state = secrets.token_urlsafe(16)
    url = orchestrator.authorization_url(provider.account_provider, state)
    return AuthUrlResponse(url=url, state=state)


@router.post("/{provider}/callback", response_model=AuthResultResponse)
async def social_auth_callback(
    provider: SocialProvider,
    request: CallbackRequest,
    orchestrator: AuthOrchestrator = Depends(get_orchestrator),
) -> AuthResultResponse:
    """
    Handle a social provider redirect.

    Exchanges the authorization code for a credential and signs in.
    """
    collector = ResultCollector()
    orchestrator.observer = collector
    await orchestrator.login_with_authorization_code(provider.account_provider, request.code)
    return await _respond(orchestrator, collector)


@router.get("/me", response_model=FirebaseUser)
async def me(current_user: FirebaseUser = Depends(get_current_user)) -> FirebaseUser:
    """Return the caller identified by their ID token."""
    return current_user
