"""Firebase ID token verification for FastAPI routes."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth
from firebase_admin.auth import ExpiredIdTokenError
from firebase_admin.exceptions import FirebaseError

from fedauth.auth.schemas import AuthError, FirebaseUser
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(error: AuthError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error.value},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> FirebaseUser:
    """
    Resolve the caller from the Firebase ID token in the Authorization header.

    Args:
        credentials: Bearer credentials, None when the header is absent
            or uses another scheme.

    Returns:
        FirebaseUser with uid and email.

    Raises:
        HTTPException: 401 with missing_token, expired_token or invalid_token.
    """
    if credentials is None:
        raise _unauthorized(AuthError.MISSING_TOKEN)

    try:
        claims = auth.verify_id_token(credentials.credentials)
    except ExpiredIdTokenError as e:
        raise _unauthorized(AuthError.EXPIRED_TOKEN) from e
    except (ValueError, FirebaseError) as e:
        # ValueError also covers a missing default app
        logger.debug(f"ID token rejected: {e}")
        raise _unauthorized(AuthError.INVALID_TOKEN) from e

    return FirebaseUser(uid=claims["uid"], email=claims.get("email", ""))
