"""Firebase Admin SDK setup.

The Admin SDK backs provider lookup by email and ID token verification.
Without it both fail at call time, which callers surface as backend or
401 errors.
"""

import firebase_admin
from firebase_admin import credentials

from fedauth.config import get_settings
from fedauth.utils.logging import get_logger

logger = get_logger(__name__)

_initialized = False


def initialize_firebase() -> bool:
    """
    Initialize the default Firebase Admin app once.

    Uses the service account file from settings, or application default
    credentials when no path is configured.

    Returns:
        True once the default app is available.
    """
    global _initialized
    if _initialized:
        return True

    path = get_settings().firebase_credentials_path

    try:
        cred = credentials.Certificate(path) if path else credentials.ApplicationDefault()
    except FileNotFoundError:
        logger.warning(f"Firebase service account not found at {path}")
        return False
    except ValueError as e:
        logger.error(f"Invalid Firebase service account at {path}: {e}")
        return False

    try:
        firebase_admin.initialize_app(cred)
    except ValueError:
        # Default app already exists
        pass

    _initialized = True
    logger.info("Firebase Admin SDK ready")
    return True
