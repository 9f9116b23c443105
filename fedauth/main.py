"""FastAPI application entry point."""

from fastapi import FastAPI

from fedauth.auth.firebase_admin import initialize_firebase
from fedauth.config import get_settings
from fedauth.routers.auth import router as auth_router
from fedauth.utils.logging import configure_logging

# Configure logging (must be called before other modules use loggers)
configure_logging()

# Initialize Firebase Admin SDK
initialize_firebase()

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

app.include_router(auth_router, prefix="/api/auth")


@app.get("/")
async def root() -> dict:
    """Return application information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
