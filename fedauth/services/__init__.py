"""Services package for authentication flows."""

from fedauth.services.auth_orchestrator import AuthOrchestrator
from fedauth.services.provider_resolver import (
    NoProviderFound,
    ProviderMatches,
    ProviderMismatch,
    ProviderResolver,
    Resolution,
)

__all__ = [
    "AuthOrchestrator",
    "NoProviderFound",
    "ProviderMatches",
    "ProviderMismatch",
    "ProviderResolver",
    "Resolution",
]
