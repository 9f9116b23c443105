"""Identity providers supported by fedauth."""

from enum import Enum


class AccountProvider(str, Enum):
    """Provider a credential or account belongs to.

    Values match the provider ids the identity backend reports.
    """

    GOOGLE = "google.com"
    FACEBOOK = "facebook.com"
    EMAIL = "password"

    @classmethod
    def parse(cls, raw: str | None) -> "AccountProvider | None":
        """Return the provider for a backend provider id, or None if unknown."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    @property
    def is_social(self) -> bool:
        """True for providers that sign in through an OAuth adapter."""
        return self is not AccountProvider.EMAIL

