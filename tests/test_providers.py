"""Tests for account providers and result values."""

import pytest

from fedauth.auth.providers import AccountProvider
from fedauth.auth.results import NoAccount, WrongProvider
from fedauth.auth.schemas import Credential, User


class TestAccountProvider:
    """AccountProvider tests."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("google.com", AccountProvider.GOOGLE),
            ("facebook.com", AccountProvider.FACEBOOK),
            ("password", AccountProvider.EMAIL),
        ],
    )
    def test_parse_known_provider_ids(self, raw: str, expected: AccountProvider) -> None:
        """Backend provider ids should map to their providers."""
        assert AccountProvider.parse(raw) is expected
        assert expected.value == raw

    @pytest.mark.parametrize("raw", ["phone", "apple.com", "", "Google.com", None])
    def test_parse_unknown_provider_id_returns_none(self, raw) -> None:
        """Unknown provider ids should not map to any provider."""
        assert AccountProvider.parse(raw) is None

    def test_social_providers(self) -> None:
        """Only Google and Facebook should be social providers."""
        assert AccountProvider.GOOGLE.is_social
        assert AccountProvider.FACEBOOK.is_social
        assert not AccountProvider.EMAIL.is_social


class TestResults:
    """Result value tests."""

    def test_results_compare_by_value(self) -> None:
        """Results with the same fields should be equal."""
        assert WrongProvider(AccountProvider.GOOGLE, "a@x.com") == WrongProvider(
            AccountProvider.GOOGLE, "a@x.com"
        )
        assert NoAccount("a@x.com") != NoAccount("b@x.com")


class TestSchemas:
    """User and Credential tests."""

    def test_user_requires_uid(self) -> None:
        """User should reject an empty uid."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            User(uid="")

    def test_user_dates_are_optional(self) -> None:
        """User should allow missing email and dates."""
        user = User(uid="uid-1")

        assert user.email is None
        assert user.creation_date is None
        assert user.last_sign_in_date is None

    def test_credential_post_body(self) -> None:
        """Credential should encode provider id and tokens."""
        credential = Credential(
            provider=AccountProvider.GOOGLE, id_token="id-tok", access_token="acc-tok"
        )

        assert credential.idp_post_body() == (
            "providerId=google.com&id_token=id-tok&access_token=acc-tok"
        )

    def test_credential_post_body_omits_missing_tokens(self) -> None:
        """Missing tokens should be left out of the post body."""
        credential = Credential(provider=AccountProvider.FACEBOOK, access_token="acc-tok")

        assert credential.idp_post_body() == "providerId=facebook.com&access_token=acc-tok"
