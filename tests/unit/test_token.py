"""Tests for the sync token signer."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from helpers import TEST_SIGNING_KEY

from functions_sync.core.exceptions import ConfigurationError
from functions_sync.sync.token import TOKEN_LIFETIME, TokenSigner

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


class TestTokenSigner:
    def test_lifetime_is_five_minutes(self) -> None:
        assert TOKEN_LIFETIME == timedelta(minutes=5)

    def test_issue_expires_after_lifetime(self) -> None:
        token = TokenSigner(TEST_SIGNING_KEY).issue(NOW)
        assert token.expires_at == NOW + TOKEN_LIFETIME
        assert str(token) == token.value

    def test_deterministic(self) -> None:
        signer = TokenSigner(TEST_SIGNING_KEY)
        assert signer.issue(NOW).value == signer.issue(NOW).value

    def test_different_keys_differ(self) -> None:
        other = "ff" * 32
        assert TokenSigner(TEST_SIGNING_KEY).issue(NOW).value != TokenSigner(other).issue(NOW).value

    def test_valid_within_lifetime(self) -> None:
        signer = TokenSigner(TEST_SIGNING_KEY)
        token = signer.issue(NOW)
        assert token.is_valid(NOW + timedelta(minutes=4))
        assert signer.validate(token.value, NOW + timedelta(minutes=4))

    def test_invalid_after_expiry(self) -> None:
        signer = TokenSigner(TEST_SIGNING_KEY)
        token = signer.issue(NOW)
        assert not token.is_valid(NOW + TOKEN_LIFETIME)
        assert not signer.validate(token.value, NOW + timedelta(minutes=6))

    def test_rejected_by_other_key(self) -> None:
        token = TokenSigner(TEST_SIGNING_KEY).issue(NOW)
        assert not TokenSigner("ff" * 32).validate(token.value, NOW)

    @pytest.mark.parametrize("value", ["", "no-dot", ".sig", "claims.", "ünicode.token"])
    def test_malformed_tokens_rejected(self, value: str) -> None:
        assert not TokenSigner(TEST_SIGNING_KEY).validate(value, NOW)

    def test_tampered_claims_rejected(self) -> None:
        signer = TokenSigner(TEST_SIGNING_KEY)
        _, signature = signer.issue(NOW).value.split(".")
        forged_claims = signer.issue(NOW + timedelta(days=1)).value.split(".")[0]
        assert not signer.validate(f"{forged_claims}.{signature}", NOW)

    def test_missing_key(self) -> None:
        with pytest.raises(ConfigurationError, match="WEBSITE_AUTH_ENCRYPTION_KEY") as exc_info:
            TokenSigner("")
        assert exc_info.value.code == "MISSING_SIGNING_KEY"

    def test_invalid_hex_key(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            TokenSigner("not-hex")
        assert exc_info.value.code == "INVALID_SIGNING_KEY"
