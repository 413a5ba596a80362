"""Short-lived site token authorising a sync call.

The token is ``<claims>.<signature>`` where ``claims`` is the URL-safe
base64 of ``exp=<unix seconds>`` and ``signature`` is the URL-safe base64
HMAC-SHA256 of the claims under the site's auth encryption key. The same
expiry and key always yield the same token; validity is purely time
bounded and single use is not enforced.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from functions_sync.core.constants import ENV_AUTH_ENCRYPTION_KEY, TOKEN_LIFETIME_MINUTES
from functions_sync.core.exceptions import ConfigurationError

TOKEN_LIFETIME = timedelta(minutes=TOKEN_LIFETIME_MINUTES)


@dataclass(frozen=True, slots=True)
class SyncToken:
    """A signed bearer credential with an embedded expiry."""

    value: str
    expires_at: datetime

    def is_valid(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) < self.expires_at

    def __str__(self) -> str:
        return self.value


class TokenSigner:
    """Signs and validates sync tokens with the site's auth encryption key.

    Args:
        key_hex: Hex-encoded key (``WEBSITE_AUTH_ENCRYPTION_KEY``).

    Raises:
        ConfigurationError: If the key is missing or not valid hex.
    """

    def __init__(self, key_hex: str) -> None:
        if not key_hex:
            msg = f"{ENV_AUTH_ENCRYPTION_KEY} is not set; cannot sign sync token"
            raise ConfigurationError(msg, stage="token", code="MISSING_SIGNING_KEY")
        try:
            self._key = bytes.fromhex(key_hex)
        except ValueError as exc:
            msg = f"{ENV_AUTH_ENCRYPTION_KEY} is not a valid hex string"
            raise ConfigurationError(msg, stage="token", code="INVALID_SIGNING_KEY") from exc

    def sign(self, expires_at: datetime) -> SyncToken:
        """Return a token valid until *expires_at* (second precision)."""
        claims = _b64encode(f"exp={int(expires_at.timestamp())}".encode("ascii"))
        return SyncToken(
            value=f"{claims}.{self._signature(claims)}",
            expires_at=datetime.fromtimestamp(int(expires_at.timestamp()), tz=UTC),
        )

    def issue(self, now: datetime | None = None) -> SyncToken:
        """Return a token valid for the standard lifetime from *now*."""
        return self.sign((now or datetime.now(UTC)) + TOKEN_LIFETIME)

    def validate(self, token: str, now: datetime | None = None) -> bool:
        """Check the signature of *token* and that it has not expired."""
        if not token.isascii():
            return False
        claims, _, signature = token.partition(".")
        if not claims or not signature:
            return False
        if not hmac.compare_digest(signature, self._signature(claims)):
            return False

        try:
            name, _, value = _b64decode(claims).decode("ascii").partition("=")
            expires = datetime.fromtimestamp(int(value), tz=UTC)
        except (binascii.Error, UnicodeDecodeError, ValueError, OverflowError):
            return False
        return name == "exp" and (now or datetime.now(UTC)) < expires

    def _signature(self, claims: str) -> str:
        digest = hmac.new(self._key, claims.encode("ascii"), hashlib.sha256).digest()
        return _b64encode(digest)


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
