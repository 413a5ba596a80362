"""Sync configuration loaded from environment variables.

The host's app settings are process-wide state. They are read once per
sync by ``SyncConfig.from_env()`` and the resulting immutable value is
injected into every stage, so a change to an app setting takes effect on
the next sync without any stage touching ``os.environ`` itself.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range, before any file is read or request is sent.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from functions_sync.core.constants import (
    ENV_AUTH_ENCRYPTION_KEY,
    ENV_HOST_ID,
    ENV_HTTP_TIMEOUT,
    ENV_SCRIPT_ROOT,
    ENV_SECRET_STORAGE_PATH,
    ENV_SECRET_STORAGE_TYPE,
    ENV_SITE_HOSTNAME,
    ENV_SKIP_SSL_VALIDATION,
)
from functions_sync.core.exceptions import ConfigurationError


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The environment variable that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Immutable per-sync configuration.

    Attributes:
        script_root: Directory holding ``host.json``, ``proxies.json`` and
            one sub-directory per function.
        site_hostname: Host name of the site; the sync target.
        skip_ssl_validation: Post over plain ``http`` (private stamps
            without a certificate).
        auth_encryption_key: Hex-encoded key used to sign the sync token.
        secret_storage_type: Name of the secret provider (``files`` or ``blob``).
        secrets_path: Directory for the ``files`` secret provider.
        host_id: Host identifier used as the blob prefix by the ``blob`` provider.
        http_timeout_s: Timeout for the outbound sync request, in seconds.
    """

    script_root: Path
    site_hostname: str = ""
    skip_ssl_validation: bool = False
    auth_encryption_key: str = ""
    secret_storage_type: str = "files"
    secrets_path: Path | None = None
    host_id: str = ""
    http_timeout_s: float = 30.0

    @property
    def scheme(self) -> str:
        """URL scheme for the sync request."""
        return "http" if self.skip_ssl_validation else "https"

    @property
    def base_url(self) -> str:
        """Public base URL of the site, used in function hrefs."""
        if not self.site_hostname:
            return "http://localhost"
        return f"{self.scheme}://{self.site_hostname}"

    @classmethod
    def from_env(cls) -> SyncConfig:
        """Load and validate configuration from environment variables.

        Only the exact value ``"1"`` enables ``skip_ssl_validation``.

        Raises:
            ConfigValidationError: If a value is malformed or out of range.
        """
        script_root = Path(os.getenv(ENV_SCRIPT_ROOT) or Path.cwd())
        secrets_path = os.getenv(ENV_SECRET_STORAGE_PATH, "")
        raw_timeout = os.getenv(ENV_HTTP_TIMEOUT, "30")
        try:
            http_timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise ConfigValidationError(
                ENV_HTTP_TIMEOUT,
                raw_timeout,
                "must be a number (seconds)",
            ) from exc

        config = cls(
            script_root=script_root,
            site_hostname=os.getenv(ENV_SITE_HOSTNAME, ""),
            skip_ssl_validation=os.getenv(ENV_SKIP_SSL_VALIDATION) == "1",
            auth_encryption_key=os.getenv(ENV_AUTH_ENCRYPTION_KEY, ""),
            secret_storage_type=os.getenv(ENV_SECRET_STORAGE_TYPE, "files").lower(),
            secrets_path=Path(secrets_path) if secrets_path else script_root / ".secrets",
            host_id=os.getenv(ENV_HOST_ID, ""),
            http_timeout_s=http_timeout_s,
        )
        _validate(config)
        return config


def _validate(config: SyncConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            ENV_HTTP_TIMEOUT,
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )

    if not config.secret_storage_type:
        raise ConfigValidationError(
            ENV_SECRET_STORAGE_TYPE,
            config.secret_storage_type,
            "must not be empty",
        )
