"""SecretProvider abstract base class.

Defines the contract every secret store adapter must implement. The
secrets aggregator interacts exclusively with this interface; it never
knows which store is behind it.

Both operations are coroutines so that a store doing network or disk I/O
yields to the event loop, and a cancelled sync stops waiting on it.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from functions_sync.core.exceptions import SyncError

if TYPE_CHECKING:
    from functions_sync.models.secrets import HostSecretsInfo


class SecretProvider(abc.ABC):
    """Abstract base class for secret store adapters.

    Example usage::

        provider = get_secret_provider("files", config)
        host = await provider.get_host_secrets()
        keys = await provider.get_function_secrets("HttpTrigger1")
    """

    #: Registry name of the adapter (e.g. ``"files"``).
    name: str = ""

    @abc.abstractmethod
    async def get_host_secrets(self) -> HostSecretsInfo:
        """Return the host master key, host function keys and system keys.

        Raises:
            SecretProviderError: If the store cannot be read.
        """

    @abc.abstractmethod
    async def get_function_secrets(self, function_name: str) -> dict[str, str]:
        """Return the keys of one function, by key name.

        Returns:
            An empty dict if the function has no keys.

        Raises:
            SecretProviderError: If the store cannot be read.
        """


class InMemorySecretProvider(SecretProvider):
    """Secret provider backed by plain dicts.

    Used for local runs and tests where no secret store is configured.
    """

    name = "memory"

    def __init__(
        self,
        host_secrets: HostSecretsInfo | None = None,
        function_secrets: dict[str, dict[str, str]] | None = None,
    ) -> None:
        from functions_sync.models.secrets import HostSecretsInfo

        self._host_secrets = host_secrets or HostSecretsInfo()
        self._function_secrets = {
            name.lower(): dict(keys) for name, keys in (function_secrets or {}).items()
        }

    async def get_host_secrets(self) -> HostSecretsInfo:
        return self._host_secrets

    async def get_function_secrets(self, function_name: str) -> dict[str, str]:
        return dict(self._function_secrets.get(function_name.lower(), {}))


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class SecretProviderError(SyncError):
    """Base exception for secret store errors.

    Attributes:
        provider: Name of the provider that raised the error.
    """

    default_stage = "secrets"
    default_code = "SECRET_PROVIDER_ERROR"

    def __init__(self, provider: str, message: str, *, retryable: bool = False) -> None:
        self.provider = provider
        super().__init__(message, retryable=retryable)

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"
