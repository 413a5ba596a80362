"""Provider factory — selects the secret store by name.

The factory maintains a registry of known stores. New stores are
registered by adding an entry to ``_PROVIDER_REGISTRY`` or by calling
``register_secret_provider``.

Usage::

    from functions_sync.providers.factory import get_secret_provider

    provider = get_secret_provider(config.secret_storage_type, config)
    host = await provider.get_host_secrets()

The store name is read from the ``AzureWebJobsSecretStorageType`` app
setting via ``SyncConfig.secret_storage_type``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from functions_sync.providers.base import SecretProvider, SecretProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

    from functions_sync.core.config import SyncConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Store name constants
# ---------------------------------------------------------------------------

FILES = "files"
BLOB = "blob"

# ---------------------------------------------------------------------------
# Lazy-import provider registry
# ---------------------------------------------------------------------------

# Each entry maps a store name to a callable that builds the provider from
# the sync configuration. Imports are deferred so the Blob Storage SDK is
# only loaded when that store is selected.

_PROVIDER_REGISTRY: dict[str, Callable[[SyncConfig], SecretProvider]] = {}


def _register_builtin_providers() -> None:
    """Register the built-in secret stores."""

    def _files(config: SyncConfig) -> SecretProvider:
        from functions_sync.providers.file_store import FileSecretProvider

        return FileSecretProvider(config.secrets_path or config.script_root / ".secrets")

    def _blob(config: SyncConfig) -> SecretProvider:
        from functions_sync.providers.blob_store import BlobSecretProvider

        return BlobSecretProvider(config.host_id)

    _PROVIDER_REGISTRY[FILES] = _files
    _PROVIDER_REGISTRY[BLOB] = _blob


def _ensure_registry() -> None:
    """Initialise the provider registry once (idempotent)."""
    if not _PROVIDER_REGISTRY:
        _register_builtin_providers()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_secret_provider(
    name: str,
    builder: Callable[[SyncConfig], SecretProvider],
) -> None:
    """Register a custom secret store.

    Args:
        name: Store name (e.g. ``"keyvault"``).
        builder: A callable building the provider from a ``SyncConfig``.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Secret provider name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _PROVIDER_REGISTRY[name.lower()] = builder
    logger.debug("Registered secret provider: %s", name)


def get_secret_provider(name: str, config: SyncConfig) -> SecretProvider:
    """Create and return a secret provider instance.

    Args:
        name: Store name (e.g. ``"files"``, ``"blob"``); case-insensitive.
        config: Sync configuration the store reads its location from.

    Raises:
        SecretProviderError: If the named store is not registered.
    """
    _ensure_registry()

    builder = _PROVIDER_REGISTRY.get(name.lower())
    if builder is None:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        msg = f"Unknown secret provider: {name!r}. Available: {available}"
        raise SecretProviderError(provider=name, message=msg)

    logger.info("Creating secret provider: %s", name)
    return builder(config)


def list_secret_providers() -> list[str]:
    """Return the names of all registered secret stores."""
    _ensure_registry()
    return sorted(_PROVIDER_REGISTRY)
