"""Secret store adapters.

Implements the store-agnostic adapter pattern:
- SecretProvider: Abstract base class defining the interface
- FileSecretProvider: JSON documents in a local directory
- BlobSecretProvider: JSON documents in Azure Blob Storage
- InMemorySecretProvider: Plain dicts, for local runs and tests

The active store is selected via configuration.
"""

from functions_sync.providers.base import (
    InMemorySecretProvider,
    SecretProvider,
    SecretProviderError,
)
from functions_sync.providers.factory import (
    BLOB,
    FILES,
    get_secret_provider,
    list_secret_providers,
    register_secret_provider,
)

__all__ = [
    "BLOB",
    "FILES",
    "InMemorySecretProvider",
    "SecretProvider",
    "SecretProviderError",
    "get_secret_provider",
    "list_secret_providers",
    "register_secret_provider",
]
