"""Azure Blob Storage secret store.

Reads the host's secret documents from the ``azure-webjobs-secrets``
container, under a ``<host id>/`` prefix, using the storage account in
``AzureWebJobsStorage``.

The blob SDK client is synchronous; downloads run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING

from functions_sync.core.constants import ENV_STORAGE_CONNECTION
from functions_sync.providers._documents import (
    HOST_SECRETS_DOCUMENT,
    function_secrets_document,
    parse_function_secrets,
    parse_host_secrets,
)
from functions_sync.providers.base import SecretProvider, SecretProviderError

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

    from functions_sync.models.secrets import HostSecretsInfo

logger = logging.getLogger(__name__)

SECRETS_CONTAINER: str = "azure-webjobs-secrets"


class BlobSecretProvider(SecretProvider):
    """Secret provider reading JSON documents from Blob Storage."""

    name = "blob"

    def __init__(
        self,
        host_id: str,
        *,
        blob_service_client: BlobServiceClient | None = None,
        container: str = SECRETS_CONTAINER,
    ) -> None:
        if not host_id:
            msg = "host id is required to locate secrets in blob storage"
            raise SecretProviderError(self.name, msg)
        self._host_id = host_id
        self._container = container
        self._client = blob_service_client

    async def get_host_secrets(self) -> HostSecretsInfo:
        text = await asyncio.to_thread(self._download, HOST_SECRETS_DOCUMENT)
        return parse_host_secrets(self.name, text)

    async def get_function_secrets(self, function_name: str) -> dict[str, str]:
        text = await asyncio.to_thread(self._download, function_secrets_document(function_name))
        return parse_function_secrets(self.name, function_name, text)

    def _service_client(self) -> BlobServiceClient:
        if self._client is None:
            from azure.storage.blob import BlobServiceClient

            connection_string = os.environ.get(ENV_STORAGE_CONNECTION, "")
            if not connection_string:
                msg = f"{ENV_STORAGE_CONNECTION} environment variable is not set"
                raise SecretProviderError(self.name, msg)
            self._client = BlobServiceClient.from_connection_string(connection_string)
        return self._client

    def _download(self, document_name: str) -> str | None:
        from azure.core.exceptions import AzureError, ResourceNotFoundError

        blob_name = f"{self._host_id}/{document_name}"
        blob_client = self._service_client().get_blob_client(
            container=self._container,
            blob=blob_name,
        )
        try:
            return blob_client.download_blob(encoding="utf-8").readall()
        except ResourceNotFoundError:
            logger.debug("Secrets blob not found | blob=%s", blob_name)
            return None
        except AzureError as exc:
            msg = f"Failed to download {self._container}/{blob_name}: {exc}"
            raise SecretProviderError(self.name, msg, retryable=True) from exc
