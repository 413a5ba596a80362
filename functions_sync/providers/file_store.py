"""File-system secret store.

Reads the host's secret documents from a local directory (by default
``<script root>/.secrets``). Reads run in a worker thread so the event
loop keeps servicing the other sync stages.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from functions_sync.providers._documents import (
    HOST_SECRETS_DOCUMENT,
    function_secrets_document,
    parse_function_secrets,
    parse_host_secrets,
)
from functions_sync.providers.base import SecretProvider, SecretProviderError

if TYPE_CHECKING:
    from pathlib import Path

    from functions_sync.models.secrets import HostSecretsInfo

logger = logging.getLogger(__name__)


class FileSecretProvider(SecretProvider):
    """Secret provider reading JSON documents from *secrets_path*."""

    name = "files"

    def __init__(self, secrets_path: Path) -> None:
        self._secrets_path = secrets_path

    @property
    def secrets_path(self) -> Path:
        return self._secrets_path

    async def get_host_secrets(self) -> HostSecretsInfo:
        text = await asyncio.to_thread(self._read, HOST_SECRETS_DOCUMENT)
        return parse_host_secrets(self.name, text)

    async def get_function_secrets(self, function_name: str) -> dict[str, str]:
        text = await asyncio.to_thread(self._read, function_secrets_document(function_name))
        return parse_function_secrets(self.name, function_name, text)

    def _read(self, document_name: str) -> str | None:
        path = self._secrets_path / document_name
        if not path.is_file():
            logger.debug("Secrets document not found | path=%s", path)
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to read {path}: {exc}"
            raise SecretProviderError(self.name, msg, retryable=True) from exc
