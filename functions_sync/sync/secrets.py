"""Secrets aggregation of host keys plus the keys of every HTTP function.

Only functions the scale controller may route HTTP traffic to carry
function keys in the payload: non-proxy functions with an
``httpTrigger`` binding. A failed fetch for any one function aborts the
whole sync.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from functions_sync.core.exceptions import AggregationError
from functions_sync.models.payload import FunctionSecretsEntry
from functions_sync.models.secrets import HostSecretsInfo
from functions_sync.utils.helpers import gather_ordered

if TYPE_CHECKING:
    from collections.abc import Iterable

    from functions_sync.models.descriptor import FunctionDescriptor
    from functions_sync.providers.base import SecretProvider

logger = logging.getLogger("functions_sync.sync.secrets")


@dataclass(slots=True)
class AggregatedSecrets:
    """Output of ``SecretsAggregator.collect``."""

    host: HostSecretsInfo = field(default_factory=HostSecretsInfo)
    functions: list[FunctionSecretsEntry] = field(default_factory=list)


def http_function_names(descriptors: Iterable[FunctionDescriptor]) -> list[str]:
    """Names of the non-proxy, HTTP-triggered functions, in input order."""
    return [d.name for d in descriptors if d.is_http_triggered]


class SecretsAggregator:
    """Fetches host and per-function secrets from a ``SecretProvider``."""

    def __init__(self, provider: SecretProvider) -> None:
        self._provider = provider

    async def fetch_host_secrets(self) -> HostSecretsInfo:
        try:
            return await self._provider.get_host_secrets()
        except Exception as exc:
            msg = f"Failed to fetch host secrets: {exc}"
            raise AggregationError(msg, stage="secrets", code="HOST_SECRETS_FAILED") from exc

    async def fetch_function_secrets(self, function_name: str) -> dict[str, str]:
        try:
            return await self._provider.get_function_secrets(function_name)
        except Exception as exc:
            msg = f"Failed to fetch secrets for function {function_name!r}: {exc}"
            raise AggregationError(msg, stage="secrets", code="FUNCTION_SECRETS_FAILED") from exc

    async def collect(self, descriptors: Iterable[FunctionDescriptor]) -> AggregatedSecrets:
        """Fetch host secrets and the secrets of every HTTP function concurrently.

        Raises:
            AggregationError: If any fetch fails; the others are cancelled.
        """
        names = http_function_names(descriptors)

        host, *function_secrets = await gather_ordered(
            [self.fetch_host_secrets(), *(self.fetch_function_secrets(n) for n in names)]
        )

        logger.info("Secrets collected | http_functions=%d", len(names))
        return AggregatedSecrets(
            host=host,
            functions=[
                FunctionSecretsEntry(name=name, secrets=secrets)
                for name, secrets in zip(names, function_secrets, strict=True)
            ],
        )
