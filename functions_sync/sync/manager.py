"""Sync triggers manager — the top-level sync operation.

One sync runs as:

1. Read ``SyncConfig`` from the environment (fresh on every call).
2. Discover the function descriptors under the script root.
3. Concurrently:
   - read the durable-task config from ``host.json``;
   - aggregate trigger records and function responses;
   - collect host and HTTP function secrets.
4. Build the ``SyncPayload`` and post it with a freshly signed token.

Any ``ConfigurationError`` or ``AggregationError`` aborts the sync before a
request is sent. Cancelling the awaiting task, or hitting ``timeout``,
cancels every in-flight stage.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from functions_sync.core.config import SyncConfig
from functions_sync.core.exceptions import ConfigurationError
from functions_sync.core.host_json import get_route_prefix, log_host_origin, read_durable_config
from functions_sync.providers.base import SecretProviderError
from functions_sync.providers.factory import get_secret_provider
from functions_sync.sync.client import SyncClient, SyncResult
from functions_sync.sync.discovery import discover_functions
from functions_sync.sync.metadata import MetadataContext, aggregate_metadata
from functions_sync.sync.payload import build_payload
from functions_sync.sync.secrets import SecretsAggregator
from functions_sync.sync.token import TokenSigner
from functions_sync.utils.helpers import gather_ordered

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    import httpx

    from functions_sync.models.descriptor import FunctionDescriptor
    from functions_sync.models.payload import SyncPayload
    from functions_sync.providers.base import SecretProvider

logger = logging.getLogger("functions_sync.sync.manager")


class FunctionsSyncManager:
    """Builds and sends the sync triggers payload.

    Args:
        secret_provider: Source of host and function secrets. When omitted
            the provider named by ``SyncConfig.secret_storage_type`` is used.
        config_factory: Returns the configuration for one sync.
        descriptor_loader: Returns the function descriptors under a script root.
        http_client: Optional shared ``httpx.AsyncClient`` for the sync request.
        clock: Returns the current UTC time; used to sign the token.
    """

    def __init__(
        self,
        secret_provider: SecretProvider | None = None,
        *,
        config_factory: Callable[[], SyncConfig] = SyncConfig.from_env,
        descriptor_loader: Callable[[Path], list[FunctionDescriptor]] = discover_functions,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._secret_provider = secret_provider
        self._config_factory = config_factory
        self._descriptor_loader = descriptor_loader
        self._http_client = http_client
        self._clock = clock or (lambda: datetime.now(UTC))

    async def get_sync_triggers_payload(self) -> SyncPayload:
        """Aggregate the host's triggers, functions and secrets.

        Raises:
            ConfigurationError: If ``host.json`` or the environment is invalid.
            AggregationError: If metadata or secrets cannot be aggregated.
        """
        config = self._config_factory()
        return await self._build_payload(config)

    async def try_sync_triggers(self, *, timeout: float | None = None) -> SyncResult:
        """Run one full sync.

        Args:
            timeout: Overall deadline in seconds; ``None`` waits indefinitely.

        Returns:
            The ``SyncResult`` of the request.

        Raises:
            ConfigurationError: Before any request, on invalid configuration.
            AggregationError: Before any request, on aggregation failure.
            httpx.TransportError: If the request could not be delivered.
            TimeoutError: If *timeout* elapses.
        """
        async with asyncio.timeout(timeout):
            config = self._config_factory()
            signer = TokenSigner(config.auth_encryption_key)

            logger.info(
                "Sync triggers started | root=%s | host=%s",
                config.script_root,
                config.site_hostname,
            )

            payload = await self._build_payload(config)
            client = SyncClient(config, signer, http_client=self._http_client, clock=self._clock)
            result = await client.send(payload.to_bytes())

        logger.info(
            "Sync triggers completed | success=%s | status=%s | triggers=%d",
            result.success,
            result.status_code,
            len(payload.triggers),
        )
        return result

    async def _build_payload(self, config: SyncConfig) -> SyncPayload:
        root = config.script_root
        descriptors = await asyncio.to_thread(self._descriptor_loader, root)

        route_prefix = await asyncio.to_thread(get_route_prefix, root)
        await asyncio.to_thread(log_host_origin, root)

        context = MetadataContext(
            script_root=root,
            route_prefix=route_prefix,
            base_url=config.base_url,
        )
        secrets = SecretsAggregator(self._provider_for(config))

        durable_config, metadata, collected = await gather_ordered(
            [
                asyncio.to_thread(read_durable_config, root),
                aggregate_metadata(descriptors, context),
                secrets.collect(descriptors),
            ]
        )

        payload = build_payload(metadata, durable_config, collected.host, collected.functions)
        logger.info(
            "Sync payload built | triggers=%d | functions=%d | function_secrets=%d",
            len(payload.triggers),
            len(payload.functions),
            len(payload.secrets.function),
        )
        return payload

    def _provider_for(self, config: SyncConfig) -> SecretProvider:
        if self._secret_provider is not None:
            return self._secret_provider
        try:
            return get_secret_provider(config.secret_storage_type, config)
        except SecretProviderError as exc:
            msg = f"Secret store {config.secret_storage_type!r} cannot be used: {exc}"
            raise ConfigurationError(msg, stage="secrets", code="INVALID_SECRET_STORE") from exc
