"""Sync client — posts the payload to the scale controller.

Builds ``POST {scheme}://{site hostname}/operations/settriggers`` from the
injected ``SyncConfig``, authorises it with a freshly signed site token,
and translates the HTTP outcome into a ``SyncResult``.

A non-2xx status is an expected, retryable outcome and is returned as a
failed ``SyncResult``. Transport failures (DNS, TLS, timeouts) are
``httpx`` exceptions and propagate to the caller. There is no retry here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx

from functions_sync.core.constants import (
    ENV_SITE_HOSTNAME,
    JSON_CONTENT_TYPE,
    SET_TRIGGERS_PATH,
    SITE_TOKEN_HEADER,
    SYNC_USER_AGENT,
)
from functions_sync.core.exceptions import ConfigurationError, TransmissionError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from functions_sync.core.config import SyncConfig
    from functions_sync.sync.token import TokenSigner

logger = logging.getLogger("functions_sync.sync.client")


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one sync.

    Attributes:
        success: Whether the control plane accepted the payload.
        error: Human-readable failure reason; empty on success.
        status_code: HTTP status of the response, if one was received.
    """

    success: bool
    error: str = ""
    status_code: int | None = None

    @classmethod
    def ok(cls, status_code: int | None = None) -> SyncResult:
        return cls(success=True, error="", status_code=status_code)

    @classmethod
    def failed(cls, exc: TransmissionError) -> SyncResult:
        return cls(success=False, error=exc.message, status_code=exc.status_code)

    def __iter__(self) -> Iterator[bool | str]:
        # Allows ``success, error = result``.
        yield self.success
        yield self.error


def build_set_triggers_url(config: SyncConfig) -> str:
    """Return the sync endpoint URL for *config*.

    Raises:
        ConfigurationError: If the site hostname is not configured.
    """
    if not config.site_hostname:
        msg = f"{ENV_SITE_HOSTNAME} is not set; cannot locate the sync endpoint"
        raise ConfigurationError(msg, stage="transmission", code="MISSING_SITE_HOSTNAME")
    return f"{config.scheme}://{config.site_hostname}{SET_TRIGGERS_PATH}"


class SyncClient:
    """Sends serialised sync payloads.

    Args:
        config: Configuration read for this sync.
        signer: Signs the site token sent with the request.
        http_client: Optional shared ``httpx.AsyncClient``. When omitted a
            client is created (and closed) per ``send``.
        clock: Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        config: SyncConfig,
        signer: TokenSigner,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._signer = signer
        self._http_client = http_client
        self._clock = clock or (lambda: datetime.now(UTC))

    def build_request(
        self,
        content: bytes,
        client: httpx.AsyncClient | None = None,
    ) -> httpx.Request:
        """Build the signed ``POST`` request carrying *content*.

        When *client* is given the request picks up its timeout settings.
        """
        token = self._signer.issue(self._clock())
        factory = client.build_request if client is not None else httpx.Request
        return factory(
            "POST",
            build_set_triggers_url(self._config),
            headers={
                "User-Agent": SYNC_USER_AGENT,
                SITE_TOKEN_HEADER: token.value,
                "Content-Type": JSON_CONTENT_TYPE,
            },
            content=content,
        )

    async def send(self, content: bytes) -> SyncResult:
        """Post *content* and report whether the control plane accepted it.

        Raises:
            ConfigurationError: If the endpoint cannot be built.
            httpx.TransportError: On network, TLS or timeout failures.
        """
        if self._http_client is not None:
            return await self._send(self._http_client, content)
        async with httpx.AsyncClient(timeout=self._config.http_timeout_s) as client:
            return await self._send(client, content)

    async def _send(self, client: httpx.AsyncClient, content: bytes) -> SyncResult:
        request = self.build_request(content, client)

        logger.info(
            "Sync triggers request | url=%s | bytes=%d",
            request.url,
            len(content),
        )

        response = await client.send(request)

        if response.is_success:
            logger.info("Sync triggers succeeded | status=%d", response.status_code)
            return SyncResult.ok(response.status_code)

        error = TransmissionError(
            f"Sync triggers failed with: {response.status_code} {response.reason_phrase}".rstrip(),
            status_code=response.status_code,
        )
        logger.warning(
            "Sync triggers rejected | status=%d | error=%s",
            response.status_code,
            error.message,
        )
        return SyncResult.failed(error)
