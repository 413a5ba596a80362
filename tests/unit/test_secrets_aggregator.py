"""Tests for secrets aggregation.

Verifies that only non-proxy HTTP-triggered functions are queried, that
results keep descriptor order, and that any provider failure fails the
whole collection.
"""

from __future__ import annotations

import asyncio

import pytest
from helpers import http_binding, queue_binding

from functions_sync.core.exceptions import AggregationError
from functions_sync.models.descriptor import BindingMetadata, FunctionDescriptor
from functions_sync.models.secrets import HostSecretsInfo
from functions_sync.providers.base import InMemorySecretProvider, SecretProvider, SecretProviderError
from functions_sync.sync.secrets import SecretsAggregator, http_function_names


def _descriptor(name: str, binding: dict[str, object], *, is_proxy: bool = False) -> FunctionDescriptor:
    return FunctionDescriptor(name=name, bindings=(BindingMetadata.from_dict(binding),), is_proxy=is_proxy)


DESCRIPTORS = [
    _descriptor("HttpB", http_binding()),
    _descriptor("Queue", queue_binding("queueTrigger")),
    _descriptor("HttpA", {"type": "HTTPTRIGGER", "direction": "in", "name": "req"}),
    _descriptor("proxy1", http_binding(), is_proxy=True),
]


class _RecordingProvider(SecretProvider):
    """Returns one key per function and records every function queried."""

    name = "recording"

    def __init__(self, *, fail_for: str = "") -> None:
        self.queried: list[str] = []
        self._fail_for = fail_for

    async def get_host_secrets(self) -> HostSecretsInfo:
        return HostSecretsInfo(master_key="master", function_keys={"default": "hostkey"})

    async def get_function_secrets(self, function_name: str) -> dict[str, str]:
        self.queried.append(function_name)
        # Later functions answer first; results must still keep input order.
        await asyncio.sleep(0.01 if function_name == "HttpB" else 0)
        if function_name == self._fail_for:
            raise SecretProviderError(self.name, "store unavailable", retryable=True)
        return {"default": f"{function_name}-key"}


class TestHttpFunctionNames:
    def test_filters_and_keeps_order(self) -> None:
        assert http_function_names(DESCRIPTORS) == ["HttpB", "HttpA"]


class TestSecretsAggregator:
    @pytest.mark.asyncio()
    async def test_collect(self) -> None:
        provider = _RecordingProvider()
        result = await SecretsAggregator(provider).collect(DESCRIPTORS)

        assert sorted(provider.queried) == ["HttpA", "HttpB"]
        assert result.host.master_key == "master"
        assert [(e.name, e.secrets) for e in result.functions] == [
            ("HttpB", {"default": "HttpB-key"}),
            ("HttpA", {"default": "HttpA-key"}),
        ]

    @pytest.mark.asyncio()
    async def test_no_http_functions(self) -> None:
        provider = _RecordingProvider()
        result = await SecretsAggregator(provider).collect([DESCRIPTORS[1], DESCRIPTORS[3]])
        assert provider.queried == []
        assert result.functions == []
        assert result.host.function_keys == {"default": "hostkey"}

    @pytest.mark.asyncio()
    async def test_function_failure_fails_collection(self) -> None:
        aggregator = SecretsAggregator(_RecordingProvider(fail_for="HttpA"))
        with pytest.raises(AggregationError, match="'HttpA'") as exc_info:
            await aggregator.collect(DESCRIPTORS)
        assert exc_info.value.code == "FUNCTION_SECRETS_FAILED"
        assert isinstance(exc_info.value.__cause__, SecretProviderError)

    @pytest.mark.asyncio()
    async def test_host_failure_fails_collection(self) -> None:
        class _Broken(InMemorySecretProvider):
            async def get_host_secrets(self) -> HostSecretsInfo:
                raise SecretProviderError("broken", "no host keys")

        with pytest.raises(AggregationError) as exc_info:
            await SecretsAggregator(_Broken()).collect(DESCRIPTORS)
        assert exc_info.value.code == "HOST_SECRETS_FAILED"

    @pytest.mark.asyncio()
    async def test_missing_function_secrets_are_empty(self) -> None:
        provider = InMemorySecretProvider(function_secrets={"httpa": {"default": "a"}})
        result = await SecretsAggregator(provider).collect(DESCRIPTORS)
        assert [(e.name, e.secrets) for e in result.functions] == [
            ("HttpB", {}),
            ("HttpA", {"default": "a"}),
        ]

    @pytest.mark.asyncio()
    async def test_unexpected_function_error_is_wrapped(self) -> None:
        class _Unreachable(InMemorySecretProvider):
            async def get_function_secrets(self, function_name: str) -> dict[str, str]:
                raise ConnectionError("vault down")

        with pytest.raises(AggregationError, match="vault down") as exc_info:
            await SecretsAggregator(_Unreachable()).collect(DESCRIPTORS)
        assert exc_info.value.code == "FUNCTION_SECRETS_FAILED"
        assert exc_info.value.stage == "secrets"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio()
    async def test_unexpected_host_error_is_wrapped(self) -> None:
        class _BadConnectionString(InMemorySecretProvider):
            async def get_host_secrets(self) -> HostSecretsInfo:
                raise ValueError("Connection string is either blank or malformed.")

        with pytest.raises(AggregationError) as exc_info:
            await SecretsAggregator(_BadConnectionString()).collect(DESCRIPTORS)
        assert exc_info.value.code == "HOST_SECRETS_FAILED"
        assert isinstance(exc_info.value.__cause__, ValueError)
