"""Tests for shared constants and helper functions."""

from __future__ import annotations

import asyncio
import unittest

import pytest

from functions_sync.core.constants import (
    DURABLE_TRIGGER_TYPES,
    JSON_CONTENT_TYPE,
    SET_TRIGGERS_PATH,
    SITE_TOKEN_HEADER,
    SYNC_USER_AGENT,
)
from functions_sync.utils.helpers import gather_ordered

# ---------------------------------------------------------------------------
# Tests — core.constants
# ---------------------------------------------------------------------------


class TestConstants(unittest.TestCase):
    """Verify the wire constants."""

    def test_wire_values(self) -> None:
        assert SET_TRIGGERS_PATH == "/operations/settriggers"
        assert SYNC_USER_AGENT == "Mozilla/5.0"
        assert SITE_TOKEN_HEADER == "x-ms-site-restricted-token"
        assert JSON_CONTENT_TYPE.startswith("application/json")

    def test_durable_trigger_types_are_lowercase(self) -> None:
        assert {"orchestrationtrigger", "activitytrigger"} == set(DURABLE_TRIGGER_TYPES)


# ---------------------------------------------------------------------------
# Tests — utils.helpers.gather_ordered
# ---------------------------------------------------------------------------


async def _after(delay: float, value: int) -> int:
    await asyncio.sleep(delay)
    return value


class TestGatherOrdered:
    @pytest.mark.asyncio()
    async def test_results_keep_input_order(self) -> None:
        results = await gather_ordered([_after(0.03, 1), _after(0, 2), _after(0.01, 3)])
        assert results == [1, 2, 3]

    @pytest.mark.asyncio()
    async def test_empty(self) -> None:
        assert await gather_ordered([]) == []

    @pytest.mark.asyncio()
    async def test_first_error_cancels_the_rest(self) -> None:
        cancelled = asyncio.Event()

        async def slow() -> int:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return 0

        async def failing() -> int:
            await asyncio.sleep(0)
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await gather_ordered([slow(), failing()])
        assert cancelled.is_set()

    @pytest.mark.asyncio()
    async def test_caller_cancellation_propagates(self) -> None:
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow() -> None:
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        task = asyncio.ensure_future(gather_ordered([slow()]))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert cancelled.is_set()
