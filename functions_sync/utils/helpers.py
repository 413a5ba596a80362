"""Shared helper functions used across the sync stages."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

T = TypeVar("T")


async def gather_ordered(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in input order.

    Unlike a bare ``asyncio.gather``, the first failure cancels every
    still-running awaitable before it is re-raised, so no work outlives a
    failed stage. Cancelling the caller cancels them all as well.

    Args:
        aws: Coroutines or futures to run.

    Returns:
        Results in the order the awaitables were given, regardless of
        completion order.
    """
    tasks: list[asyncio.Future[Any]] = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
