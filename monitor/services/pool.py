"""
Bounded-concurrency runner for fetch coroutines.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_CONCURRENCY = 5


async def run_pool(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[T]:
    """
    Run zero-argument coroutine factories, at most ``concurrency`` at a time.

    Results come back in input order. Factories are expected to handle their
    own failures; an exception here propagates and cancels the rest.
    """
    if not tasks:
        return []

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run_one(factory: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await factory()

    return list(await asyncio.gather(*(run_one(factory) for factory in tasks)))
