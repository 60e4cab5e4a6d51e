"""
Delay utility.

Injectable async delays used by the fallback AI providers to emulate
model latency. Tests pass `no_delay` to run without real timers.
"""

import asyncio
import random
from typing import Awaitable, Callable

Delay = Callable[[], Awaitable[None]]


def random_delay(min_seconds: float, max_seconds: float) -> Delay:
    """
    Build a delay that sleeps for a uniform random duration.

    Args:
        min_seconds: Lower bound of the sleep
        max_seconds: Upper bound of the sleep

    Raises:
        ValueError: If the bounds are negative or inverted
    """
    if min_seconds < 0 or max_seconds < min_seconds:
        raise ValueError(f"Invalid delay range: {min_seconds}-{max_seconds}")

    async def _sleep() -> None:
        await asyncio.sleep(random.uniform(min_seconds, max_seconds))

    return _sleep


async def no_delay() -> None:
    """Yield to the event loop once without sleeping."""
    await asyncio.sleep(0)
