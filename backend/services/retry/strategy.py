"""Exponential backoff with jitter, and a cancellable wait."""

import asyncio
import random
from collections.abc import Callable

from services.retry.config import RetryConfig
from services.retry.errors import RetryAbortedError


def calculate_base_delay(attempt: int, config: RetryConfig) -> float:
    """Capped exponential delay for a 0-based attempt index, without jitter."""
    exponential = config.initial_delay_ms * (config.backoff_multiplier ** attempt)
    return min(config.max_delay_ms, exponential)


def calculate_delay(
    attempt: int,
    config: RetryConfig,
    rand: Callable[[], float] = random.random,
) -> int:
    """Delay in ms before the next attempt.

    Jitter is proportional to the capped delay, so the result never exceeds
    ``max_delay_ms * (1 + jitter_factor)``.
    """
    capped = calculate_base_delay(attempt, config)
    jitter = capped * config.jitter_factor * rand()
    return round(capped + jitter)


async def delay(ms: float, abort_event: asyncio.Event | None = None) -> None:
    """Sleep for ``ms`` milliseconds, or raise RetryAbortedError as soon as aborted."""
    if abort_event is None:
        await asyncio.sleep(ms / 1000)
        return

    if abort_event.is_set():
        raise RetryAbortedError("Request cancelled")

    try:
        await asyncio.wait_for(abort_event.wait(), timeout=ms / 1000)
    except asyncio.TimeoutError:
        return
    raise RetryAbortedError("Request cancelled")
