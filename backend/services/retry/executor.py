"""Retry executor with time-budget awareness.

The retry decision for a failed attempt is computed by :func:`decide_retry`
as an explicit value, so the loop in :func:`with_retry` only acts on it.
"""

import asyncio
import enum
import logging
import math
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import BaseModel

from services.retry.config import MIN_TIME_FOR_RETRY_MS, RetryConfig
from services.retry.errors import (
    TIME_BUDGET_EXHAUSTED,
    MaxRetriesExceededError,
    RetryFailedError,
    RetryMetadata,
    TimeBudgetExhaustedError,
    get_error_code,
    get_retry_after_ms,
    is_transient_error,
)
from services.retry.logger import RetryEvent, log_retry_event
from services.retry.strategy import calculate_delay, delay

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryCallback = Callable[[RetryEvent], None]


class RetryDecisionKind(str, enum.Enum):
    SUCCEEDED = "succeeded"
    RETRY = "retry"
    FATAL = "fatal"


class RetryDecision(BaseModel):
    kind: RetryDecisionKind
    event: RetryEvent
    delay_ms: int = 0
    transient: bool = False
    reason: str | None = None


def decide_success(attempt: int, config: RetryConfig) -> RetryDecision:
    event = RetryEvent(attempt=attempt + 1, max_attempts=config.max_attempts, succeeded=True)
    return RetryDecision(kind=RetryDecisionKind.SUCCEEDED, event=event)


def decide_retry(
    error: BaseException,
    attempt: int,
    config: RetryConfig,
    *,
    elapsed_ms: float = 0,
    time_budget_ms: float | None = None,
) -> RetryDecision:
    """Decide what to do after a failed attempt (``attempt`` is 0-based)."""
    remaining_ms = math.inf if time_budget_ms is None else time_budget_ms - elapsed_ms

    retry_after_ms = get_retry_after_ms(error)
    if retry_after_ms is not None and config.respect_retry_after_header:
        wait_ms = retry_after_ms
    else:
        wait_ms = calculate_delay(attempt, config)

    transient = is_transient_error(error, config.retryable_status_codes)
    attempts_left = attempt < config.max_retries
    has_time_budget = remaining_ms > wait_ms + MIN_TIME_FOR_RETRY_MS
    will_retry = attempts_left and transient and has_time_budget

    reason = None
    if transient and attempts_left and not has_time_budget:
        reason = TIME_BUDGET_EXHAUSTED

    event = RetryEvent(
        attempt=attempt + 1,
        max_attempts=config.max_attempts,
        error=str(error) or type(error).__name__,
        error_code=get_error_code(error),
        delay_ms=wait_ms if will_retry else 0,
        will_retry=will_retry,
        retry_after_ms=retry_after_ms,
    )
    return RetryDecision(
        kind=RetryDecisionKind.RETRY if will_retry else RetryDecisionKind.FATAL,
        event=event,
        delay_ms=wait_ms,
        transient=transient,
        reason=reason,
    )


def enhance_error(
    error: BaseException,
    attempt: int,
    config: RetryConfig,
    decision: RetryDecision,
) -> RetryFailedError:
    """Wrap the final error with attempt metadata."""
    attempts = attempt + 1
    exhausted = decision.reason == TIME_BUDGET_EXHAUSTED or (
        decision.transient and attempt >= config.max_retries
    )
    metadata = RetryMetadata(
        attempts=attempts,
        max_retries=config.max_attempts,
        exhausted_retries=exhausted,
        error_code=decision.reason or get_error_code(error),
        reason=decision.reason,
    )
    plural = "attempt" if attempts == 1 else "attempts"
    message = f"AI request failed after {attempts} {plural}: {error}"

    if decision.reason == TIME_BUDGET_EXHAUSTED:
        return TimeBudgetExhaustedError(message, metadata)
    if exhausted:
        return MaxRetriesExceededError(message, metadata)
    return RetryFailedError(message, metadata)


def _emit(event: RetryEvent, on_event: RetryCallback | None) -> None:
    log_retry_event(event)
    if on_event is not None:
        on_event(event)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    *,
    time_budget_ms: float | None = None,
    on_event: RetryCallback | None = None,
    abort_event: asyncio.Event | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Run ``operation`` until it succeeds, fails fatally, or runs out of attempts/time.

    Raises RetryFailedError (or one of its subclasses) on failure, with the
    last error chained as ``__cause__``. RetryAbortedError propagates if
    ``abort_event`` is set while waiting between attempts.
    """
    config = config or RetryConfig()
    started = clock()
    attempt = 0

    while True:
        try:
            result = await operation()
        except Exception as error:
            elapsed_ms = (clock() - started) * 1000
            decision = decide_retry(
                error,
                attempt,
                config,
                elapsed_ms=elapsed_ms,
                time_budget_ms=time_budget_ms,
            )
            _emit(decision.event, on_event)
            if decision.kind is not RetryDecisionKind.RETRY:
                raise enhance_error(error, attempt, config, decision) from error
            await delay(decision.delay_ms, abort_event)
            attempt += 1
            continue

        _emit(decide_success(attempt, config).event, on_event)
        return result


def create_retry_wrapper(base_config: RetryConfig):
    """Bind ``with_retry`` to a base config; per-call overrides are merged on top."""

    async def wrapper(operation, *, time_budget_ms=None, on_event=None, abort_event=None, **overrides):
        config = base_config.merge(**overrides) if overrides else base_config
        return await with_retry(
            operation,
            config,
            time_budget_ms=time_budget_ms,
            on_event=on_event,
            abort_event=abort_event,
        )

    return wrapper
