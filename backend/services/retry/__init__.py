"""Retry with exponential backoff, transient error classification and time budgets."""

from services.retry.config import MIN_TIME_FOR_RETRY_MS, RetryConfig
from services.retry.errors import (
    TIME_BUDGET_EXHAUSTED,
    MaxRetriesExceededError,
    RetryAbortedError,
    RetryFailedError,
    RetryMetadata,
    TimeBudgetExhaustedError,
    get_error_code,
    get_retry_after_ms,
    get_user_friendly_message,
    is_transient_error,
)
from services.retry.executor import (
    RetryDecision,
    RetryDecisionKind,
    create_retry_wrapper,
    decide_retry,
    with_retry,
)
from services.retry.logger import RetryEvent
from services.retry.strategy import calculate_base_delay, calculate_delay, delay

__all__ = [
    "MIN_TIME_FOR_RETRY_MS",
    "RetryConfig",
    "TIME_BUDGET_EXHAUSTED",
    "MaxRetriesExceededError",
    "RetryAbortedError",
    "RetryFailedError",
    "RetryMetadata",
    "TimeBudgetExhaustedError",
    "get_error_code",
    "get_retry_after_ms",
    "get_user_friendly_message",
    "is_transient_error",
    "RetryDecision",
    "RetryDecisionKind",
    "create_retry_wrapper",
    "decide_retry",
    "with_retry",
    "RetryEvent",
    "calculate_base_delay",
    "calculate_delay",
    "delay",
]
