"""Structured logging of retry events."""

import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class RetryEvent(BaseModel):
    """One attempt outcome, emitted to the log and the caller's callback."""
    attempt: int  # 1-based
    max_attempts: int
    succeeded: bool = False
    error: str | None = None  # error message
    error_code: str | None = None
    delay_ms: int = 0
    will_retry: bool = False
    retry_after_ms: int | None = None


def retry_log_level(event: RetryEvent) -> int:
    if event.succeeded:
        return logging.INFO if event.attempt > 1 else logging.DEBUG
    if not event.will_retry:
        return logging.ERROR
    if event.attempt >= 2:
        return logging.WARNING
    return logging.INFO


def format_retry_event(event: RetryEvent) -> str:
    if event.succeeded:
        return f"[AI Retry] Attempt {event.attempt}/{event.max_attempts} succeeded"
    if event.will_retry:
        return (
            f"[AI Retry] Attempt {event.attempt}/{event.max_attempts} failed "
            f"({event.error_code}), retrying in {event.delay_ms}ms"
        )
    if event.attempt >= event.max_attempts:
        return (
            f"[AI Retry] All {event.max_attempts} attempts exhausted "
            f"({event.error_code}): {event.error}"
        )
    return (
        f"[AI Retry] Attempt {event.attempt}/{event.max_attempts} failed "
        f"({event.error_code}), not retrying: {event.error}"
    )


def log_retry_event(event: RetryEvent) -> None:
    logger.log(retry_log_level(event), "%s", format_retry_event(event))
