"""Transient error classification and retry failure types.

The classifier only relies on a small, vendor-neutral shape: an HTTP-like
``status`` (or ``status_code``/``code``) integer, an ``error_type`` tag and an
optional ``headers`` mapping carrying ``retry-after``.
"""

import asyncio
import errno
import re
import socket
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx
from pydantic import BaseModel

TIME_BUDGET_EXHAUSTED = "TIME_BUDGET_EXHAUSTED"

TRANSIENT_ERROR_TYPES = frozenset({
    "overloaded_error",
    "rate_limit_error",
    "internal_error",
    "api_error",
    # Google RPC status names
    "RESOURCE_EXHAUSTED",
    "UNAVAILABLE",
    "INTERNAL",
    "DEADLINE_EXCEEDED",
})

NETWORK_ERROR_CODES = frozenset({
    "ECONNRESET",
    "ETIMEDOUT",
    "ENOTFOUND",
    "ECONNREFUSED",
    "EPIPE",
    "EHOSTUNREACH",
})

_NETWORK_ERRNOS = frozenset({
    errno.ECONNRESET,
    errno.ETIMEDOUT,
    errno.ECONNREFUSED,
    errno.EPIPE,
    errno.EHOSTUNREACH,
})

_NETWORK_EXCEPTIONS = (
    ConnectionResetError,
    ConnectionRefusedError,
    BrokenPipeError,
    socket.gaierror,
    httpx.NetworkError,
)

_TIMEOUT_EXCEPTIONS = (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)

_TRANSIENT_MESSAGE_PATTERNS = ("timeout", "econnreset", "socket hang up", "network")

_NEVER_RETRY_STATUSES = frozenset({400, 401, 403})
_RETRY_AFTER_SECONDS_RE = re.compile(r"(\d+)(?:\.\d*)?$")

_USER_MESSAGES = {
    "RATE_LIMIT": "The AI service is receiving too many requests. Please wait a moment and try again.",
    "SERVICE_OVERLOADED": "The AI service is temporarily overloaded. Please try again in a few minutes.",
    "SERVER_ERROR": "The AI service encountered an error. Please try again.",
    "AUTH_ERROR": "AI service authentication failed. Please contact support.",
    "BAD_REQUEST": "The request to the AI service was invalid. Please check your input.",
    "TIMEOUT": "The AI request timed out. Please try again.",
    "TIME_BUDGET_EXHAUSTED": "The analysis took too long to complete. Please try again.",
    "MAX_RETRIES_EXCEEDED": "The AI service is unavailable after several attempts. Please try again later.",
    "NETWORK_ERROR": "Could not reach the AI service. Please check your connection and try again.",
    "ABORTED": "The request was cancelled.",
    "AI_NOT_CONFIGURED": "AI features are not configured on this server.",
}

_DEFAULT_USER_MESSAGE = "An unexpected error occurred. Please try again."


class RetryAbortedError(Exception):
    """Raised when an abort event interrupts a backoff wait."""


class RetryMetadata(BaseModel):
    attempts: int
    max_retries: int  # total attempts allowed, for display
    exhausted_retries: bool
    error_code: str
    reason: str | None = None


class RetryFailedError(Exception):
    """The operation failed and will not be retried again."""

    def __init__(self, message: str, metadata: RetryMetadata):
        super().__init__(message)
        self.metadata = metadata

    @property
    def code(self) -> str:
        return self.metadata.error_code


class MaxRetriesExceededError(RetryFailedError):
    pass


class TimeBudgetExhaustedError(RetryFailedError):
    pass


def get_status_code(error: BaseException) -> int | None:
    """HTTP status carried by the error, if any."""
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
            return value
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    return None


def _error_type(error: BaseException) -> str | None:
    tag = getattr(error, "error_type", None)
    if isinstance(tag, str):
        return tag
    # google-genai puts the RPC status name in ``status``
    status = getattr(error, "status", None)
    if isinstance(status, str):
        return status
    return None


def _node_code(error: BaseException) -> str | None:
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code
    return None


def _is_timeout(error: BaseException) -> bool:
    return isinstance(error, _TIMEOUT_EXCEPTIONS)


def _is_abort(error: BaseException) -> bool:
    return isinstance(error, RetryAbortedError)


def _is_network_error(error: BaseException) -> bool:
    if isinstance(error, _NETWORK_EXCEPTIONS):
        return True
    if isinstance(error, OSError) and error.errno in _NETWORK_ERRNOS:
        return True
    code = _node_code(error)
    return code is not None and code.upper() in NETWORK_ERROR_CODES


def is_transient_error(error: BaseException, retryable_status_codes) -> bool:
    """Decide whether ``error`` is worth another attempt."""
    status = get_status_code(error)
    if status in _NEVER_RETRY_STATUSES:
        return False
    if status is not None and status in retryable_status_codes:
        return True

    if _error_type(error) in TRANSIENT_ERROR_TYPES:
        return True
    # An HTTP answer outside the retryable set is final, whatever its message says
    if status is not None:
        return False

    if _is_network_error(error) or _is_timeout(error) or _is_abort(error):
        return True

    message = str(error).lower()
    return any(pattern in message for pattern in _TRANSIENT_MESSAGE_PATTERNS)


def _header(headers, name: str) -> str | None:
    if not headers:
        return None
    getter = getattr(headers, "get", None)
    if getter is None:
        return None
    value = getter(name)
    if value is not None:
        return str(value)
    # Plain dicts are case-sensitive
    for key in headers:
        if isinstance(key, str) and key.lower() == name:
            return str(headers[key])
    return None


def get_retry_after_ms(error: BaseException, now: datetime | None = None) -> int | None:
    """Server-requested wait in ms, from a 429 ``retry-after`` header."""
    if get_status_code(error) != 429:
        return None

    headers = getattr(error, "headers", None)
    if headers is None:
        headers = getattr(getattr(error, "response", None), "headers", None)
    value = _header(headers, "retry-after")
    if value is None:
        return None

    value = value.strip()
    seconds = _RETRY_AFTER_SECONDS_RE.match(value)
    if seconds:
        # Whole seconds only; "1.5" waits 1000 ms
        return int(seconds.group(1)) * 1000

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0, round((retry_at - now).total_seconds() * 1000))


def get_error_code(error: BaseException) -> str:
    """Stable, machine-readable code for an error."""
    status = get_status_code(error)
    if status is not None:
        if status == 429:
            return "RATE_LIMIT"
        if status in (503, 529):
            return "SERVICE_OVERLOADED"
        if status in (500, 502):
            return "SERVER_ERROR"
        if status == 401:
            return "AUTH_ERROR"
        if status == 400:
            return "BAD_REQUEST"
        return "API_ERROR"

    if _is_timeout(error):
        return "TIMEOUT"
    if _is_abort(error):
        return "ABORTED"
    if _is_network_error(error):
        return "NETWORK_ERROR"

    code = _node_code(error)
    if code:
        return code.upper()
    return "UNKNOWN_ERROR"


def get_user_friendly_message(code: str) -> str:
    return _USER_MESSAGES.get(code, _DEFAULT_USER_MESSAGE)
