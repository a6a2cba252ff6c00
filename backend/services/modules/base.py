"""Shared plumbing for the AI analysis modules.

Every module follows the same flow: check configuration, validate input,
call the model through the retry executor, recover JSON from the reply,
normalize it against whitelists and defaults, and map any failure to a
ModuleError with a stable code.
"""

import logging
import math
from typing import Any

from pydantic import ValidationError

from config import Settings
from services.gemini_client import CompletionRequest, ModelAPIError, ModelClient
from services.json_recovery import ParseError, parse_model_json
from services.modules.errors import ModuleError
from services.retry import (
    TIME_BUDGET_EXHAUSTED,
    RetryAbortedError,
    RetryConfig,
    RetryFailedError,
    with_retry,
)

logger = logging.getLogger(__name__)


def pick(data: Any, *keys: str, default: Any = None) -> Any:
    """First non-null value among ``keys`` (snake_case first, camelCase aliases after)."""
    if not isinstance(data, dict):
        return default
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def as_str(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value:
        return value
    return default


def as_optional_str(value: Any) -> str | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value if isinstance(value, str) and value else None


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_str_list(value: Any) -> list[str]:
    return [v for v in as_list(value) if isinstance(v, str)]


def as_dicts(value: Any) -> list[dict]:
    return [v for v in as_list(value) if isinstance(v, dict)]


def as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def clamp(value: Any, low: float, high: float, default: float) -> float:
    number = as_number(value)
    if number is None:
        return default
    return max(low, min(high, number))


def clamp_int(value: Any, low: int, high: int, default: int) -> int:
    return int(round(clamp(value, low, high, default)))


def count(value: Any) -> int:
    """Non-negative integer count; anything else counts as 0."""
    number = as_number(value)
    if number is None or number < 0:
        return 0
    return int(number)


def whitelist(value: Any, allowed, default: str) -> str:
    if isinstance(value, str) and value in allowed:
        return value
    return default


class BaseAnalysisModule:
    """Base class for AI analysis modules.

    Subclasses set:
        - name: used in logs
        - task: key into MODEL_CONFIGS
        - system_prompt: default system instruction
        - error_class: ModuleError subclass raised by this module
    and implement normalize(data) -> result model.
    """

    name: str = ""
    task: str = ""
    system_prompt: str = ""
    error_class: type[ModuleError] = ModuleError

    def __init__(
        self,
        settings: Settings,
        client: ModelClient | None,
        retry_config: RetryConfig | None = None,
    ):
        self.settings = settings
        self.client = client
        self.retry_config = retry_config or settings.retry_config()

    def fail(self, message: str, code: str, cause: BaseException | None = None) -> ModuleError:
        return self.error_class(message, code, cause)

    def ensure_configured(self) -> None:
        if not self.settings.is_ai_configured or self.client is None:
            raise self.fail("AI is not configured. Please set your API key.", "AI_NOT_CONFIGURED")

    async def call_model(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        time_budget_ms: int | None = None,
    ) -> str:
        params = self.settings.model_params(self.task)
        request = CompletionRequest(
            system_prompt=system_prompt or self.system_prompt,
            user_prompt=user_prompt,
            model=self.settings.gemini_model,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
        )

        text = await with_retry(
            lambda: self.client.complete(request),
            self.retry_config,
            time_budget_ms=time_budget_ms or self.settings.ai_time_budget_ms,
        )
        if not text or not text.strip():
            raise self.fail("No response received from AI", "EMPTY_RESPONSE")
        return text

    def parse_response(self, text: str) -> dict:
        try:
            data = parse_model_json(text)
        except ParseError as e:
            raise self.fail(f"Failed to parse AI response: {e}", "PARSE_ERROR", e) from e
        if not isinstance(data, dict):
            raise self.fail("AI response is not a JSON object", "INVALID_RESPONSE")
        return data

    def wrap_error(self, error: BaseException) -> ModuleError:
        """Map any failure from the model call to this module's error type."""
        if isinstance(error, ModuleError):
            return error

        if isinstance(error, RetryFailedError):
            metadata = error.metadata
            if metadata.reason == TIME_BUDGET_EXHAUSTED:
                code = TIME_BUDGET_EXHAUSTED
            elif metadata.exhausted_retries:
                code = "MAX_RETRIES_EXCEEDED"
            else:
                code = metadata.error_code
            return self.fail(f"AI request failed after {metadata.attempts} attempt(s)", code, error)

        if isinstance(error, RetryAbortedError):
            return self.fail("Request cancelled", "ABORTED", error)

        if isinstance(error, ModelAPIError):
            if error.status == 401:
                return self.fail("Invalid API key", "AUTH_ERROR", error)
            if error.status == 429:
                return self.fail("Rate limit exceeded. Please try again.", "RATE_LIMIT", error)
            return self.fail(f"AI API error: {error}", "API_ERROR", error)

        if isinstance(error, ValidationError):
            return self.fail("AI response does not match the expected format", "SCHEMA_VALIDATION_FAILED", error)

        return self.fail(f"Failed to run {self.name} analysis", "UNKNOWN_ERROR", error)

    def normalize(self, data: dict, **context):
        raise NotImplementedError

    async def run(self, user_prompt: str, system_prompt: str | None = None, **context):
        """Call the model, recover its JSON and normalize it (``context`` goes to normalize)."""
        logger.info("[%s] Starting analysis", self.name)
        try:
            text = await self.call_model(user_prompt, system_prompt)
            result = self.normalize(self.parse_response(text), **context)
        except Exception as e:
            error = self.wrap_error(e)
            logger.error("[%s] Analysis failed (%s): %s", self.name, error.code, error.message)
            if error is e:
                raise
            raise error from e

        logger.info("[%s] Analysis complete", self.name)
        return result
