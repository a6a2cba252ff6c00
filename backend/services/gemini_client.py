"""Model invocation collaborator and its Google Gemini implementation.

The rest of the backend only depends on ``ModelClient.complete`` and on
``ModelAPIError`` exposing ``status``, ``error_type`` and ``headers``.
"""

import logging
from typing import Protocol

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel

from config import Settings

logger = logging.getLogger(__name__)


class CompletionRequest(BaseModel):
    system_prompt: str
    user_prompt: str
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    max_tokens: int = 4096


class ModelAPIError(Exception):
    """Vendor-neutral model API failure."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        error_type: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.error_type = error_type
        self.headers = headers or {}


class ModelClient(Protocol):
    async def complete(self, request: CompletionRequest) -> str | None:
        """Return the response text, or None if the model produced none."""
        ...


def _response_headers(error: genai_errors.APIError) -> dict[str, str]:
    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return {}
    return {str(k).lower(): str(v) for k, v in headers.items()}


class GeminiClient:
    """ModelClient backed by the google-genai async API."""

    def __init__(self, api_key: str, default_model: str = "gemini-2.5-flash"):
        self._client = genai.Client(api_key=api_key)
        self.default_model = default_model

    async def complete(self, request: CompletionRequest) -> str | None:
        try:
            response = await self._client.aio.models.generate_content(
                model=request.model or self.default_model,
                contents=request.user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=request.system_prompt,
                    temperature=request.temperature,
                    max_output_tokens=request.max_tokens,
                ),
            )
        except genai_errors.APIError as e:
            logger.error("Gemini API error (%s %s): %s", e.code, e.status, e.message)
            raise ModelAPIError(
                e.message or str(e),
                status=e.code,
                error_type=e.status,
                headers=_response_headers(e),
            ) from e

        return response.text


_client: GeminiClient | None = None


def get_client(settings: Settings) -> GeminiClient | None:
    """Shared GeminiClient for the configured key, or None when AI is disabled."""
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - AI features disabled")
        return None
    if _client is None:
        _client = GeminiClient(settings.gemini_api_key, settings.gemini_model)
    return _client


def reset_client() -> None:
    global _client
    _client = None
