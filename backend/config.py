import json
from functools import lru_cache
from typing import Annotated

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, NoDecode

from services.retry.config import RetryConfig


def _parse_cors_origins(raw: str) -> list[str]:
    """Parse CORS_ORIGINS as comma-separated string or JSON list."""
    if raw.startswith("["):
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


def _parse_status_codes(raw: str) -> list[int]:
    """Parse a comma-separated list of HTTP status codes, skipping junk entries."""
    codes = []
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            codes.append(int(part))
    return codes


class ModelParams(BaseModel):
    temperature: float
    max_tokens: int


# Per-task sampling parameters
MODEL_CONFIGS: dict[str, ModelParams] = {
    "resume_parsing": ModelParams(temperature=0.1, max_tokens=4000),  # low temp for accuracy
    "conversational": ModelParams(temperature=0.7, max_tokens=1000),
    "company_research": ModelParams(temperature=0.5, max_tokens=4000),
    "uniqueness": ModelParams(temperature=0.4, max_tokens=4000),
    "impact": ModelParams(temperature=0.4, max_tokens=4000),
    "context": ModelParams(temperature=0.4, max_tokens=4000),
}


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    max_upload_size_mb: int = 5
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Retry defaults (AI_RETRY_* env vars)
    ai_retry_max_attempts: int = 2
    ai_retry_initial_delay_ms: int = 1000
    ai_retry_max_delay_ms: int = 10000
    ai_retry_backoff_multiplier: float = 2.0
    ai_retry_jitter_factor: float = 0.1
    ai_retry_status_codes: str = "429,500,502,503,529"
    ai_retry_respect_retry_after: bool = True

    # Wall-clock ceiling for one module call, retries included
    ai_time_budget_ms: int = 170_000

    # Feature flags
    enable_tailoring: bool = True
    enable_job_match: bool = True
    enable_company_research: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value):
        if isinstance(value, str):
            return _parse_cors_origins(value)
        return value

    @property
    def is_ai_configured(self) -> bool:
        return bool(self.gemini_api_key)

    def retry_config(self) -> RetryConfig:
        """Build a bounded RetryConfig from the AI_RETRY_* settings."""
        codes = _parse_status_codes(self.ai_retry_status_codes)
        return RetryConfig.bounded(
            max_retries=self.ai_retry_max_attempts,
            initial_delay_ms=self.ai_retry_initial_delay_ms,
            max_delay_ms=self.ai_retry_max_delay_ms,
            backoff_multiplier=self.ai_retry_backoff_multiplier,
            jitter_factor=self.ai_retry_jitter_factor,
            retryable_status_codes=codes or None,
            respect_retry_after_header=self.ai_retry_respect_retry_after,
        )

    def model_params(self, task: str) -> ModelParams:
        return MODEL_CONFIGS[task]


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, parsed once. Call get_settings.cache_clear() to reload."""
    return Settings()


settings = get_settings()
