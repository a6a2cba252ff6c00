"""Retry configuration with bounded defaults."""

from pydantic import BaseModel, Field

DEFAULT_RETRYABLE_STATUS_CODES = [429, 500, 502, 503, 529]

# Reserve kept free before starting another attempt under a time budget
MIN_TIME_FOR_RETRY_MS = 15_000

MAX_RETRIES_BOUNDS = (0, 10)
MULTIPLIER_BOUNDS = (1.0, 4.0)
JITTER_BOUNDS = (0.0, 1.0)


def _clamp(value, low, high):
    return max(low, min(high, value))


class RetryConfig(BaseModel):
    max_retries: int = 2  # 3 attempts total
    initial_delay_ms: int = 1000
    max_delay_ms: int = 10_000
    backoff_multiplier: float = 2.0
    jitter_factor: float = 0.1
    retryable_status_codes: list[int] = Field(
        default_factory=lambda: list(DEFAULT_RETRYABLE_STATUS_CODES)
    )
    respect_retry_after_header: bool = True

    model_config = {"frozen": True}

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @classmethod
    def bounded(cls, retryable_status_codes: list[int] | None = None, **values) -> "RetryConfig":
        """Build a config, clamping out-of-range numbers instead of rejecting them."""
        if "max_retries" in values:
            values["max_retries"] = int(_clamp(values["max_retries"], *MAX_RETRIES_BOUNDS))
        if "backoff_multiplier" in values:
            values["backoff_multiplier"] = _clamp(values["backoff_multiplier"], *MULTIPLIER_BOUNDS)
        if "jitter_factor" in values:
            values["jitter_factor"] = _clamp(values["jitter_factor"], *JITTER_BOUNDS)
        for key in ("initial_delay_ms", "max_delay_ms"):
            if key in values:
                values[key] = max(0, int(values[key]))
        if retryable_status_codes:
            values["retryable_status_codes"] = list(retryable_status_codes)
        return cls(**values)

    def merge(self, **overrides) -> "RetryConfig":
        """Return a copy with the non-None overrides applied (bounds enforced)."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RetryConfig.bounded(**values)
