"""
Configuration constants and Pydantic models for hf-inference.
"""

import codecs
import os
import re
from datetime import timedelta
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

HUGGINGFACE_BASE_ENDPOINT: str = "https://api-inference.huggingface.co/models"

WAIT_HEADER: str = "x-wait-for-model"
CACHE_HEADER: str = "x-use-cache"

DEFAULT_READ_TIMEOUT: timedelta = timedelta(seconds=10)
DEFAULT_READ_IDLE_TIMEOUT: timedelta = timedelta(minutes=5)
DEFAULT_CONNECTION_POOL_IDLE_TIMEOUT: timedelta = timedelta(seconds=0)
DEFAULT_MAX_CONTENT_LENGTH: int = 1024 * 1024 * 10  # 10 MiB
DEFAULT_CHARSET: str = "utf-8"

# httpx's own connect timeout, used when connect_timeout is left unset
HTTPX_DEFAULT_CONNECT_TIMEOUT: float = 5.0


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_hf_token() -> str | None:
    """Get HuggingFace token from environment."""
    return os.environ.get("HF_TOKEN")


def get_endpoint() -> str:
    """
    Get inference endpoint from environment or default.

    Set HF_INFERENCE_ENDPOINT in .env to target a dedicated endpoint
    or a local mock.
    """
    value = os.environ.get("HF_INFERENCE_ENDPOINT", "").strip()
    return value or HUGGINGFACE_BASE_ENDPOINT


# ─────────────────────────────────────────────────────────────────────
# DURATIONS
# ─────────────────────────────────────────────────────────────────────

_SHORT_DURATION = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600}


def parse_duration(value: Any) -> Any:
    """
    Turn short duration strings ("500ms", "10s", "5m", "1h") into timedelta.

    Anything else is returned unchanged so pydantic can handle numbers of
    seconds and ISO-8601 strings such as "PT10S".
    """
    if isinstance(value, str):
        match = _SHORT_DURATION.match(value)
        if match:
            amount, unit = match.groups()
            return timedelta(seconds=float(amount) * _UNIT_SECONDS[unit.lower()])
    return value


# ─────────────────────────────────────────────────────────────────────
# DATA MODELS
# ─────────────────────────────────────────────────────────────────────

class RequestOptions(BaseModel):
    """
    HTTP client tuning for a single inference call.

    Defaults are filled in at construction, so an instance always describes
    exactly what the call runs with. connect_timeout is the one field
    without a default: when unset, httpx's own connect timeout applies.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    connect_timeout: Optional[timedelta] = None
    read_timeout: timedelta = DEFAULT_READ_TIMEOUT
    read_idle_timeout: timedelta = DEFAULT_READ_IDLE_TIMEOUT
    connection_pool_idle_timeout: timedelta = DEFAULT_CONNECTION_POOL_IDLE_TIMEOUT
    max_content_length: int = Field(default=DEFAULT_MAX_CONTENT_LENGTH, ge=0)
    default_charset: str = DEFAULT_CHARSET

    @field_validator(
        "connect_timeout",
        "read_timeout",
        "read_idle_timeout",
        "connection_pool_idle_timeout",
        mode="before",
    )
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        return parse_duration(value)

    @field_validator(
        "connect_timeout",
        "read_timeout",
        "read_idle_timeout",
        "connection_pool_idle_timeout",
    )
    @classmethod
    def _non_negative(cls, value: Optional[timedelta]) -> Optional[timedelta]:
        if value is not None and value < timedelta(0):
            raise ValueError("duration must not be negative")
        return value

    @field_validator("default_charset")
    @classmethod
    def _known_charset(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError:
            raise ValueError(f"unknown charset: {value}")

    @property
    def connect_timeout_seconds(self) -> float:
        if self.connect_timeout is None:
            return HTTPX_DEFAULT_CONNECT_TIMEOUT
        return self.connect_timeout.total_seconds()

    @property
    def read_chunk_timeout_seconds(self) -> float:
        """Longest wait for any single chunk: the tighter of the two read limits."""
        return min(self.read_timeout, self.read_idle_timeout).total_seconds()

    def to_httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=self.read_chunk_timeout_seconds,
            write=self.read_timeout.total_seconds(),
            pool=self.connect_timeout_seconds,
        )

    def to_httpx_limits(self) -> httpx.Limits:
        return httpx.Limits(
            keepalive_expiry=self.connection_pool_idle_timeout.total_seconds(),
        )


def options_or_defaults(options: Optional[RequestOptions]) -> RequestOptions:
    """The configuration a call actually runs with."""
    return options if options is not None else RequestOptions()
