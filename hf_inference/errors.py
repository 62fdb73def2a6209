"""
Typed failures for a single inference call.

Every failure surfaces to the caller as one of these. Nothing is retried
or swallowed here: the caller decides what a 503 from a cold model means.
"""

from typing import Optional


class InferenceError(Exception):
    """Base class for all hf-inference errors."""
    pass


class ConfigurationError(InferenceError):
    """A required value is missing or invalid. Raised before any network call."""
    pass


class TransportError(InferenceError):
    """Connection, DNS or timeout failure. The httpx cause is chained."""
    pass


class UpstreamError(InferenceError):
    """
    The endpoint answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the endpoint
        body: Raw response body, verbatim
    """

    def __init__(self, status_code: int, body: str, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        target = f" from {url}" if url else ""
        super().__init__(f"HTTP {status_code}{target}: {body}")


class PayloadTooLargeError(InferenceError):
    """Response body exceeds the configured max_content_length."""

    def __init__(self, limit: int, size: Optional[int] = None):
        self.limit = limit
        self.size = size
        if size is None:
            msg = f"Response body exceeds max content length of {limit} bytes"
        else:
            msg = f"Response body of {size} bytes exceeds max content length of {limit} bytes"
        super().__init__(msg)


class DecodeError(InferenceError):
    """Response body is not valid JSON (or not valid in its charset)."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)
