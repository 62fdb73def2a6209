"""
HTTP execution client - sends exactly one OutboundRequest and decodes the body.

One httpx.Client per call, closed on every exit path. No retries, no
streaming to the caller: either a fully decoded body comes back or one of
the hf_inference.errors types is raised.

Option mapping (RequestOptions -> httpx):
- connect_timeout: httpx connect/pool timeout (httpx default when unset)
- read_timeout: deadline for the whole response, also the write timeout
- read_idle_timeout: per-chunk read timeout (capped by read_timeout)
- connection_pool_idle_timeout: httpx keepalive_expiry
- max_content_length: checked against Content-Length, then while streaming
- default_charset: used when the response declares no charset
"""

import json
import logging
import time
from typing import Any, Optional

import httpx

from hf_inference.config import RequestOptions, options_or_defaults
from hf_inference.errors import (
    ConfigurationError,
    DecodeError,
    PayloadTooLargeError,
    TransportError,
    UpstreamError,
)
from hf_inference.request_builder import OutboundRequest

logger = logging.getLogger(__name__)

# Bodies are truncated to this many characters inside DecodeError
ERROR_BODY_PREVIEW: int = 500


def create_client(options: RequestOptions) -> httpx.Client:
    """Build the httpx client for a single call."""
    return httpx.Client(
        timeout=options.to_httpx_timeout(),
        limits=options.to_httpx_limits(),
        default_encoding=options.default_charset,
    )


def _declared_length(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("Content-Length", "").strip()
    if value.isdigit():
        return int(value)
    return None


def _read_body(response: httpx.Response, options: RequestOptions, deadline: float) -> bytes:
    """Read the body, enforcing max_content_length and the read_timeout deadline."""
    limit = options.max_content_length

    declared = _declared_length(response)
    if declared is not None and declared > limit:
        raise PayloadTooLargeError(limit, declared)

    body = bytearray()
    for chunk in response.iter_bytes():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(limit)
        if time.monotonic() > deadline:
            raise TransportError(
                f"Read timeout of {options.read_timeout.total_seconds()}s exceeded "
                f"for {response.request.url}"
            )
    return bytes(body)


def _decode(content: bytes, charset: str) -> Any:
    try:
        text = content.decode(charset)
    except (UnicodeDecodeError, LookupError) as e:
        raise DecodeError(f"Response body is not valid {charset}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Response body is not valid JSON: {e}",
            body=text[:ERROR_BODY_PREVIEW],
        ) from e


def execute(request: OutboundRequest, options: Optional[RequestOptions] = None) -> Any:
    """
    Send one request and return the decoded JSON body.

    Args:
        request: Assembled request (see request_builder.build_request)
        options: Client tuning; None means the built-in defaults

    Returns:
        The response body as native Python values (dict, list or scalar)

    Raises:
        ConfigurationError: The URL cannot be parsed or has no http(s) scheme
        TransportError: Connection, DNS or timeout failure
        UpstreamError: Non-2xx status
        PayloadTooLargeError: Body larger than max_content_length
        DecodeError: Body is not valid JSON
    """
    options = options_or_defaults(options)
    deadline = time.monotonic() + options.read_timeout.total_seconds()

    logger.debug("%s %s headers=%s", request.method, request.url, request.redacted_headers())

    try:
        with create_client(options) as client:
            with client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            ) as response:
                content = _read_body(response, options, deadline)
                status_code = response.status_code
                charset = response.charset_encoding or options.default_charset
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise ConfigurationError(f"Invalid URL {request.url!r}: {e}") from e
    except httpx.TransportError as e:
        raise TransportError(f"Request to {request.url} failed: {e!r}") from e
    except httpx.DecodingError as e:
        raise DecodeError(f"Response from {request.url} could not be decoded: {e}") from e

    logger.debug("HTTP %d from %s (%d bytes)", status_code, request.url, len(content))

    if not 200 <= status_code < 300:
        try:
            raw = content.decode(charset, errors="replace")
        except LookupError:
            raw = content.decode(options.default_charset, errors="replace")
        raise UpstreamError(status_code, raw, url=request.url)

    return _decode(content, charset)
