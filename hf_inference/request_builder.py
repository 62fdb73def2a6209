"""
Request Builder - turns resolved invocation values into an OutboundRequest.

Pure transformation: no I/O, no logging of secrets. Validation stops at
what is needed to put the request on the wire: required values present,
an ASCII api key, a JSON-serializable body. The endpoint is the
authority on whether inputs and parameters make sense for a model.
"""

import json
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from hf_inference.config import CACHE_HEADER, WAIT_HEADER
from hf_inference.errors import ConfigurationError


class OutboundRequest(BaseModel):
    """A fully assembled inference request, ready to send."""
    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]
    # Serialized body, sent as-is
    content: bytes

    def redacted_headers(self) -> Dict[str, str]:
        """Headers with the bearer token masked, for logging."""
        headers = dict(self.headers)
        if "Authorization" in headers:
            headers["Authorization"] = "Bearer ***"
        return headers


def join_url(endpoint: str, model: str) -> str:
    """
    Join endpoint and model with a single "/".

    No normalization: an endpoint ending in "/" produces "//".
    """
    return "/".join([endpoint, model])


def _is_ascii(value: str) -> bool:
    try:
        value.encode("ascii")
    except UnicodeEncodeError:
        return False
    return True


def _bool_header(value: bool) -> str:
    return "true" if value else "false"


def _require(name: str, value: Any, allow_empty: bool = True) -> None:
    if value is None:
        raise ConfigurationError(f"Missing required value: {name}")
    if not allow_empty and isinstance(value, str) and not value.strip():
        raise ConfigurationError(f"Required value is empty: {name}")


def build_request(
    endpoint: Optional[str],
    model: Optional[str],
    inputs: Optional[str],
    api_key: Optional[str],
    parameters: Optional[Mapping[str, Any]] = None,
    use_cache: Optional[bool] = True,
    wait_for_model: Optional[bool] = False,
) -> OutboundRequest:
    """
    Build the POST request for one inference call.

    Args:
        endpoint: Base URL, e.g. https://api-inference.huggingface.co/models
        model: Model id appended to the endpoint
        inputs: Payload sent as "inputs" (text, JSON text, or base64 content)
        api_key: Bearer token
        parameters: Optional model parameters; omitted from the body when empty
        use_cache: Value of the x-use-cache header
        wait_for_model: Value of the x-wait-for-model header

    Raises:
        ConfigurationError: If any required value is None, endpoint,
            model or api_key is blank, api_key is not ASCII, or the body
            is not JSON serializable (including NaN and Infinity)
    """
    _require("endpoint", endpoint, allow_empty=False)
    _require("model", model, allow_empty=False)
    _require("inputs", inputs)
    _require("apiKey", api_key, allow_empty=False)
    _require("useCache", use_cache)
    _require("waitForModel", wait_for_model)

    body: Dict[str, Any] = {"inputs": inputs}
    if parameters:
        body["parameters"] = dict(parameters)

    try:
        content = json.dumps(body, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Request body is not JSON serializable: {e}") from e

    if not _is_ascii(api_key):
        raise ConfigurationError("apiKey must contain only ASCII characters")

    headers = {
        "Authorization": "Bearer " + api_key,
        "Content-Type": "application/json",
        CACHE_HEADER: _bool_header(use_cache),
        WAIT_HEADER: _bool_header(wait_for_model),
    }

    return OutboundRequest(
        url=join_url(endpoint, model),
        headers=headers,
        body=body,
        content=content,
    )
