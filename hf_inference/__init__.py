"""
hf-inference - one-shot calls to the HuggingFace Inference API.

Request Builder assembles the request; the HTTP execution client sends it
and decodes the body; Inference ties both to host-resolved configuration.
"""

from .config import RequestOptions
from .errors import (
    ConfigurationError,
    DecodeError,
    InferenceError,
    PayloadTooLargeError,
    TransportError,
    UpstreamError,
)
from .http_client import execute
from .request_builder import OutboundRequest, build_request
from .task import Inference, Output

__all__ = [
    "Inference",
    "Output",
    "RequestOptions",
    "OutboundRequest",
    "build_request",
    "execute",
    "InferenceError",
    "ConfigurationError",
    "TransportError",
    "UpstreamError",
    "PayloadTooLargeError",
    "DecodeError",
]
