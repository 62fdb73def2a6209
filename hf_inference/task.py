"""
Inference task - call the HuggingFace Inference API once.

The serverless Inference API gives access to thousands of models: text
generation, image generation, document embeddings, and classical tasks
such as text classification, image classification or speech recognition.

Configuration values may be templates owned by the host (e.g. "{{ secret('HF') }}").
The host resolves them through the `render` callable passed to run();
everything after resolve() only ever sees plain values.

Usage (text classification):
    task = Inference(
        model="cardiffnlp/twitter-roberta-base-sentiment-latest",
        api_key=os.environ["HF_TOKEN"],
        inputs="I want a refund",
    )
    result = task.run()
    result.output  # [[{"label": "negative", "score": ...}, ...]]

Usage (image classification, base64 image read from a file):
    task = Inference(
        model="google/vit-base-patch16-224",
        api_key=os.environ["HF_TOKEN"],
        inputs=Path("my-base64-image.txt").read_text(),
        parameters={"function_to_apply": "sigmoid", "top_k": 3},
        wait_for_model=True,
        use_cache=False,
    )
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hf_inference.config import HUGGINGFACE_BASE_ENDPOINT, RequestOptions
from hf_inference.errors import ConfigurationError
from hf_inference.http_client import execute
from hf_inference.request_builder import OutboundRequest, build_request

logger = logging.getLogger(__name__)

# Host-supplied template resolution: takes a raw field value, returns the
# resolved one (None when the template resolves to nothing).
Renderer = Callable[[Any], Any]

_REQUIRED_FIELDS = ("endpoint", "model", "inputs", "api_key", "use_cache", "wait_for_model")


def _as_str(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    raise ConfigurationError(f"{name} must resolve to a string, got {type(value).__name__}")


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigurationError(f"{name} must resolve to a boolean, got {value!r}")


def _as_parameters(value: Any) -> Dict[str, Any]:
    """Parameters may resolve to a mapping, JSON object text, or nothing."""
    if value is None or value == "":
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"parameters is not a JSON object: {e}") from e
    if not isinstance(value, dict):
        raise ConfigurationError(f"parameters must resolve to a mapping, got {type(value).__name__}")
    return {str(k): v for k, v in value.items()}


class Output(BaseModel):
    """Output returned by the HuggingFace API, uninterpreted."""
    output: Any = None


class ResolvedInvocation(BaseModel):
    """Invocation values after template resolution. Immutable for the call."""
    model_config = ConfigDict(frozen=True)

    endpoint: str
    model: str
    inputs: str
    api_key: str
    parameters: Dict[str, Any] = {}
    use_cache: bool = True
    wait_for_model: bool = False

    def to_request(self) -> OutboundRequest:
        return build_request(
            endpoint=self.endpoint,
            model=self.model,
            inputs=self.inputs,
            api_key=self.api_key,
            parameters=self.parameters,
            use_cache=self.use_cache,
            wait_for_model=self.wait_for_model,
        )


class Inference(BaseModel):
    """
    One call to the Inference API.

    Fields accept snake_case or camelCase names (api_key / apiKey,
    use_cache / useCache, wait_for_model / waitForModel).

    use_cache:
        The API caches results for identical inputs. Deterministic models
        (classifiers, embeddings) can reuse them; disable for
        nondeterministic models to force a real new query.
    wait_for_model:
        Cold models must be loaded before use and answer 503 meanwhile.
        When true, the API holds the request until the model is ready.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    api_key: Optional[str] = None
    model: Optional[str] = None
    inputs: Optional[str] = None
    parameters: Union[Dict[str, Any], str, None] = None
    endpoint: Optional[str] = HUGGINGFACE_BASE_ENDPOINT
    use_cache: Union[bool, str, None] = True
    wait_for_model: Union[bool, str, None] = False
    options: Optional[RequestOptions] = None

    def resolve(self, render: Optional[Renderer] = None) -> ResolvedInvocation:
        """
        Resolve every templated field through `render`.

        Raises:
            ConfigurationError: A required field is absent after resolution,
                or a value resolves to the wrong type
        """
        def resolved(value: Any) -> Any:
            if render is None or value is None:
                return value
            return render(value)

        values = {
            name: resolved(getattr(self, name))
            for name in _REQUIRED_FIELDS + ("parameters",)
        }

        missing = [name for name in _REQUIRED_FIELDS if values[name] is None]
        if missing:
            raise ConfigurationError(
                "Missing required value(s): " + ", ".join(to_camel(name) for name in missing)
            )

        return ResolvedInvocation(
            endpoint=_as_str("endpoint", values["endpoint"]),
            model=_as_str("model", values["model"]),
            inputs=_as_str("inputs", values["inputs"]),
            api_key=_as_str("apiKey", values["api_key"]),
            parameters=_as_parameters(values["parameters"]),
            use_cache=_as_bool("useCache", values["use_cache"]),
            wait_for_model=_as_bool("waitForModel", values["wait_for_model"]),
        )

    def run(self, render: Optional[Renderer] = None) -> Output:
        """
        Resolve, build and send the request; return the decoded body.

        Raises:
            ConfigurationError, TransportError, UpstreamError,
            PayloadTooLargeError, DecodeError (see hf_inference.errors)
        """
        invocation = self.resolve(render)
        request = invocation.to_request()

        logger.debug("Use Huggingface Inference API with input: %s", request.body)

        body = execute(request, self.options)

        logger.debug("Response: %s", body)

        return Output(output=body)
