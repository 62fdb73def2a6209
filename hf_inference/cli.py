"""CLI entry point for hf-inference.

Runs a single Inference API call headlessly and prints the decoded body
as JSON, for scripts and terminal use.

Entry point:
    hf-inference run --model <id> --inputs <text> [--parameters <json>] [-o out.json]
    hf-inference run --model <id> --inputs-file image.b64 --wait-for-model --no-cache
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from hf_inference.errors import (
    ConfigurationError,
    DecodeError,
    InferenceError,
    PayloadTooLargeError,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIGURATION = 2
EXIT_TRANSPORT = 3
EXIT_UPSTREAM = 4
EXIT_PAYLOAD_TOO_LARGE = 5
EXIT_DECODE = 6

_EXIT_CODES = [
    (ConfigurationError, EXIT_CONFIGURATION),
    (TransportError, EXIT_TRANSPORT),
    (UpstreamError, EXIT_UPSTREAM),
    (PayloadTooLargeError, EXIT_PAYLOAD_TOO_LARGE),
    (DecodeError, EXIT_DECODE),
]


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hf-inference",
        description="Call the HuggingFace Inference API once and print the JSON response.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", help="Send one inference request")
    run_p.add_argument("--model", required=True, help="Model id, e.g. google-bert/bert-base-uncased")
    inputs = run_p.add_mutually_exclusive_group(required=True)
    inputs.add_argument("--inputs", help="Inputs sent to the model")
    inputs.add_argument("--inputs-file", help="Read inputs from a file (e.g. a base64 image)")
    run_p.add_argument("--parameters", default=None, help="Model parameters as a JSON object")
    run_p.add_argument("--endpoint", default=None, help="API endpoint (default: HF_INFERENCE_ENDPOINT or public API)")
    run_p.add_argument("--api-key", default=None, help="API key (default: HF_TOKEN)")
    run_p.add_argument("--no-cache", action="store_true", help="Send x-use-cache: false")
    run_p.add_argument("--wait-for-model", action="store_true", help="Send x-wait-for-model: true")

    tuning = run_p.add_argument_group("client options")
    tuning.add_argument("--connect-timeout", default=None, help="e.g. 5s (default: httpx default)")
    tuning.add_argument("--read-timeout", default=None, help="e.g. 30s (default: 10s)")
    tuning.add_argument("--read-idle-timeout", default=None, help="e.g. 1m (default: 5m)")
    tuning.add_argument("--pool-idle-timeout", default=None, help="e.g. 0s (default: 0s)")
    tuning.add_argument("--max-content-length", type=int, default=None, help="Bytes (default: 10 MiB)")
    tuning.add_argument("--charset", default=None, help="Default response charset (default: utf-8)")

    run_p.add_argument("-o", "--output", default=None, help="Output file path (default: stdout)")

    return parser


def _build_options(args: argparse.Namespace):
    """RequestOptions from CLI flags, or None when no flag was given."""
    from hf_inference.config import RequestOptions

    given = {
        "connect_timeout": args.connect_timeout,
        "read_timeout": args.read_timeout,
        "read_idle_timeout": args.read_idle_timeout,
        "connection_pool_idle_timeout": args.pool_idle_timeout,
        "max_content_length": args.max_content_length,
        "default_charset": args.charset,
    }
    given = {k: v for k, v in given.items() if v is not None}
    if not given:
        return None
    try:
        return RequestOptions(**given)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid client options: {e}") from e


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


def _cmd_run(args: argparse.Namespace) -> int:
    """Execute one inference call. Returns exit code."""
    from hf_inference.config import get_endpoint, get_hf_token
    from hf_inference.task import Inference

    try:
        if args.inputs_file:
            inputs_path = Path(args.inputs_file)
            if not inputs_path.exists():
                raise ConfigurationError(f"inputs file not found: {args.inputs_file}")
            inputs = inputs_path.read_text()
        else:
            inputs = args.inputs

        task = Inference(
            model=args.model,
            inputs=inputs,
            parameters=args.parameters,
            endpoint=args.endpoint or get_endpoint(),
            api_key=args.api_key or get_hf_token(),
            use_cache=not args.no_cache,
            wait_for_model=args.wait_for_model,
            options=_build_options(args),
        )
        result = task.run()
    except InferenceError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return _exit_code(e)

    export_data = result.model_dump()
    if args.output:
        with open(args.output, "w") as f:
            json.dump(export_data, f, indent=2)
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        json.dump(export_data, sys.stdout, indent=2)
        sys.stdout.write("\n")

    return EXIT_OK


def _exit_code(error: InferenceError) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return 1


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    # Load env
    from dotenv import load_dotenv
    load_dotenv()

    if args.command == "run":
        code = _cmd_run(args)
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
