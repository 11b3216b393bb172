#!/usr/bin/env python3

"""Command-line entry point for the LinxPay client.

Credentials are read from LINXPAY_* environment variables. The result of the
call is printed to stdout as JSON.

Exit codes: 0 on success, 1 for API or transport errors, 2 for configuration,
validation and authentication errors.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from infrastructure.logging.logger import configure_logging, get_logger
from system.linxpay.errors import AuthError, ConfigError, ValidationError
from system.linxpay.linxpay_client import LinxPayClient
from system.linxpay.results import ApiResult


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="linxpay",
        description="Call the LinxPay API using credentials from LINXPAY_* variables",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("poll", help="Check API connectivity and credentials")

    redeem = subparsers.add_parser("redeem", help="Redeem a Linx card transaction")
    source = redeem.add_mutually_exclusive_group(required=True)
    source.add_argument("--fields", help="Redemption fields as a JSON object")
    source.add_argument("--file", type=Path, help="Path to a JSON file with redemption fields")

    return parser.parse_args(argv)


def load_fields(args: argparse.Namespace) -> dict[str, Any]:
    """Load the redemption payload from ``--fields`` or ``--file``.

    Raises:
        ValueError: If the payload is not a JSON object.
    """
    raw = args.fields if args.fields is not None else args.file.read_text()
    fields = json.loads(raw)
    if not isinstance(fields, dict):
        raise ValueError("Redemption fields must be a JSON object")
    return fields


def render(result: ApiResult) -> str:
    payload = {"result": type(result).__name__, **asdict(result)}
    return json.dumps(payload, indent=2, default=str)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the LinxPay CLI.

    Returns:
        Exit code.
    """
    args = parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level)
    logger = get_logger("LinxPayCLI")

    fields = None
    if args.command == "redeem":
        try:
            fields = load_fields(args)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read redemption fields: {e}")
            return 2

    try:
        with LinxPayClient() as client:
            if fields is None:
                result = client.poll()
            else:
                result = client.redemption(fields)
    except (ConfigError, ValidationError, AuthError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 2

    print(render(result))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
