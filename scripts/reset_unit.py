#!/usr/bin/env python
"""Reset a single unit from the command line.

Uses the same credential lookup, token exchange and reset pipeline as the
Lambda entrypoint. Example usages::

    # Show the steps that would run, without touching AWS or the Alexa API.
    python -m scripts.reset_unit amzn1.alexa.unit.did.XXXX --dry-run

    # Reset with a quieter volume than the configured default.
    python -m scripts.reset_unit amzn1.alexa.unit.did.XXXX --volume 20
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from room_reset.clients import CredentialFetchError, TokenExchangeError  # noqa: E402
from room_reset.core.config import get_settings  # noqa: E402
from room_reset.core.logging import configure_logging  # noqa: E402
from room_reset.dependencies import (  # noqa: E402
    get_access_token_service,
    get_reset_configuration,
    get_unit_reset_service,
)
from room_reset.models import ResetConfiguration  # noqa: E402

EXIT_OK = 0
EXIT_RESET_FAILED = 1
EXIT_TOKEN_ERROR = 2
EXIT_VALIDATION_ERROR = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reset an Alexa Smart Properties unit to the configured defaults."
    )
    parser.add_argument("unit_id", help="Identifier of the unit to reset.")
    parser.add_argument(
        "--volume",
        type=int,
        help="Override the configured speaker volume (0-100).",
    )
    parser.add_argument("--time-zone", help="Override the configured IANA time zone.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the reset plan and exit without contacting any service.",
    )
    return parser


def _resolve_configuration(args: argparse.Namespace) -> ResetConfiguration:
    overrides = {}
    if args.volume is not None:
        overrides["volume"] = args.volume
    if args.time_zone:
        overrides["time_zone"] = args.time_zone
    base = get_reset_configuration()
    if not overrides:
        return base
    return ResetConfiguration(**{**base.dict(), **overrides})


async def _run(unit_id: str, config: ResetConfiguration) -> int:
    try:
        access_token = await get_access_token_service().get_access_token()
    except (CredentialFetchError, TokenExchangeError) as exc:
        print(f"Access token error: {exc}", file=sys.stderr)
        return EXIT_TOKEN_ERROR

    outcome = await get_unit_reset_service().reset_unit(unit_id, access_token, config)
    print(outcome.json(indent=2))
    return EXIT_OK if outcome.success else EXIT_RESET_FAILED


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        config = _resolve_configuration(args)
    except ValidationError as exc:
        print(f"Invalid reset configuration:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if args.dry_run:
        plan = [step.value for step in get_unit_reset_service().plan]
        summary = {
            "unit_id": args.unit_id,
            "steps": plan,
            "config": json.loads(config.json()),
        }
        print(json.dumps(summary, indent=2))
        return EXIT_OK

    return asyncio.run(_run(args.unit_id, config))


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
