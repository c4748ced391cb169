"""
AWS Lambda entrypoint for resetting a unit.
"""

from __future__ import annotations

import asyncio
import json
import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Dict

from room_reset.clients import CredentialFetchError, TokenExchangeError
from room_reset.core.config import get_settings
from room_reset.core.logging import configure_logging
from room_reset.dependencies import (
    get_access_token_service,
    get_reset_configuration,
    get_unit_reset_service,
)
from room_reset.models import ResetConfiguration
from room_reset.services import AccessTokenService, UnitResetService
from lambdas.reset_lambda.models import LambdaResponse, ResetEvent

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Reset was successful"
TOKEN_ERROR_MESSAGE = "Access token error"
RESET_ERROR_MESSAGE = "Reset went wrong. Some internal issue"


@lru_cache()
def _bootstrap() -> Dict[str, Any]:
    """Initialize shared singletons for the Lambda runtime."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return {
        "token_service": get_access_token_service(),
        "reset_service": get_unit_reset_service(),
        "config": get_reset_configuration(),
    }


def _response(status: HTTPStatus, message: str) -> LambdaResponse:
    return {"statusCode": int(status), "body": json.dumps(message)}


async def handle_reset(
    event: ResetEvent,
    *,
    token_service: AccessTokenService,
    reset_service: UnitResetService,
    config: ResetConfiguration,
) -> LambdaResponse:
    """Obtain a token, reset the unit and map the outcome to a response."""
    try:
        access_token = await token_service.get_access_token()
    except (CredentialFetchError, TokenExchangeError) as exc:
        logger.error("Access token failed: %s", exc)
        return _response(HTTPStatus.INTERNAL_SERVER_ERROR, TOKEN_ERROR_MESSAGE)

    unit_id = event.get("unitId") or ""
    logger.info("Resetting unit", extra={"unit_id": unit_id})

    try:
        outcome = await reset_service.reset_unit(unit_id, access_token, config)
    except Exception:  # pragma: no cover - defensive logging
        logger.exception("Unexpected failure while resetting unit", extra={"unit_id": unit_id})
        return _response(HTTPStatus.INTERNAL_SERVER_ERROR, RESET_ERROR_MESSAGE)

    if not outcome.success:
        logger.error(
            "Reset failed at %s",
            outcome.failed_step.value if outcome.failed_step else "unknown step",
            extra={"unit_id": unit_id, "cause": outcome.cause},
        )
        return _response(HTTPStatus.INTERNAL_SERVER_ERROR, RESET_ERROR_MESSAGE)

    return _response(HTTPStatus.OK, SUCCESS_MESSAGE)


def lambda_handler(event: Dict[str, Any], context: Any) -> LambdaResponse:
    """
    AWS Lambda handler invoked with ``{"unitId": "..."}``.

    Credentials and the access token are fetched on every invocation; only the
    client wrappers are shared across warm invocations.
    """
    services = _bootstrap()
    logger.info("Event: %s", json.dumps(event, default=str))
    return asyncio.run(handle_reset(event, **services))


__all__ = ["handle_reset", "lambda_handler"]
