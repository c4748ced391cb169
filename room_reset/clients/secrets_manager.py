"""
AWS Secrets Manager wrapper returning the Login with Amazon credentials.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from room_reset.core.config import AWSSettings
from room_reset.models import OAuthCredentials

logger = logging.getLogger(__name__)


class CredentialFetchError(Exception):
    """Raised when the OAuth credentials cannot be read from the secret store."""


class CredentialNotFoundError(CredentialFetchError):
    """The secret does not exist."""


class CredentialAccessDeniedError(CredentialFetchError):
    """The secret exists but could not be read."""


class MalformedCredentialError(CredentialFetchError):
    """The secret value is not JSON holding the expected lwa-* fields."""


class SecretsManagerClient:
    """Fetch OAuth credentials stored as a JSON secret."""

    def __init__(self, settings: AWSSettings, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client or boto3.client(
            "secretsmanager", region_name=settings.region_name
        )

    def fetch(self, secret_id: str | None = None) -> OAuthCredentials:
        """Read and parse the credential secret, defaulting to the configured id."""
        secret_id = secret_id or self._settings.lwa_secret_id
        try:
            response = self._client.get_secret_value(
                SecretId=secret_id,
                VersionStage=self._settings.lwa_secret_version_stage,
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            logger.error(
                "Failed to read OAuth secret",
                extra={"secret_id": secret_id, "error_code": code},
            )
            if code == "ResourceNotFoundException":
                raise CredentialNotFoundError(f"Secret {secret_id} not found.") from exc
            raise CredentialAccessDeniedError(
                f"Secret {secret_id} could not be read ({code or 'unknown error'})."
            ) from exc
        except BotoCoreError as exc:
            logger.error("Secrets Manager unavailable", extra={"secret_id": secret_id})
            raise CredentialAccessDeniedError(str(exc)) from exc

        secret_string = response.get("SecretString")
        if not secret_string:
            raise MalformedCredentialError(f"Secret {secret_id} has no SecretString.")

        try:
            return OAuthCredentials.parse_obj(json.loads(secret_string))
        except (json.JSONDecodeError, TypeError, ValidationError) as exc:
            logger.error("OAuth secret is malformed", extra={"secret_id": secret_id})
            raise MalformedCredentialError(
                f"Secret {secret_id} does not hold the expected lwa-* fields."
            ) from exc


__all__ = [
    "CredentialAccessDeniedError",
    "CredentialFetchError",
    "CredentialNotFoundError",
    "MalformedCredentialError",
    "SecretsManagerClient",
]
