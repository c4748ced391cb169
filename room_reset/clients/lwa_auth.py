"""
Login with Amazon OAuth client.

Exchanges a stored refresh token for a short-lived bearer access token.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

import httpx

from room_reset.models import OAuthCredentials

logger = logging.getLogger(__name__)


class TokenExchangeError(Exception):
    """Raised when the token endpoint does not return an access token."""


class LwaOAuthClient:
    """Perform the refresh-token grant against the LWA token endpoint."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def exchange_token(self, credentials: OAuthCredentials) -> str:
        """Return a fresh access token for the supplied credentials."""
        missing = credentials.missing_fields()
        if missing:
            raise TokenExchangeError(
                f"Credentials are missing required values: {', '.join(missing)}."
            )

        payload = {
            "grant_type": "refresh_token",
            "refresh_token": credentials.refresh_token,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "scope": credentials.scope,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    str(credentials.token_endpoint_url),
                    data=payload,
                    headers={"Accept": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Token endpoint request failed: %s", exc)
            raise TokenExchangeError(str(exc)) from exc

        logger.info("Token endpoint responded with status %s", response.status_code)
        if response.status_code != HTTPStatus.OK:
            raise TokenExchangeError(response.text)

        try:
            access_token = response.json().get("access_token")
        except (ValueError, AttributeError) as exc:
            raise TokenExchangeError("Token endpoint returned a malformed body.") from exc

        if not access_token:
            raise TokenExchangeError("Incomplete token payload returned from LWA.")

        return access_token


__all__ = ["LwaOAuthClient", "TokenExchangeError"]
