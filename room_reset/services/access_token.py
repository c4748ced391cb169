"""
Helper for obtaining a fresh Alexa Smart Properties access token.
"""

from __future__ import annotations

import logging
from typing import Protocol

from room_reset.models import OAuthCredentials

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    def fetch(self, secret_id: str | None = None) -> OAuthCredentials:
        ...


class TokenExchanger(Protocol):
    async def exchange_token(self, credentials: OAuthCredentials) -> str:
        ...


class AccessTokenService:
    """Fetch the stored OAuth credentials and trade them for an access token.

    Nothing is cached: every call reads the secret and performs a new
    refresh-token grant. Errors from either collaborator propagate unchanged.
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        token_exchanger: TokenExchanger,
        *,
        secret_id: str | None = None,
    ) -> None:
        self._credentials = credential_provider
        self._exchanger = token_exchanger
        self._secret_id = secret_id

    async def get_access_token(self) -> str:
        credentials = self._credentials.fetch(self._secret_id)
        access_token = await self._exchanger.exchange_token(credentials)
        logger.info("Obtained access token", extra={"client_id": credentials.client_id})
        return access_token


__all__ = ["AccessTokenService", "CredentialProvider", "TokenExchanger"]
