"""
Factory functions providing the shared clients and services.
"""

from functools import lru_cache

from room_reset.clients import AlexaApiClient, LwaOAuthClient, SecretsManagerClient
from room_reset.core.config import AppSettings, get_settings
from room_reset.models import ResetConfiguration
from room_reset.services import AccessTokenService, UnitResetService


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_secrets_manager_client() -> SecretsManagerClient:
    """Provide the Secrets Manager credential provider."""
    return SecretsManagerClient(_settings().aws)


@lru_cache()
def get_lwa_oauth_client() -> LwaOAuthClient:
    """Provide the Login with Amazon token exchanger."""
    return LwaOAuthClient(timeout=_settings().lwa.timeout_seconds)


@lru_cache()
def get_access_token_service() -> AccessTokenService:
    """Provide the service fetching a fresh access token per call."""
    return AccessTokenService(
        get_secrets_manager_client(),
        get_lwa_oauth_client(),
        secret_id=_settings().aws.lwa_secret_id,
    )


@lru_cache()
def get_unit_reset_service() -> UnitResetService:
    """Provide the reset pipeline bound to the configured API location."""
    alexa_settings = _settings().alexa
    return UnitResetService(
        lambda token: AlexaApiClient(alexa_settings, access_token=token)
    )


@lru_cache()
def get_reset_configuration() -> ResetConfiguration:
    """Provide the immutable target values applied by a reset."""
    return _settings().reset.to_configuration()


__all__ = [
    "get_access_token_service",
    "get_lwa_oauth_client",
    "get_reset_configuration",
    "get_secrets_manager_client",
    "get_unit_reset_service",
]
