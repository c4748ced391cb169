"""Expose constructed client wrappers."""

from .alexa_api import AlexaApiClient, EndpointNotFoundError, RemoteApiError
from .lwa_auth import LwaOAuthClient, TokenExchangeError
from .secrets_manager import (
    CredentialAccessDeniedError,
    CredentialFetchError,
    CredentialNotFoundError,
    MalformedCredentialError,
    SecretsManagerClient,
)

__all__ = [
    "AlexaApiClient",
    "CredentialAccessDeniedError",
    "CredentialFetchError",
    "CredentialNotFoundError",
    "EndpointNotFoundError",
    "LwaOAuthClient",
    "MalformedCredentialError",
    "RemoteApiError",
    "SecretsManagerClient",
    "TokenExchangeError",
]
