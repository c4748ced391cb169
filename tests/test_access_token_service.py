try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from room_reset.clients import MalformedCredentialError, TokenExchangeError
from room_reset.models import OAuthCredentials
from room_reset.services import AccessTokenService

CREDENTIALS = OAuthCredentials(
    client_id="client-id",
    client_secret="client-secret",
    refresh_token="refresh-token",
    scope="scope",
    token_endpoint_url="https://api.example.com/auth/o2/token",
)


class DummyProvider:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.secret_ids: list[str | None] = []

    def fetch(self, secret_id: str | None = None) -> OAuthCredentials:
        self.secret_ids.append(secret_id)
        if self.error is not None:
            raise self.error
        return CREDENTIALS


class DummyExchanger:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[OAuthCredentials] = []

    async def exchange_token(self, credentials: OAuthCredentials) -> str:
        self.calls.append(credentials)
        if self.error is not None:
            raise self.error
        return f"token-{len(self.calls)}"


@pytest.mark.anyio
async def test_every_call_fetches_a_fresh_token() -> None:
    provider = DummyProvider()
    exchanger = DummyExchanger()
    service = AccessTokenService(provider, exchanger, secret_id="lwa/secret")

    assert await service.get_access_token() == "token-1"
    assert await service.get_access_token() == "token-2"
    assert provider.secret_ids == ["lwa/secret", "lwa/secret"]
    assert exchanger.calls == [CREDENTIALS, CREDENTIALS]


@pytest.mark.anyio
async def test_credential_errors_skip_the_exchange() -> None:
    exchanger = DummyExchanger()
    service = AccessTokenService(DummyProvider(error=MalformedCredentialError("bad")), exchanger)

    with pytest.raises(MalformedCredentialError):
        await service.get_access_token()

    assert exchanger.calls == []


@pytest.mark.anyio
async def test_exchange_errors_propagate() -> None:
    service = AccessTokenService(
        DummyProvider(), DummyExchanger(error=TokenExchangeError("denied"))
    )

    with pytest.raises(TokenExchangeError):
        await service.get_access_token()
