try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from room_reset.clients import AlexaApiClient, EndpointNotFoundError, RemoteApiError
from room_reset.core.config import AlexaApiSettings
from room_reset.models import DistanceUnits, ResetStep, TemperatureUnit


class CapturingTransport:
    """Collect outgoing requests and answer with a configurable response."""

    def __init__(self, responder=None) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def _client(capture: CapturingTransport) -> AlexaApiClient:
    settings = AlexaApiSettings(base_url="https://api.example.com")
    return AlexaApiClient(settings, access_token="tok-123", transport=capture.transport)


@pytest.mark.asyncio
async def test_unit_operations_use_query_parameters() -> None:
    capture = CapturingTransport()
    async with _client(capture) as api:
        await api.delete_alarms("U1")
        await api.delete_reminders("U1")
        await api.delete_timers("U1")
        await api.delete_notifications("U1")

    alarms, reminders, timers, notifications = capture.requests
    assert alarms.method == "DELETE"
    assert alarms.url.path == "/v1/alerts/alarms"
    assert alarms.url.params["unitId"] == "U1"
    assert reminders.url.path == "/v1/alerts/reminders"
    assert timers.url.path == "/v1/alerts/timers"
    assert notifications.url.path == "/v3/notifications"
    assert dict(notifications.url.params) == {
        "recipients.id": "U1",
        "recipients.type": "Unit",
        "notification.variants.type": "DeviceNotification",
    }


@pytest.mark.asyncio
async def test_requests_carry_bearer_token() -> None:
    capture = CapturingTransport()
    async with _client(capture) as api:
        await api.delete_alarms("U1")

    request = capture.requests[0]
    assert request.headers["Authorization"] == "Bearer tok-123"
    assert request.url.host == "api.example.com"


@pytest.mark.asyncio
async def test_endpoint_settings_send_json_bodies() -> None:
    capture = CapturingTransport()
    async with _client(capture) as api:
        await api.set_volume("E1", 40)
        await api.set_do_not_disturb("E1")
        await api.set_locales("E1", ("en-US", "fr-FR"))
        await api.set_wake_words("E1", ("ALEXA",))
        await api.set_time_zone("E1", "America/Los_Angeles")
        await api.set_temperature_unit("E1", TemperatureUnit.CELSIUS)
        await api.set_distance_units("E1", DistanceUnits.METRIC)
        await api.unpair_bluetooth("E1")

    sent = [
        (request.method, request.url.path, json.loads(request.content))
        for request in capture.requests
    ]
    assert sent == [
        ("POST", "/v2/endpoints/E1/features/speaker/setVolume", {"payload": {"volume": 40}}),
        ("PUT", "/v2/endpoints/E1/settings/Alexa.DoNotDisturb.doNotDisturb", True),
        ("PUT", "/v2/endpoints/E1/settings/System.locales", ["en-US", "fr-FR"]),
        ("PUT", "/v2/endpoints/E1/settings/SpeechRecognizer.wakeWords", ["ALEXA"]),
        ("PUT", "/v2/endpoints/E1/settings/System.timeZone", "America/Los_Angeles"),
        ("PUT", "/v2/endpoints/E1/settings/System.temperatureUnit", "CELSIUS"),
        ("PUT", "/v2/endpoints/E1/settings/System.distanceUnits", "METRIC"),
        ("POST", "/v2/endpoints/E1/features/bluetooth/unpair", {}),
    ]


@pytest.mark.asyncio
async def test_get_endpoint_id_returns_first_result() -> None:
    capture = CapturingTransport(
        lambda request: httpx.Response(
            200, json={"results": [{"id": "E1"}, {"id": "E2"}]}
        )
    )
    async with _client(capture) as api:
        endpoint_id = await api.get_endpoint_id("U1")

    assert endpoint_id == "E1"
    request = capture.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/v2/endpoints"
    assert request.url.params["associatedUnits.id"] == "U1"


@pytest.mark.asyncio
async def test_get_endpoint_id_without_results_raises() -> None:
    capture = CapturingTransport(lambda request: httpx.Response(200, json={"results": []}))
    async with _client(capture) as api:
        with pytest.raises(EndpointNotFoundError) as exc_info:
            await api.get_endpoint_id("U1")

    assert exc_info.value.unit_id == "U1"
    assert isinstance(exc_info.value, RemoteApiError)
    assert exc_info.value.operation == ResetStep.RESOLVE_ENDPOINT.value


@pytest.mark.asyncio
async def test_endpoint_lookup_errors_are_labelled_with_step_name() -> None:
    capture = CapturingTransport(lambda request: httpx.Response(503, text="unavailable"))
    async with _client(capture) as api:
        with pytest.raises(RemoteApiError) as exc_info:
            await api.get_endpoint_id("U1")

    assert not isinstance(exc_info.value, EndpointNotFoundError)
    assert exc_info.value.operation == ResetStep.RESOLVE_ENDPOINT.value
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_non_success_status_raises_with_payload() -> None:
    capture = CapturingTransport(
        lambda request: httpx.Response(
            400, json={"code": "INVALID_REQUEST", "message": "bad unit"}
        )
    )
    async with _client(capture) as api:
        with pytest.raises(RemoteApiError) as exc_info:
            await api.delete_timers("U1")

    error = exc_info.value
    assert error.operation == "deleteTimers"
    assert error.status_code == 400
    assert error.payload == {"code": "INVALID_REQUEST", "message": "bad unit"}


@pytest.mark.asyncio
async def test_accepted_and_no_content_count_as_success() -> None:
    statuses = iter([202, 204])
    capture = CapturingTransport(lambda request: httpx.Response(next(statuses)))
    async with _client(capture) as api:
        await api.delete_alarms("U1")
        await api.unpair_bluetooth("E1")

    assert len(capture.requests) == 2


@pytest.mark.asyncio
async def test_transport_errors_become_remote_api_errors() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(CapturingTransport(responder)) as api:
        with pytest.raises(RemoteApiError) as exc_info:
            await api.set_time_zone("E1", "UTC")

    assert exc_info.value.status_code is None
    assert exc_info.value.operation == "setTimeZone"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"results": {"id": "E1"}},
        {"results": ["E1"]},
        {"results": [{"id": ""}]},
        {"results": [{"id": 42}]},
        ["not", "an", "object"],
    ],
)
async def test_get_endpoint_id_rejects_unexpected_shapes(payload) -> None:
    capture = CapturingTransport(lambda request: httpx.Response(200, json=payload))
    async with _client(capture) as api:
        with pytest.raises(EndpointNotFoundError) as exc_info:
            await api.get_endpoint_id("U1")

    assert exc_info.value.operation == "resolveEndpoint"
