"""
Alexa Smart Properties device-management API client.

Each public coroutine maps to one remote call used by the unit reset. Calls are
authorized with the bearer token supplied when the client is opened; any non-2xx
answer is logged and raised as ``RemoteApiError`` carrying the remote payload.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from room_reset.core.config import AlexaApiSettings
from room_reset.models import DistanceUnits, TemperatureUnit

logger = logging.getLogger(__name__)

_NO_BODY = object()


class RemoteApiError(Exception):
    """Raised when a device-management call fails."""

    def __init__(
        self, operation: str, status_code: Optional[int], payload: Any
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"{operation} failed ({status_code}): {payload}")


class EndpointNotFoundError(RemoteApiError):
    """Raised when no endpoint is associated with a unit."""

    def __init__(self, unit_id: str) -> None:
        self.unit_id = unit_id
        super().__init__(
            "resolveEndpoint", None, f"No endpoint associated with unit {unit_id!r}."
        )


class AlexaApiClient:
    """Thin async wrapper over the endpoint, alert and notification APIs."""

    def __init__(
        self,
        settings: AlexaApiSettings,
        *,
        access_token: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=str(settings.base_url),
            timeout=settings.timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            },
        )

    async def __aenter__(self) -> "AlexaApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # Unit scoped operations

    async def delete_alarms(self, unit_id: str) -> None:
        await self._request(
            "deleteAlarms", "DELETE", "/v1/alerts/alarms", params={"unitId": unit_id}
        )

    async def delete_reminders(self, unit_id: str) -> None:
        await self._request(
            "deleteReminders",
            "DELETE",
            "/v1/alerts/reminders",
            params={"unitId": unit_id},
        )

    async def delete_timers(self, unit_id: str) -> None:
        await self._request(
            "deleteTimers", "DELETE", "/v1/alerts/timers", params={"unitId": unit_id}
        )

    async def delete_notifications(self, unit_id: str) -> None:
        await self._request(
            "deleteNotifications",
            "DELETE",
            "/v3/notifications",
            params={
                "recipients.id": unit_id,
                "recipients.type": "Unit",
                "notification.variants.type": "DeviceNotification",
            },
        )

    async def get_endpoint_id(self, unit_id: str) -> str:
        """Return the id of the first endpoint associated with the unit."""
        response = await self._request(
            "resolveEndpoint",
            "GET",
            "/v2/endpoints",
            params={"associatedUnits.id": unit_id},
        )
        try:
            results = response.json().get("results")
        except (ValueError, AttributeError):
            results = None
        endpoint_id = None
        if isinstance(results, list) and results and isinstance(results[0], dict):
            endpoint_id = results[0].get("id")
        if not isinstance(endpoint_id, str) or not endpoint_id:
            logger.error("No endpoint found for unit %s", unit_id)
            raise EndpointNotFoundError(unit_id)
        return endpoint_id

    # Endpoint scoped operations

    async def set_volume(self, endpoint_id: str, volume: int) -> None:
        await self._request(
            "setVolume",
            "POST",
            f"/v2/endpoints/{endpoint_id}/features/speaker/setVolume",
            json={"payload": {"volume": volume}},
        )

    async def set_do_not_disturb(self, endpoint_id: str, enabled: bool = True) -> None:
        await self._put_setting(
            "setDoNotDisturb", endpoint_id, "Alexa.DoNotDisturb.doNotDisturb", enabled
        )

    async def set_locales(self, endpoint_id: str, locales: Iterable[str]) -> None:
        await self._put_setting(
            "setLocales", endpoint_id, "System.locales", list(locales)
        )

    async def set_wake_words(self, endpoint_id: str, wake_words: Iterable[str]) -> None:
        await self._put_setting(
            "setWakeWords", endpoint_id, "SpeechRecognizer.wakeWords", list(wake_words)
        )

    async def set_time_zone(self, endpoint_id: str, time_zone: str) -> None:
        await self._put_setting("setTimeZone", endpoint_id, "System.timeZone", time_zone)

    async def set_temperature_unit(
        self, endpoint_id: str, unit: TemperatureUnit
    ) -> None:
        await self._put_setting(
            "setTemperatureUnit",
            endpoint_id,
            "System.temperatureUnit",
            TemperatureUnit(unit).value,
        )

    async def set_distance_units(self, endpoint_id: str, units: DistanceUnits) -> None:
        await self._put_setting(
            "setDistanceUnits",
            endpoint_id,
            "System.distanceUnits",
            DistanceUnits(units).value,
        )

    async def unpair_bluetooth(self, endpoint_id: str) -> None:
        await self._request(
            "unpairBluetooth",
            "POST",
            f"/v2/endpoints/{endpoint_id}/features/bluetooth/unpair",
            json={},
        )

    async def _put_setting(
        self, operation: str, endpoint_id: str, setting: str, value: Any
    ) -> None:
        await self._request(
            operation,
            "PUT",
            f"/v2/endpoints/{endpoint_id}/settings/{setting}",
            json=value,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = _NO_BODY,
    ) -> httpx.Response:
        kwargs: Dict[str, Any] = {"params": params}
        if json is not _NO_BODY:
            kwargs["json"] = json

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s", operation, exc)
            raise RemoteApiError(operation, None, str(exc)) from exc

        if not response.is_success:
            payload = _error_payload(response)
            logger.error(
                "%s returned %s", operation, response.status_code,
                extra={"operation": operation, "payload": payload},
            )
            raise RemoteApiError(operation, response.status_code, payload)

        logger.info("%s successful", operation)
        return response


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


__all__ = ["AlexaApiClient", "EndpointNotFoundError", "RemoteApiError"]
