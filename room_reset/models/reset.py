"""
Value objects describing a unit reset: the target configuration and its outcome.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, validator


class TemperatureUnit(str, Enum):
    FAHRENHEIT = "FAHRENHEIT"
    CELSIUS = "CELSIUS"


class DistanceUnits(str, Enum):
    IMPERIAL = "IMPERIAL"
    METRIC = "METRIC"


class ResetStep(str, Enum):
    """Identifiers of the reset steps, in execution order."""

    DELETE_ALARMS = "deleteAlarms"
    DELETE_REMINDERS = "deleteReminders"
    DELETE_TIMERS = "deleteTimers"
    RESOLVE_ENDPOINT = "resolveEndpoint"
    SET_VOLUME = "setVolume"
    SET_DO_NOT_DISTURB = "setDoNotDisturb"
    SET_LOCALES = "setLocales"
    SET_WAKE_WORDS = "setWakeWords"
    SET_TIME_ZONE = "setTimeZone"
    SET_TEMPERATURE_UNIT = "setTemperatureUnit"
    SET_DISTANCE_UNITS = "setDistanceUnits"
    DELETE_NOTIFICATIONS = "deleteNotifications"
    UNPAIR_BLUETOOTH = "unpairBluetooth"


class ResetConfiguration(BaseModel):
    """Target state applied to the endpoint of a unit. Immutable once built."""

    locales: Tuple[str, ...] = ("en-US", "fr-FR")
    wake_words: Tuple[str, ...] = ("ALEXA",)
    time_zone: str = "America/Los_Angeles"
    temperature_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT
    distance_units: DistanceUnits = DistanceUnits.IMPERIAL
    volume: int = Field(40, ge=0, le=100)

    class Config:
        frozen = True

    @validator("locales", "wake_words")
    def _require_values(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value:
            raise ValueError("at least one value is required")
        return value


class ResetOutcome(BaseModel):
    """Result of a single pass of the reset pipeline."""

    success: bool
    failed_step: Optional[ResetStep] = None
    cause: Optional[str] = None
    status_code: Optional[int] = Field(
        None, description="HTTP status of the failing remote call, when one was received."
    )
    completed_steps: List[ResetStep] = Field(default_factory=list)


__all__ = [
    "DistanceUnits",
    "ResetConfiguration",
    "ResetOutcome",
    "ResetStep",
    "TemperatureUnit",
]
