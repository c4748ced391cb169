"""Domain model exports."""

from .credentials import OAuthCredentials
from .reset import (
    DistanceUnits,
    ResetConfiguration,
    ResetOutcome,
    ResetStep,
    TemperatureUnit,
)

__all__ = [
    "DistanceUnits",
    "OAuthCredentials",
    "ResetConfiguration",
    "ResetOutcome",
    "ResetStep",
    "TemperatureUnit",
]
