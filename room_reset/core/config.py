"""
Application configuration models and helpers.

Centralizes settings management so both the Lambda entrypoint and the local
reset script share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path

import os

from pydantic import AnyHttpUrl, BaseSettings, Field, validator

from room_reset.models.reset import (
    DistanceUnits,
    ResetConfiguration,
    TemperatureUnit,
)


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


def _split_csv(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


class AWSSettings(BaseSettings):
    """Settings for the AWS services holding the OAuth credentials."""

    region_name: str = Field("us-east-1", env="AWS_REGION")
    lwa_secret_id: str = Field(
        "secret name",
        env="LWA_SECRET_ID",
        description="Secrets Manager secret holding the lwa-* credential fields.",
    )
    lwa_secret_version_stage: str = Field(
        "AWSCURRENT", env="LWA_SECRET_VERSION_STAGE"
    )


class AlexaApiSettings(BaseSettings):
    """Location of the Alexa Smart Properties device-management API."""

    base_url: AnyHttpUrl = Field(
        "https://api.amazonalexa.com", env="ALEXA_API_BASE_URL"
    )
    timeout_seconds: float = Field(10.0, env="ALEXA_API_TIMEOUT")


class LwaSettings(BaseSettings):
    """Login with Amazon token endpoint settings."""

    timeout_seconds: float = Field(10.0, env="LWA_TIMEOUT")


class ResetSettings(BaseSettings):
    """Target values applied to a unit during a reset."""

    locales: tuple[str, ...] = Field(("en-US", "fr-FR"), env="RESET_LOCALES")
    wake_words: tuple[str, ...] = Field(("ALEXA",), env="RESET_WAKE_WORDS")
    time_zone: str = Field("America/Los_Angeles", env="RESET_TIME_ZONE")
    temperature_unit: TemperatureUnit = Field(
        TemperatureUnit.FAHRENHEIT, env="RESET_TEMPERATURE_UNIT"
    )
    distance_units: DistanceUnits = Field(
        DistanceUnits.IMPERIAL, env="RESET_DISTANCE_UNITS"
    )
    volume: int = Field(40, ge=0, le=100, env="RESET_VOLUME")

    @validator("locales", "wake_words", pre=True)
    def _split_lists(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing list values as a comma-separated string."""
        return _split_csv(value)

    @validator("temperature_unit", "distance_units", pre=True)
    def _upper_enums(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    class Config:
        @classmethod
        def parse_env_var(cls, field_name: str, raw_val: str):
            if field_name in ("locales", "wake_words"):
                return _split_csv(raw_val)
            return cls.json_loads(raw_val)

    def to_configuration(self) -> ResetConfiguration:
        """Freeze the settings into the value passed to the reset pipeline."""
        return ResetConfiguration(
            locales=self.locales,
            wake_words=self.wake_words,
            time_zone=self.time_zone,
            temperature_unit=self.temperature_unit,
            distance_units=self.distance_units,
            volume=self.volume,
        )


class AppSettings(BaseSettings):
    """Root settings object for the reset Lambda and scripts."""

    environment: str = Field("development", env="APP_ENV")
    log_level: str = Field("INFO", env="APP_LOG_LEVEL")
    aws: AWSSettings = Field(default_factory=AWSSettings)
    alexa: AlexaApiSettings = Field(default_factory=AlexaApiSettings)
    lwa: LwaSettings = Field(default_factory=LwaSettings)
    reset: ResetSettings = Field(default_factory=ResetSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AlexaApiSettings",
    "AppSettings",
    "AWSSettings",
    "LwaSettings",
    "ResetSettings",
    "get_settings",
]
