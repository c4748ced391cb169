"""
Unit reset pipeline.

A reset is an ordered sequence of named steps, each one remote call, run by a
single driver loop. The first failing step stops the loop; effects of the steps
that already ran are left in place and nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import (
    AsyncContextManager,
    Awaitable,
    Callable,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
)

from room_reset.clients.alexa_api import RemoteApiError
from room_reset.models import (
    DistanceUnits,
    ResetConfiguration,
    ResetOutcome,
    ResetStep,
    TemperatureUnit,
)

logger = logging.getLogger(__name__)


class DeviceManagementApi(Protocol):
    """Remote operations the reset relies on."""

    async def delete_alarms(self, unit_id: str) -> None: ...

    async def delete_reminders(self, unit_id: str) -> None: ...

    async def delete_timers(self, unit_id: str) -> None: ...

    async def get_endpoint_id(self, unit_id: str) -> str: ...

    async def set_volume(self, endpoint_id: str, volume: int) -> None: ...

    async def set_do_not_disturb(self, endpoint_id: str, enabled: bool = True) -> None: ...

    async def set_locales(self, endpoint_id: str, locales: Iterable[str]) -> None: ...

    async def set_wake_words(self, endpoint_id: str, wake_words: Iterable[str]) -> None: ...

    async def set_time_zone(self, endpoint_id: str, time_zone: str) -> None: ...

    async def set_temperature_unit(self, endpoint_id: str, unit: TemperatureUnit) -> None: ...

    async def set_distance_units(self, endpoint_id: str, units: DistanceUnits) -> None: ...

    async def delete_notifications(self, unit_id: str) -> None: ...

    async def unpair_bluetooth(self, endpoint_id: str) -> None: ...


ApiFactory = Callable[[str], AsyncContextManager[DeviceManagementApi]]


@dataclass(slots=True)
class ResetContext:
    """Per-invocation state shared by the steps of one reset."""

    unit_id: str
    config: ResetConfiguration
    endpoint_id: Optional[str] = None
    completed: List[ResetStep] = field(default_factory=list)


StepAction = Callable[[DeviceManagementApi, ResetContext], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class PipelineStep:
    step: ResetStep
    action: StepAction
    requires_endpoint: bool = False


async def _resolve_endpoint(api: DeviceManagementApi, ctx: ResetContext) -> None:
    ctx.endpoint_id = await api.get_endpoint_id(ctx.unit_id)


RESET_STEPS: tuple[PipelineStep, ...] = (
    PipelineStep(ResetStep.DELETE_ALARMS, lambda api, ctx: api.delete_alarms(ctx.unit_id)),
    PipelineStep(
        ResetStep.DELETE_REMINDERS, lambda api, ctx: api.delete_reminders(ctx.unit_id)
    ),
    PipelineStep(ResetStep.DELETE_TIMERS, lambda api, ctx: api.delete_timers(ctx.unit_id)),
    # Every endpoint scoped step below depends on this one.
    PipelineStep(ResetStep.RESOLVE_ENDPOINT, _resolve_endpoint),
    PipelineStep(
        ResetStep.SET_VOLUME,
        lambda api, ctx: api.set_volume(ctx.endpoint_id, ctx.config.volume),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_DO_NOT_DISTURB,
        lambda api, ctx: api.set_do_not_disturb(ctx.endpoint_id, True),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_LOCALES,
        lambda api, ctx: api.set_locales(ctx.endpoint_id, ctx.config.locales),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_WAKE_WORDS,
        lambda api, ctx: api.set_wake_words(ctx.endpoint_id, ctx.config.wake_words),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_TIME_ZONE,
        lambda api, ctx: api.set_time_zone(ctx.endpoint_id, ctx.config.time_zone),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_TEMPERATURE_UNIT,
        lambda api, ctx: api.set_temperature_unit(
            ctx.endpoint_id, ctx.config.temperature_unit
        ),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.SET_DISTANCE_UNITS,
        lambda api, ctx: api.set_distance_units(
            ctx.endpoint_id, ctx.config.distance_units
        ),
        requires_endpoint=True,
    ),
    PipelineStep(
        ResetStep.DELETE_NOTIFICATIONS,
        lambda api, ctx: api.delete_notifications(ctx.unit_id),
    ),
    PipelineStep(
        ResetStep.UNPAIR_BLUETOOTH,
        lambda api, ctx: api.unpair_bluetooth(ctx.endpoint_id),
        requires_endpoint=True,
    ),
)


class UnitResetService:
    """Drive the reset steps for a unit against the device-management API."""

    def __init__(
        self,
        api_factory: ApiFactory,
        *,
        steps: Sequence[PipelineStep] = RESET_STEPS,
    ) -> None:
        self._api_factory = api_factory
        self._steps = tuple(steps)

    @property
    def plan(self) -> list[ResetStep]:
        """Step identifiers in the order they run."""
        return [step.step for step in self._steps]

    async def reset_unit(
        self, unit_id: str, access_token: str, config: ResetConfiguration
    ) -> ResetOutcome:
        """Run every step once, stopping at the first failure."""
        ctx = ResetContext(unit_id=unit_id, config=config)
        logger.info("Reset started", extra={"unit_id": unit_id})

        async with self._api_factory(access_token) as api:
            for step in self._steps:
                if step.requires_endpoint and ctx.endpoint_id is None:
                    return self._failed(
                        ctx, step.step, "Endpoint was not resolved before this step."
                    )
                try:
                    await step.action(api, ctx)
                except RemoteApiError as exc:
                    return self._failed(
                        ctx, step.step, str(exc.payload), status_code=exc.status_code
                    )
                ctx.completed.append(step.step)

        logger.info("Reset finished", extra={"unit_id": unit_id})
        return ResetOutcome(success=True, completed_steps=ctx.completed)

    @staticmethod
    def _failed(
        ctx: ResetContext,
        step: ResetStep,
        cause: str,
        *,
        status_code: Optional[int] = None,
    ) -> ResetOutcome:
        logger.error(
            "Reset stopped at %s: %s",
            step.value,
            cause,
            extra={"unit_id": ctx.unit_id, "status_code": status_code},
        )
        return ResetOutcome(
            success=False,
            failed_step=step,
            cause=cause,
            status_code=status_code,
            completed_steps=ctx.completed,
        )


__all__ = [
    "DeviceManagementApi",
    "PipelineStep",
    "RESET_STEPS",
    "ResetContext",
    "UnitResetService",
]
