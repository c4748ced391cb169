"""Service layer exports."""

from .access_token import AccessTokenService
from .unit_reset import RESET_STEPS, PipelineStep, UnitResetService

__all__ = [
    "AccessTokenService",
    "PipelineStep",
    "RESET_STEPS",
    "UnitResetService",
]
