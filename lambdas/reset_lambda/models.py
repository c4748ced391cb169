"""
Data models shared across the reset Lambda package.
"""

from __future__ import annotations

from typing import TypedDict


class ResetEvent(TypedDict, total=False):
    """Invocation payload naming the unit to reset."""

    unitId: str


class LambdaResponse(TypedDict):
    statusCode: int
    body: str


__all__ = ["LambdaResponse", "ResetEvent"]
