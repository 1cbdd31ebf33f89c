"""Response envelope and request bodies for the control API.

All API responses are wrapped in the envelope:
{ success: bool, data: T | None, error: str | None, meta: dict | None }
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None


class SaveEndpointRequest(BaseModel):
    """Manual endpoint save from the settings screen."""

    endpoint: str = Field(..., min_length=1)


class EndpointTestRequest(BaseModel):
    """Probe an operator-typed endpoint, optionally saving it when reachable."""

    endpoint: str = Field(..., min_length=1)
    save: bool = False
    timeout_ms: int | None = Field(default=None, ge=50, le=60000)


class RunDiagnosticsRequest(BaseModel):
    """Start a diagnostics round; omitting ``candidates`` uses the configured list."""

    candidates: list[str] | None = Field(default=None, min_length=1, max_length=50)
    timeout_ms: int | None = Field(default=None, ge=50, le=60000)


class CandidateRetestRequest(BaseModel):
    """Re-test a single diagnostics row."""

    candidate: str = Field(..., min_length=1)
    timeout_ms: int | None = Field(default=None, ge=50, le=60000)
