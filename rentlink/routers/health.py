"""Health endpoint of the control API itself.

- GET /health - service status plus the current diagnostics round state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from rentlink.models.api import ApiResponse

if TYPE_CHECKING:
    from rentlink.diagnostics.controller import DiagnosticsController
    from rentlink.services.endpoint_config import EndpointConfigService


def create_health_router(
    *,
    config_service: EndpointConfigService,
    controller: DiagnosticsController,
) -> APIRouter:
    """Factory that creates the health router with injected dependencies."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        current = config_service.current()
        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "endpoint": current.to_dict(),
                "diagnostics": {
                    "round_id": controller.round_id,
                    "running": controller.is_running,
                },
            },
        ).model_dump()

    return health_router
