"""Network diagnostics endpoints.

- GET  /api/v1/diagnostics              - rows of the current round
- POST /api/v1/diagnostics/run          - probe all candidates (409 while a round runs)
- POST /api/v1/diagnostics/test         - re-test one row
- GET  /api/v1/diagnostics/environment  - signals behind the current resolution
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from rentlink.diagnostics.environment import collect_environment_report
from rentlink.middleware.error_handler import DiagnosticsInProgressError
from rentlink.models.api import ApiResponse, CandidateRetestRequest, RunDiagnosticsRequest

if TYPE_CHECKING:
    from rentlink.diagnostics.controller import DiagnosticsController
    from rentlink.services.endpoint_config import EndpointConfigService


def create_diagnostics_router(
    *,
    controller: DiagnosticsController,
    config_service: EndpointConfigService,
    candidates: list[str],
) -> APIRouter:
    """Factory that creates the diagnostics router.

    Parameters
    ----------
    controller:
        DiagnosticsController owning the round state.
    config_service:
        Used to report the endpoint in effect after a round.
    candidates:
        Default ordered candidate list when a request does not supply one.
    """
    diagnostics_router = APIRouter(prefix="/api/v1/diagnostics", tags=["diagnostics"])

    @diagnostics_router.get("")
    async def get_diagnostics() -> dict:
        data = controller.get_state()
        data["current"] = config_service.current().to_dict()
        return ApiResponse(success=True, data=data).model_dump()

    @diagnostics_router.post("/run")
    async def run_diagnostics(body: RunDiagnosticsRequest | None = None) -> dict:
        if controller.is_running:
            raise DiagnosticsInProgressError(round_id=controller.round_id)

        urls = body.candidates if body and body.candidates else candidates
        report = await controller.run_all(urls, body.timeout_ms if body else None)

        data = report.to_dict()
        data["current"] = config_service.current().to_dict()
        return ApiResponse(
            success=not report.all_failed,
            data=data,
            error="All candidates failed" if report.all_failed else None,
        ).model_dump()

    @diagnostics_router.post("/test")
    async def test_candidate(body: CandidateRetestRequest) -> dict:
        candidate = await controller.run_one(body.candidate, body.timeout_ms)
        return ApiResponse(
            success=True,
            data=candidate.to_dict(),
        ).model_dump()

    @diagnostics_router.get("/environment")
    async def environment() -> dict:
        report = collect_environment_report(
            config_service.resolver,
            config_service.store,
            config_service.current(),
        )
        return ApiResponse(success=True, data=report.model_dump()).model_dump()

    return diagnostics_router
