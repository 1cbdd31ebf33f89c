"""Endpoint settings endpoints.

- GET    /api/v1/endpoint       - endpoint in use and where it came from
- PUT    /api/v1/endpoint       - save a manually entered endpoint
- DELETE /api/v1/endpoint       - forget the saved endpoint
- POST   /api/v1/endpoint/test  - probe an endpoint, optionally saving it
- GET    /api/v1/images         - rewrite an image path against the endpoint
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query

from rentlink.models.api import ApiResponse, EndpointTestRequest, SaveEndpointRequest

if TYPE_CHECKING:
    from rentlink.resolver.image_urls import ImageUrlRewriter
    from rentlink.services.endpoint_config import EndpointConfigService


def create_endpoint_router(
    *,
    config_service: EndpointConfigService,
    image_rewriter: ImageUrlRewriter,
) -> APIRouter:
    """Factory that creates the endpoint settings router."""

    endpoint_router = APIRouter(prefix="/api/v1", tags=["endpoint"])

    @endpoint_router.get("/endpoint")
    async def get_endpoint() -> dict:
        return ApiResponse(success=True, data=config_service.current().to_dict()).model_dump()

    @endpoint_router.put("/endpoint")
    async def save_endpoint(body: SaveEndpointRequest) -> dict:
        current = config_service.save(body.endpoint)
        return ApiResponse(success=True, data=current.to_dict()).model_dump()

    @endpoint_router.delete("/endpoint")
    async def reset_endpoint() -> dict:
        current = config_service.reset()
        return ApiResponse(success=True, data=current.to_dict()).model_dump()

    @endpoint_router.post("/endpoint/test")
    async def test_endpoint(body: EndpointTestRequest) -> dict:
        if body.save:
            result, current = await config_service.test_and_save(body.endpoint, body.timeout_ms)
        else:
            result = await config_service.test(body.endpoint, body.timeout_ms)
            current = config_service.current()

        return ApiResponse(
            success=result.reachable,
            data={
                "endpoint": body.endpoint,
                "probe": result.to_dict(),
                "current": current.to_dict(),
            },
            error=None if result.reachable else "Endpoint unreachable",
        ).model_dump()

    @endpoint_router.get("/images")
    async def rewrite_image(path: str = Query(default="")) -> dict:
        return ApiResponse(
            success=True,
            data={"path": path, "url": image_rewriter.rewrite(path)},
        ).model_dump()

    return endpoint_router
