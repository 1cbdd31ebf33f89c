"""HTTP routers of the control API."""

from rentlink.routers.diagnostics import create_diagnostics_router
from rentlink.routers.endpoint import create_endpoint_router
from rentlink.routers.health import create_health_router

__all__ = ["create_diagnostics_router", "create_endpoint_router", "create_health_router"]
