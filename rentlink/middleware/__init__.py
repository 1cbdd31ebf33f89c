"""Middleware package - error hierarchy and request ID."""

from rentlink.middleware.error_handler import (
    DiagnosticsInProgressError,
    InvalidEndpointError,
    RentlinkError,
    ValidationError,
    register_error_handlers,
)
from rentlink.middleware.request_id import (
    RequestIdLogFilter,
    RequestIdMiddleware,
    request_id_ctx,
)

__all__ = [
    "DiagnosticsInProgressError",
    "InvalidEndpointError",
    "RentlinkError",
    "RequestIdLogFilter",
    "RequestIdMiddleware",
    "ValidationError",
    "register_error_handlers",
    "request_id_ctx",
]
