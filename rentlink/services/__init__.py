"""Application services."""

from rentlink.services.endpoint_config import EndpointConfigService

__all__ = ["EndpointConfigService"]
