"""Pydantic Settings for the connectivity subsystem.

All environment variables use the RENTLINK_ prefix.
Example: RENTLINK_API_BASE_URL=https://api.example.com, RENTLINK_NATIVE_PLATFORM=android
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from rentlink.models.endpoint import is_valid_endpoint

DEFAULT_CANDIDATE_ENDPOINTS = [
    "http://192.168.79.13:8000",  # primary LAN host
    "http://192.168.79.15:8000",  # secondary LAN host
    "http://192.168.1.100:8000",  # common home-router subnet
    "http://10.0.2.2:8000",  # Android emulator -> host loopback
    "http://localhost:8000",
]


class RentlinkSettings(BaseSettings):
    """Connectivity configuration validated from environment variables."""

    # Control API
    port: int = 8010
    log_level: str = "INFO"

    # Endpoint resolution
    api_base_url: str | None = None  # build-time override, wins unconditionally
    page_location: str = "http://localhost:5173/"
    native_platform: str | None = None  # "android" / "ios" when hosted by the native shell
    native_fallback_url: str = "http://192.168.79.13:8000"
    backend_port: int = Field(default=8000, ge=1, le=65535)

    # Probing
    health_path: str = "/health"
    probe_timeout_ms: int = Field(default=5000, ge=50)
    discovery_timeout_ms: int = Field(default=3000, ge=50)
    startup_discovery: bool = True
    candidate_endpoints: list[str] = Field(default_factory=lambda: list(DEFAULT_CANDIDATE_ENDPOINTS))
    candidates_path: str | None = None

    # Persistence
    store_path: str = ".rentlink/storage.json"
    store_key: str = Field(default="api_base_url", min_length=1)

    # Images
    placeholder_image: str = "/placeholder.svg?height=400&width=600"

    model_config = {"env_prefix": "RENTLINK_"}

    @field_validator("health_path")
    @classmethod
    def _health_path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("health_path must start with '/'")
        return value

    @field_validator("native_fallback_url")
    @classmethod
    def _fallback_is_endpoint(cls, value: str) -> str:
        if not is_valid_endpoint(value):
            raise ValueError("native_fallback_url must be an absolute http(s) URL")
        return value.strip()
