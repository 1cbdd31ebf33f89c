"""Best-guess backend endpoint from a priority chain of sources.

Chain (first match wins):

1. Build-time override, if non-empty and a valid endpoint.
2. Native shell detected → fixed fallback endpoint for the shell.
3. Page served from a loopback host → loopback endpoint on the backend port.
4. Page scheme + hostname with the backend port substituted.

The chain never reads the persisted override and never performs I/O; it is
recomputed on every call. ``EndpointConfigService`` layers the persisted
override on top for settings screens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rentlink.middleware.error_handler import InvalidEndpointError
from rentlink.models.endpoint import EndpointSource, ResolvedConfig, validate_endpoint
from rentlink.resolver.platform import PlatformContext

if TYPE_CHECKING:
    from rentlink.config.settings import RentlinkSettings

logger = logging.getLogger(__name__)

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1"})
DEFAULT_BACKEND_PORT = 8000


class EndpointResolver:
    """Resolve the backend endpoint without touching the network or the store.

    Args:
        context: Page location and optional native bridge.
        native_fallback: Endpoint returned when running inside the native shell.
        build_override: Build-time configured endpoint; wins when valid.
        backend_port: Well-known port the backend listens on.
    """

    def __init__(
        self,
        context: PlatformContext,
        native_fallback: str,
        build_override: str | None = None,
        backend_port: int = DEFAULT_BACKEND_PORT,
    ) -> None:
        self._context = context
        self._native_fallback = native_fallback
        self._build_override = build_override
        self._backend_port = backend_port

    @classmethod
    def from_settings(
        cls, settings: RentlinkSettings, context: PlatformContext
    ) -> EndpointResolver:
        return cls(
            context=context,
            native_fallback=settings.native_fallback_url,
            build_override=settings.api_base_url,
            backend_port=settings.backend_port,
        )

    @property
    def context(self) -> PlatformContext:
        return self._context

    def build_override(self) -> str | None:
        """Return the build-time override if it is usable, else None."""
        raw = (self._build_override or "").strip()
        if not raw:
            return None
        try:
            return validate_endpoint(raw)
        except InvalidEndpointError:
            logger.warning(
                "Ignoring invalid build-time endpoint override",
                extra={"endpoint": raw, "event": "override_invalid"},
            )
            return None

    def loopback_endpoint(self) -> str:
        return f"http://localhost:{self._backend_port}"

    def resolve(self) -> ResolvedConfig:
        override = self.build_override()
        if override is not None:
            return ResolvedConfig(override, EndpointSource.BUILD_OVERRIDE)

        if self._context.is_native_shell():
            return ResolvedConfig(self._native_fallback, EndpointSource.NATIVE_SHELL)

        hostname = self._context.hostname
        if not hostname or hostname in LOOPBACK_HOSTS:
            return ResolvedConfig(self.loopback_endpoint(), EndpointSource.LOOPBACK)

        scheme = self._context.scheme
        if scheme not in ("http", "https"):
            scheme = "http"
        host = f"[{hostname}]" if ":" in hostname else hostname
        return ResolvedConfig(
            f"{scheme}://{host}:{self._backend_port}", EndpointSource.HOST_DERIVED
        )
