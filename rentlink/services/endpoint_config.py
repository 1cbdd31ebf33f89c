"""Endpoint configuration service used by settings screens and API callers.

Resolution order seen by consumers:

1. Build-time override (never shadowed by anything).
2. Persisted override - confirmed manually or by a diagnostics round.
3. Heuristic resolution (native shell fallback, loopback, host-derived).

This is the single injectable read/write seam for the active endpoint; call
sites receive an instance instead of reading shared storage directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rentlink.models.candidate import ProbeResult
from rentlink.models.endpoint import EndpointSource, ResolvedConfig, validate_endpoint

if TYPE_CHECKING:
    from rentlink.probe.health import HealthProbe
    from rentlink.resolver.resolver import EndpointResolver
    from rentlink.store.endpoint_store import EndpointStore

logger = logging.getLogger(__name__)


class EndpointConfigService:
    """Combine the resolver, the store and the probe behind one interface.

    Args:
        resolver: Base priority chain.
        store: Persisted override.
        probe: Used for manual connection tests.
        timeout_ms: Default timeout for manual connection tests.
    """

    def __init__(
        self,
        resolver: EndpointResolver,
        store: EndpointStore,
        probe: HealthProbe,
        timeout_ms: int = 5000,
    ) -> None:
        self._resolver = resolver
        self._store = store
        self._probe = probe
        self._timeout_ms = timeout_ms

    @property
    def resolver(self) -> EndpointResolver:
        return self._resolver

    @property
    def store(self) -> EndpointStore:
        return self._store

    def current(self) -> ResolvedConfig:
        """Return the endpoint consumers should use right now."""
        override = self._resolver.build_override()
        if override is not None:
            return ResolvedConfig(override, EndpointSource.BUILD_OVERRIDE)

        persisted = self._store.get()
        if persisted is not None:
            return ResolvedConfig(persisted, EndpointSource.PERSISTED)

        return self._resolver.resolve()

    def current_endpoint(self) -> str:
        return self.current().endpoint

    def save(self, endpoint: str) -> ResolvedConfig:
        """Persist a manually entered endpoint.

        Raises:
            InvalidEndpointError: ``endpoint`` is not an absolute http(s) URL.
        """
        self._store.set(endpoint)
        return self.current()

    def reset(self) -> ResolvedConfig:
        """Forget the persisted override and fall back to heuristic resolution."""
        self._store.clear()
        return self.current()

    async def test(self, endpoint: str, timeout_ms: int | None = None) -> ProbeResult:
        """Probe ``endpoint`` without changing any state."""
        return await self._probe.probe(endpoint, timeout_ms or self._timeout_ms)

    async def test_and_save(
        self, endpoint: str, timeout_ms: int | None = None
    ) -> tuple[ProbeResult, ResolvedConfig]:
        """Probe ``endpoint`` and persist it only when it is reachable.

        Raises:
            InvalidEndpointError: ``endpoint`` is not an absolute http(s) URL.
        """
        value = validate_endpoint(endpoint)
        result = await self.test(value, timeout_ms)
        if result.reachable:
            self._store.set(value)
        else:
            logger.info(
                "Not saving unreachable endpoint",
                extra={
                    "endpoint": value,
                    "reason": result.reason.value if result.reason else None,
                    "event": "manual_test_failed",
                },
            )
        return result, self.current()
