"""Snapshot of the signals endpoint resolution is working from.

Shown on the network debug screen so an operator can see why a given
endpoint was chosen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from pydantic import BaseModel

if TYPE_CHECKING:
    from rentlink.models.endpoint import ResolvedConfig
    from rentlink.resolver.resolver import EndpointResolver
    from rentlink.store.endpoint_store import EndpointStore


class LocationInfo(BaseModel):
    href: str
    scheme: str
    hostname: str
    port: int | None = None


class BridgeInfo(BaseModel):
    platform: str
    is_native_platform: bool


class EnvironmentReport(BaseModel):
    location: LocationInfo
    native_shell: bool
    bridge: BridgeInfo | None = None
    resolved_endpoint: str
    resolved_source: str
    persisted_endpoint: str | None = None
    effective_endpoint: str
    effective_source: str


def collect_environment_report(
    resolver: EndpointResolver,
    store: EndpointStore,
    effective: ResolvedConfig,
) -> EnvironmentReport:
    """Gather location, bridge, resolution and persistence state.

    ``effective`` is the resolution the settings screens are currently using.
    """
    context = resolver.context
    try:
        port = urlsplit(context.location).port
    except ValueError:
        port = None

    bridge = None
    if context.bridge is not None:
        bridge = BridgeInfo(
            platform=context.bridge.get_platform(),
            is_native_platform=context.bridge.is_native_platform(),
        )

    resolved = resolver.resolve()
    return EnvironmentReport(
        location=LocationInfo(
            href=context.location,
            scheme=context.scheme,
            hostname=context.hostname,
            port=port,
        ),
        native_shell=context.is_native_shell(),
        bridge=bridge,
        resolved_endpoint=resolved.endpoint,
        resolved_source=resolved.source.value,
        persisted_endpoint=store.get(),
        effective_endpoint=effective.endpoint,
        effective_source=effective.source.value,
    )
