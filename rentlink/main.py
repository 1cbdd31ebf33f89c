"""FastAPI application entry point for the connectivity control API.

Startup: configure logging and, when running inside the native shell with no
confirmed endpoint yet, kick off one background diagnostics round over the
configured candidates.
Shutdown: cancel the background round if it is still running.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rentlink.config.candidates import load_candidate_endpoints
from rentlink.config.settings import RentlinkSettings
from rentlink.diagnostics.controller import DiagnosticsController
from rentlink.logging_config import configure_logging
from rentlink.middleware.error_handler import register_error_handlers
from rentlink.middleware.request_id import RequestIdMiddleware
from rentlink.probe.health import HealthProbe
from rentlink.resolver.image_urls import ImageUrlRewriter
from rentlink.resolver.platform import NativeBridge, PlatformContext, StaticBridge
from rentlink.resolver.resolver import EndpointResolver
from rentlink.routers import (
    create_diagnostics_router,
    create_endpoint_router,
    create_health_router,
)
from rentlink.services.endpoint_config import EndpointConfigService
from rentlink.store.endpoint_store import EndpointStore
from rentlink.store.storage import JsonFileStorage, KeyValueStorage

logger = logging.getLogger(__name__)


def build_platform_context(
    settings: RentlinkSettings, bridge: NativeBridge | None = None
) -> PlatformContext:
    """Platform context from configuration, preferring an injected bridge."""
    if bridge is None and settings.native_platform:
        bridge = StaticBridge(platform=settings.native_platform)
    return PlatformContext(location=settings.page_location, bridge=bridge)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    settings: RentlinkSettings = app.state.settings
    configure_logging(settings.log_level)

    config_service: EndpointConfigService = app.state.config_service
    controller: DiagnosticsController = app.state.controller
    context = config_service.resolver.context

    logger.info(
        "Connectivity service starting",
        extra={
            "endpoint": config_service.current_endpoint(),
            "source": config_service.current().source.value,
            "platform": context.platform_name(),
        },
    )

    discovery_task: asyncio.Task | None = None
    if (
        settings.startup_discovery
        and context.is_native_shell()
        and config_service.resolver.build_override() is None
        and config_service.store.get() is None
    ):
        logger.info(
            "Native shell without a confirmed endpoint - starting background discovery",
            extra={"candidate_count": len(app.state.candidates), "event": "discovery_start"},
        )
        discovery_task = asyncio.create_task(
            controller.run_all(app.state.candidates, settings.discovery_timeout_ms)
        )
    app.state.discovery_task = discovery_task

    yield

    if discovery_task is not None and not discovery_task.done():
        discovery_task.cancel()
        try:
            await discovery_task
        except asyncio.CancelledError:
            pass

    logger.info("Connectivity service shut down")


def create_app(
    settings: RentlinkSettings | None = None,
    *,
    storage: KeyValueStorage | None = None,
    probe: HealthProbe | None = None,
    bridge: NativeBridge | None = None,
) -> FastAPI:
    """Create and wire the FastAPI application.

    ``storage``, ``probe`` and ``bridge`` replace the configured defaults
    (JSON file storage, a real HTTP probe, a bridge built from
    ``native_platform``).
    """
    settings = settings or RentlinkSettings()

    storage = storage if storage is not None else JsonFileStorage(settings.store_path)
    probe = probe or HealthProbe(health_path=settings.health_path)
    context = build_platform_context(settings, bridge)

    store = EndpointStore(storage, key=settings.store_key)
    resolver = EndpointResolver.from_settings(settings, context)
    config_service = EndpointConfigService(
        resolver, store, probe, timeout_ms=settings.probe_timeout_ms
    )
    controller = DiagnosticsController(probe, store, timeout_ms=settings.probe_timeout_ms)
    image_rewriter = ImageUrlRewriter(
        config_service.current_endpoint, placeholder=settings.placeholder_image
    )
    candidates = load_candidate_endpoints(settings.candidates_path, settings.candidate_endpoints)
    controller.initialize(candidates)

    app = FastAPI(
        title="Rentlink Connectivity Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.config_service = config_service
    app.state.controller = controller
    app.state.candidates = candidates

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(create_health_router(config_service=config_service, controller=controller))
    app.include_router(
        create_endpoint_router(config_service=config_service, image_rewriter=image_rewriter)
    )
    app.include_router(
        create_diagnostics_router(
            controller=controller,
            config_service=config_service,
            candidates=candidates,
        )
    )

    return app


app = create_app()
