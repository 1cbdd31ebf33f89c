"""Unit tests for EndpointConfigService."""

from __future__ import annotations

import pytest

from conftest import DOWN, UP, ScriptedProbe
from rentlink.middleware.error_handler import InvalidEndpointError
from rentlink.models.endpoint import EndpointSource
from rentlink.resolver.platform import PlatformContext
from rentlink.resolver.resolver import EndpointResolver
from rentlink.services.endpoint_config import EndpointConfigService
from rentlink.store.endpoint_store import EndpointStore

LAN = "http://192.168.1.20:8000"


def _service(
    store: EndpointStore,
    probe: ScriptedProbe,
    location: str = "http://192.168.1.20:5173/",
    override: str | None = None,
) -> EndpointConfigService:
    resolver = EndpointResolver(
        context=PlatformContext(location=location),
        native_fallback="http://192.168.79.13:8000",
        build_override=override,
    )
    return EndpointConfigService(resolver, store, probe, timeout_ms=300)  # type: ignore[arg-type]


class TestCurrent:
    def test_heuristic_when_nothing_saved(self, store, scripted_probe):
        current = _service(store, scripted_probe).current()
        assert current.endpoint == LAN
        assert current.source == EndpointSource.HOST_DERIVED

    def test_persisted_beats_heuristics(self, store, scripted_probe):
        store.set("http://10.0.2.2:8000")
        current = _service(store, scripted_probe).current()
        assert current.endpoint == "http://10.0.2.2:8000"
        assert current.source == EndpointSource.PERSISTED

    def test_build_override_beats_persisted(self, store, scripted_probe):
        store.set("http://10.0.2.2:8000")
        service = _service(store, scripted_probe, override="https://api.example.com")
        assert service.current().source == EndpointSource.BUILD_OVERRIDE
        assert service.current_endpoint() == "https://api.example.com"


class TestSaveAndReset:
    def test_save(self, store, scripted_probe):
        current = _service(store, scripted_probe).save("http://10.0.0.9:8000")
        assert current.endpoint == "http://10.0.0.9:8000"
        assert current.source == EndpointSource.PERSISTED

    def test_save_invalid_raises(self, store, scripted_probe):
        service = _service(store, scripted_probe)
        with pytest.raises(InvalidEndpointError):
            service.save("10.0.0.9")
        assert store.get() is None

    def test_reset_returns_heuristic(self, store, scripted_probe):
        service = _service(store, scripted_probe)
        service.save("http://10.0.0.9:8000")
        current = service.reset()
        assert current.endpoint == LAN
        assert store.get() is None


class TestManualConnectionTest:
    @pytest.mark.asyncio
    async def test_test_does_not_save(self, store, scripted_probe):
        scripted_probe.results = {"http://10.0.0.9:8000": UP}
        result = await _service(store, scripted_probe).test("http://10.0.0.9:8000")
        assert result.reachable is True
        assert store.get() is None
        assert scripted_probe.calls == [("http://10.0.0.9:8000", 300)]

    @pytest.mark.asyncio
    async def test_test_and_save_reachable(self, store, scripted_probe):
        scripted_probe.results = {"http://10.0.0.9:8000": UP}
        result, current = await _service(store, scripted_probe).test_and_save(
            " http://10.0.0.9:8000", timeout_ms=900
        )
        assert result.reachable is True
        assert current.endpoint == "http://10.0.0.9:8000"
        assert current.source == EndpointSource.PERSISTED
        assert scripted_probe.calls == [("http://10.0.0.9:8000", 900)]

    @pytest.mark.asyncio
    async def test_test_and_save_unreachable(self, store, scripted_probe):
        scripted_probe.results = {"http://10.0.0.9:8000": DOWN}
        result, current = await _service(store, scripted_probe).test_and_save("http://10.0.0.9:8000")
        assert result.reachable is False
        assert store.get() is None
        assert current.source == EndpointSource.HOST_DERIVED

    @pytest.mark.asyncio
    async def test_test_and_save_invalid_raises_before_probing(self, store, scripted_probe):
        with pytest.raises(InvalidEndpointError):
            await _service(store, scripted_probe).test_and_save("not a url")
        assert scripted_probe.calls == []
