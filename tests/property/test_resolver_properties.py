"""Property tests for endpoint resolution.

Validates that a build-time override always wins, that resolution is
deterministic and that every resolved endpoint is a usable absolute URL.
"""

from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from conftest import hostnames, invalid_endpoints, valid_endpoints
from rentlink.models.endpoint import EndpointSource, is_valid_endpoint
from rentlink.resolver.platform import PlatformContext, StaticBridge
from rentlink.resolver.resolver import EndpointResolver

FALLBACK = "http://192.168.79.13:8000"

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

page_schemes = st.sampled_from(["http", "https", "capacitor", "ionic", "file"])
page_ports = st.one_of(st.none(), st.integers(min_value=1, max_value=65535))
page_locations = st.builds(
    lambda scheme, host, port, path: f"{scheme}://{host}" + (f":{port}" if port else "") + path,
    page_schemes,
    st.one_of(hostnames, st.sampled_from(["localhost", "127.0.0.1"])),
    page_ports,
    st.sampled_from(["", "/", "/tenants", "/index.html?x=1"]),
)
bridges = st.one_of(st.none(), st.sampled_from(["android", "ios"]).map(StaticBridge))
backend_ports = st.integers(min_value=1, max_value=65535)


def _resolver(location, bridge=None, override=None, port=8000) -> EndpointResolver:
    return EndpointResolver(
        context=PlatformContext(location=location, bridge=bridge),
        native_fallback=FALLBACK,
        build_override=override,
        backend_port=port,
    )


# ---------------------------------------------------------------------------
# Build-time override precedence
# ---------------------------------------------------------------------------


@given(location=page_locations, bridge=bridges, override=valid_endpoints)
@settings(max_examples=100)
def test_valid_override_always_wins(location, bridge, override):
    config = _resolver(location, bridge, override).resolve()
    assert config.endpoint == override
    assert config.source == EndpointSource.BUILD_OVERRIDE


@given(location=page_locations, bridge=bridges, override=invalid_endpoints)
@settings(max_examples=100)
def test_invalid_override_never_wins(location, bridge, override):
    config = _resolver(location, bridge, override).resolve()
    assert config.source != EndpointSource.BUILD_OVERRIDE


# ---------------------------------------------------------------------------
# Heuristic chain
# ---------------------------------------------------------------------------


@given(location=page_locations, bridge=bridges, port=backend_ports)
@settings(max_examples=100)
def test_resolution_is_deterministic_and_valid(location, bridge, port):
    resolver = _resolver(location, bridge, port=port)
    first = resolver.resolve()
    assert first == resolver.resolve()
    assert is_valid_endpoint(first.endpoint)


@given(host=hostnames, port=backend_ports)
@settings(max_examples=100)
def test_native_shell_always_uses_fallback(host, port):
    for location, bridge in (
        (f"capacitor://{host}", None),
        (f"http://{host}/", StaticBridge("android")),
    ):
        config = _resolver(location, bridge, port=port).resolve()
        assert config.endpoint == FALLBACK
        assert config.source == EndpointSource.NATIVE_SHELL


@given(host=hostnames, page_port=page_ports, port=backend_ports)
@settings(max_examples=100)
def test_browser_host_keeps_hostname_and_uses_backend_port(host, page_port, port):
    assume(host not in ("localhost", "127.0.0.1"))
    location = f"http://{host}" + (f":{page_port}" if page_port else "") + "/"
    config = _resolver(location, port=port).resolve()
    assert config.source == EndpointSource.HOST_DERIVED
    assert config.endpoint == f"http://{host}:{port}"
