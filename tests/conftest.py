"""Shared test fixtures, probe doubles and hypothesis strategies."""

from __future__ import annotations

import asyncio
import os

import pytest
from hypothesis import strategies as st

from rentlink.config.settings import RentlinkSettings
from rentlink.diagnostics.controller import DiagnosticsController
from rentlink.models.candidate import FailureReason, ProbeResult
from rentlink.store.endpoint_store import EndpointStore
from rentlink.store.storage import InMemoryStorage


# ---------------------------------------------------------------------------
# Keep the developer's environment out of RentlinkSettings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove RENTLINK_* variables so settings only see test values."""
    for key in list(os.environ):
        if key.startswith("RENTLINK_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Probe double
# ---------------------------------------------------------------------------

UP = ProbeResult(reachable=True, latency_ms=12.0, status_code=200)
DOWN = ProbeResult(
    reachable=False,
    latency_ms=3.0,
    reason=FailureReason.CONNECTION_REFUSED,
    detail="[Errno 111] Connection refused",
)
TIMED_OUT = ProbeResult(
    reachable=False, latency_ms=5000.0, reason=FailureReason.TIMEOUT, detail="No response"
)


class ScriptedProbe:
    """Probe double returning preset results.

    The result for a URL is read when the probe starts, so tests can change
    ``results`` between rounds. A gate registered in ``gates`` is consumed by
    the next probe of that URL, which then waits for the gate to be set.
    ``delays`` adds an ``asyncio.sleep`` before answering.
    """

    def __init__(self, results: dict[str, ProbeResult] | None = None) -> None:
        self.results: dict[str, ProbeResult] = dict(results or {})
        self.gates: dict[str, asyncio.Event] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, int]] = []
        self.on_call = None

    async def probe(self, endpoint: str, timeout_ms: int) -> ProbeResult:
        self.calls.append((endpoint, timeout_ms))
        if self.on_call is not None:
            self.on_call(endpoint)
        result = self.results.get(endpoint, DOWN)
        gate = self.gates.pop(endpoint, None)
        if gate is not None:
            await gate.wait()
        delay = self.delays.get(endpoint)
        if delay:
            await asyncio.sleep(delay)
        return result


def run_async(coro):
    """Run a coroutine on a private event loop (for hypothesis tests)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> RentlinkSettings:
    return RentlinkSettings(
        page_location="http://localhost:5173/",
        startup_discovery=False,
        probe_timeout_ms=200,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage) -> EndpointStore:
    return EndpointStore(storage)


@pytest.fixture
def scripted_probe() -> ScriptedProbe:
    return ScriptedProbe()


@pytest.fixture
def controller(scripted_probe: ScriptedProbe, store: EndpointStore) -> DiagnosticsController:
    return DiagnosticsController(scripted_probe, store, timeout_ms=200)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

hostnames = st.one_of(
    st.from_regex(r"[a-z]{3,10}(\.[a-z]{2,6}){0,2}", fullmatch=True),
    st.tuples(*[st.integers(min_value=1, max_value=254)] * 4).map(
        lambda parts: ".".join(str(p) for p in parts)
    ),
)
ports = st.one_of(st.none(), st.integers(min_value=1, max_value=65535))
schemes = st.sampled_from(["http", "https"])

valid_endpoints = st.builds(
    lambda scheme, host, port: f"{scheme}://{host}" + (f":{port}" if port else ""),
    schemes,
    hostnames,
    ports,
)

invalid_endpoints = st.one_of(
    st.just(""),
    st.just("   "),
    st.from_regex(r"[a-z]{3,10}", fullmatch=True),  # bare word, no scheme
    hostnames.map(lambda h: f"{h}:8000"),  # host:port without scheme
    hostnames.map(lambda h: f"ftp://{h}"),  # unsupported scheme
    hostnames.map(lambda h: f"http://{h}:99999"),  # port out of range
    hostnames.map(lambda h: f"http://{h}:abc"),  # non-numeric port
    st.just("http://"),  # no host
    st.just("http:///path"),
    hostnames.map(lambda h: f"http://{h} /x"),  # embedded whitespace
)
