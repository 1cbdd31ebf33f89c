"""Bounded-time reachability probe against a candidate endpoint.

Issues ``GET {endpoint}{health_path}`` and reports the outcome as a
``ProbeResult``. The request is cancelled exactly at the deadline with
``asyncio.wait_for``. httpx timeouts apply per phase (connect, read, ...),
not to the request as a whole.

The probe never raises: timeouts, DNS, refused connections, TLS failures and
non-2xx responses all come back as ``reachable=False`` with a distinct reason.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

from rentlink.middleware.error_handler import InvalidEndpointError
from rentlink.models.candidate import FailureReason, ProbeResult
from rentlink.models.endpoint import validate_endpoint

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_PATH = "/health"

_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)
_TLS_MARKERS = ("ssl", "certificate", "tls")


def classify_transport_error(exc: httpx.HTTPError) -> FailureReason:
    """Map an httpx transport failure to a FailureReason."""
    if isinstance(exc, httpx.TimeoutException):
        return FailureReason.TIMEOUT

    if isinstance(exc, httpx.ConnectError):
        text = str(exc).lower()
        if any(marker in text for marker in _TLS_MARKERS):
            return FailureReason.TLS_ERROR
        if any(marker in text for marker in _DNS_MARKERS):
            return FailureReason.DNS_ERROR
        if "refused" in text:
            return FailureReason.CONNECTION_REFUSED
        return FailureReason.CONNECT_ERROR

    return FailureReason.TRANSPORT_ERROR


class HealthProbe:
    """Single-shot health check for candidate endpoints.

    Args:
        health_path: Path appended to the endpoint, e.g. ``/health``.
        transport: Optional httpx transport (tests inject ``httpx.MockTransport``).
        verify: TLS verification passed to httpx.
    """

    def __init__(
        self,
        health_path: str = DEFAULT_HEALTH_PATH,
        transport: httpx.AsyncBaseTransport | None = None,
        verify: bool = True,
    ) -> None:
        self._health_path = health_path
        self._transport = transport
        self._verify = verify

    def health_url(self, endpoint: str) -> str:
        return f"{endpoint.rstrip('/')}{self._health_path}"

    async def probe(self, endpoint: str, timeout_ms: int) -> ProbeResult:
        try:
            base = validate_endpoint(endpoint)
        except InvalidEndpointError:
            return ProbeResult(
                reachable=False,
                latency_ms=0.0,
                reason=FailureReason.INVALID_ENDPOINT,
                detail=f"Not an absolute http(s) URL: {endpoint!r}",
            )

        url = self.health_url(base)
        timeout_s = timeout_ms / 1000.0
        started = time.monotonic()

        try:
            response = await asyncio.wait_for(self._get(url, timeout_s), timeout=timeout_s)
        except asyncio.TimeoutError:
            result = ProbeResult(
                reachable=False,
                latency_ms=_elapsed_ms(started),
                reason=FailureReason.TIMEOUT,
                detail=f"No response within {timeout_ms}ms",
            )
        except httpx.HTTPError as exc:
            result = ProbeResult(
                reachable=False,
                latency_ms=_elapsed_ms(started),
                reason=classify_transport_error(exc),
                detail=str(exc) or exc.__class__.__name__,
            )
        except Exception as exc:  # noqa: BLE001
            result = ProbeResult(
                reachable=False,
                latency_ms=_elapsed_ms(started),
                reason=FailureReason.TRANSPORT_ERROR,
                detail=f"{exc.__class__.__name__}: {exc}",
            )
        else:
            if response.is_success:
                result = ProbeResult(
                    reachable=True,
                    latency_ms=_elapsed_ms(started),
                    status_code=response.status_code,
                )
            else:
                result = ProbeResult(
                    reachable=False,
                    latency_ms=_elapsed_ms(started),
                    reason=FailureReason.HTTP_STATUS,
                    detail=f"HTTP {response.status_code}",
                    status_code=response.status_code,
                )

        logger.debug(
            "Probe %s -> %s",
            url,
            result.reason.value if result.reason else "reachable",
            extra={
                "endpoint": base,
                "latency_ms": round(result.latency_ms, 1),
                "reason": result.reason.value if result.reason else None,
            },
        )
        return result

    async def _get(self, url: str, timeout_s: float) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(timeout_s),
            verify=self._verify,
        ) as client:
            return await client.get(url, headers={"Accept": "application/json"})


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000.0
