"""Probe results, diagnostics candidates and round reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProbeState(str, Enum):
    """Lifecycle of a candidate within one diagnostics round."""

    PENDING = "pending"
    TESTING = "testing"
    SUCCESS = "success"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why a probe reported ``reachable=False``."""

    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    DNS_ERROR = "dns_error"
    TLS_ERROR = "tls_error"
    CONNECT_ERROR = "connect_error"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS = "http_status"
    INVALID_ENDPOINT = "invalid_endpoint"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single bounded-time reachability check."""

    reachable: bool
    latency_ms: float
    reason: FailureReason | None = None
    detail: str | None = None
    status_code: int | None = None

    def to_dict(self) -> dict:
        return {
            "reachable": self.reachable,
            "latency_ms": round(self.latency_ms, 1),
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
            "status_code": self.status_code,
        }


@dataclass
class Candidate:
    """An endpoint under test plus its probe metadata for one round."""

    url: str
    state: ProbeState = ProbeState.PENDING
    round_id: int = 0
    latency_ms: float | None = None
    reason: FailureReason | None = None
    detail: str | None = None
    status_code: int | None = None

    @classmethod
    def from_probe(cls, url: str, result: ProbeResult, round_id: int) -> Candidate:
        return cls(
            url=url,
            state=ProbeState.SUCCESS if result.reachable else ProbeState.FAILED,
            round_id=round_id,
            latency_ms=result.latency_ms,
            reason=result.reason,
            detail=result.detail,
            status_code=result.status_code,
        )

    @property
    def settled(self) -> bool:
        return self.state in (ProbeState.SUCCESS, ProbeState.FAILED)

    @property
    def summary(self) -> str:
        """Short status label, e.g. ``success`` or ``failed:timeout``."""
        if self.state == ProbeState.FAILED and self.reason is not None:
            return f"{self.state.value}:{self.reason.value}"
        return self.state.value

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "state": self.state.value,
            "summary": self.summary,
            "round_id": self.round_id,
            "latency_ms": round(self.latency_ms, 1) if self.latency_ms is not None else None,
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
            "status_code": self.status_code,
        }


@dataclass
class RoundReport:
    """Result of one ``run_all`` invocation.

    ``stale`` is set when a newer round started before this one settled; a
    stale report was neither applied to the controller's state nor promoted.
    """

    round_id: int
    candidates: list[Candidate] = field(default_factory=list)
    promoted: str | None = None
    stale: bool = False

    @property
    def all_failed(self) -> bool:
        return not any(c.state == ProbeState.SUCCESS for c in self.candidates)

    def to_dict(self) -> dict:
        return {
            "round_id": self.round_id,
            "candidates": [c.to_dict() for c in self.candidates],
            "promoted": self.promoted,
            "stale": self.stale,
            "all_failed": self.all_failed,
        }
