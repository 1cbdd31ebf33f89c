"""Public models for the connectivity subsystem."""

from rentlink.models.api import (
    ApiResponse,
    CandidateRetestRequest,
    EndpointTestRequest,
    RunDiagnosticsRequest,
    SaveEndpointRequest,
)
from rentlink.models.candidate import (
    Candidate,
    FailureReason,
    ProbeResult,
    ProbeState,
    RoundReport,
)
from rentlink.models.endpoint import (
    EndpointSource,
    ResolvedConfig,
    is_valid_endpoint,
    validate_endpoint,
)

__all__ = [
    "ApiResponse",
    "Candidate",
    "CandidateRetestRequest",
    "EndpointSource",
    "EndpointTestRequest",
    "FailureReason",
    "ProbeResult",
    "ProbeState",
    "ResolvedConfig",
    "RoundReport",
    "RunDiagnosticsRequest",
    "SaveEndpointRequest",
    "is_valid_endpoint",
    "validate_endpoint",
]
