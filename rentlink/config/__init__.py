"""Configuration module - settings and candidate lists."""

from rentlink.config.candidates import (
    CandidateEntry,
    load_candidate_endpoints,
    load_candidate_entries,
)
from rentlink.config.settings import DEFAULT_CANDIDATE_ENDPOINTS, RentlinkSettings

__all__ = [
    "DEFAULT_CANDIDATE_ENDPOINTS",
    "CandidateEntry",
    "RentlinkSettings",
    "load_candidate_endpoints",
    "load_candidate_entries",
]
