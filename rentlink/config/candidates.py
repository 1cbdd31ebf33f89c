"""Candidate endpoint list models and YAML loader.

The diagnostics screen probes a fixed, ordered list of likely backend
addresses. The list comes from the settings by default and can be replaced by
a YAML file of the form::

    candidates:
      - url: http://192.168.79.13:8000
        label: primary LAN host
      - http://localhost:8000

Order is preserved: it decides which reachable candidate gets promoted.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from rentlink.middleware.error_handler import InvalidEndpointError
from rentlink.models.endpoint import validate_endpoint

logger = logging.getLogger(__name__)


class CandidateEntry(BaseModel):
    """One configured candidate endpoint."""

    url: str
    label: str | None = None

    @field_validator("url")
    @classmethod
    def _url_is_endpoint(cls, value: str) -> str:
        try:
            return validate_endpoint(value)
        except InvalidEndpointError as exc:
            raise ValueError(str(exc)) from None


def load_candidate_entries(yaml_path: str) -> list[CandidateEntry] | None:
    """Parse a candidates YAML file.

    Returns None when the file is missing, unparseable or lacks a
    ``candidates`` list, so callers can fall back to their defaults. Invalid
    entries are skipped.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Candidates file not found at %s - using configured defaults", yaml_path)
        return None

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse candidates YAML at %s: %s", yaml_path, exc)
        return None

    if not isinstance(raw, dict) or not isinstance(raw.get("candidates"), list):
        logger.warning("Candidates YAML missing 'candidates' list - using configured defaults")
        return None

    entries: list[CandidateEntry] = []
    for position, item in enumerate(raw["candidates"]):
        data = {"url": item} if isinstance(item, str) else item
        try:
            entries.append(CandidateEntry.model_validate(data))
        except Exception as exc:
            logger.error("Invalid candidate at position %d: %s - skipping", position, exc)

    return entries


def load_candidate_endpoints(yaml_path: str | None, default: list[str]) -> list[str]:
    """Return the ordered candidate URLs, preferring ``yaml_path`` when usable."""
    if yaml_path:
        entries = load_candidate_entries(yaml_path)
        if entries:
            return [entry.url for entry in entries]
    return list(default)
