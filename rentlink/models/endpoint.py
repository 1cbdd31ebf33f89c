"""Endpoint validation and the resolved-endpoint model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from rentlink.middleware.error_handler import InvalidEndpointError

_ALLOWED_SCHEMES = {"http", "https"}


class EndpointSource(str, Enum):
    """Which step of the resolution chain produced an endpoint."""

    BUILD_OVERRIDE = "build_override"
    PERSISTED = "persisted"
    NATIVE_SHELL = "native_shell"
    LOOPBACK = "loopback"
    HOST_DERIVED = "host_derived"


@dataclass(frozen=True)
class ResolvedConfig:
    """The active endpoint plus the source that produced it."""

    endpoint: str
    source: EndpointSource

    def to_dict(self) -> dict[str, str]:
        return {"endpoint": self.endpoint, "source": self.source.value}


def validate_endpoint(value: object) -> str:
    """Return ``value`` stripped of surrounding whitespace if it is an absolute
    http(s) URL with a hostname and a valid port.

    Raises ``InvalidEndpointError`` otherwise.
    """
    if not isinstance(value, str):
        raise InvalidEndpointError(endpoint=repr(value))

    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        raise InvalidEndpointError(endpoint=value)

    try:
        parsed = urlsplit(candidate)
        parsed.port  # raises ValueError for out-of-range / non-numeric ports
    except ValueError:
        raise InvalidEndpointError(endpoint=value) from None

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.hostname:
        raise InvalidEndpointError(endpoint=value)

    return candidate


def is_valid_endpoint(value: object) -> bool:
    try:
        validate_endpoint(value)
    except InvalidEndpointError:
        return False
    return True
