"""Reachability probing."""

from rentlink.probe.health import DEFAULT_HEALTH_PATH, HealthProbe, classify_transport_error

__all__ = ["DEFAULT_HEALTH_PATH", "HealthProbe", "classify_transport_error"]
