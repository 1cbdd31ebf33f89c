"""Connectivity diagnostics - concurrent candidate rounds and environment reports."""

from rentlink.diagnostics.controller import DiagnosticsController, select_first_reachable
from rentlink.diagnostics.environment import EnvironmentReport, collect_environment_report

__all__ = [
    "DiagnosticsController",
    "EnvironmentReport",
    "collect_environment_report",
    "select_first_reachable",
]
