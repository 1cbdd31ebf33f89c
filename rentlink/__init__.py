"""Backend endpoint resolution and connectivity diagnostics for the rental client."""

__version__ = "1.0.0"
