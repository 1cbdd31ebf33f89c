"""Platform signals consumed by endpoint resolution.

The client runs either in a regular browser tab or inside the native shell's
WebView. Inside the shell the page location does not describe where the
backend lives (it is ``capacitor://localhost`` or similar), so resolution
needs to know which of the two it is looking at.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit

# URI schemes the native shell serves its bundled pages from.
NATIVE_SCHEMES = frozenset({"capacitor", "ionic"})


@runtime_checkable
class NativeBridge(Protocol):
    """Object injected by the native shell."""

    def is_native_platform(self) -> bool: ...

    def get_platform(self) -> str: ...


@dataclass(frozen=True)
class StaticBridge:
    """Bridge stand-in for a shell whose platform is known from configuration."""

    platform: str
    native: bool = True

    def is_native_platform(self) -> bool:
        return self.native

    def get_platform(self) -> str:
        return self.platform


@dataclass(frozen=True)
class PlatformContext:
    """Where the client page is running.

    Attributes:
        location: Full URL of the current page (``window.location.href``).
        bridge: The native shell's bridge object, or None outside the shell.
    """

    location: str = ""
    bridge: NativeBridge | None = None

    @property
    def scheme(self) -> str:
        try:
            return urlsplit(self.location).scheme.lower()
        except ValueError:
            return ""

    @property
    def hostname(self) -> str:
        try:
            return (urlsplit(self.location).hostname or "").lower()
        except ValueError:
            return ""

    def is_native_shell(self) -> bool:
        return self.scheme in NATIVE_SCHEMES or self.bridge is not None

    def platform_name(self) -> str | None:
        if self.bridge is None:
            return None
        return self.bridge.get_platform()
