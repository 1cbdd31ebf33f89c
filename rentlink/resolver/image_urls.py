"""Rewrite image paths returned by the backend into absolute URLs."""

from __future__ import annotations

from collections.abc import Callable

PLACEHOLDER_IMAGE = "/placeholder.svg?height=400&width=600"


def rewrite_image_url(
    path: str | None,
    endpoint: str,
    placeholder: str = PLACEHOLDER_IMAGE,
) -> str:
    """Return an absolute URL for ``path`` served by ``endpoint``.

    Empty paths map to the locally served placeholder. Absolute http(s) URLs
    are checked before leading slashes so externally hosted images are never
    prefixed with the endpoint.
    """
    value = (path or "").strip()
    if not value:
        return placeholder

    if value.lower().startswith(("http://", "https://")):
        return value

    if value == placeholder:
        return value

    base = endpoint.rstrip("/")
    if value.startswith("/"):
        return f"{base}{value}"
    return f"{base}/{value}"


class ImageUrlRewriter:
    """Bind ``rewrite_image_url`` to a source of the current endpoint.

    The endpoint provider is called on every rewrite so that a newly promoted
    endpoint takes effect immediately.
    """

    def __init__(
        self,
        endpoint_provider: Callable[[], str],
        placeholder: str = PLACEHOLDER_IMAGE,
    ) -> None:
        self._endpoint_provider = endpoint_provider
        self._placeholder = placeholder

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def rewrite(self, path: str | None) -> str:
        return rewrite_image_url(path, self._endpoint_provider(), self._placeholder)
