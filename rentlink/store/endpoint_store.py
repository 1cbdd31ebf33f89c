"""Durable store for the last confirmed-working endpoint."""

from __future__ import annotations

import logging

from rentlink.middleware.error_handler import InvalidEndpointError
from rentlink.models.endpoint import validate_endpoint
from rentlink.store.storage import KeyValueStorage

logger = logging.getLogger(__name__)

API_BASE_URL_KEY = "api_base_url"


class EndpointStore:
    """Read/write access to the persisted endpoint override.

    ``set`` validates before writing and leaves the stored value untouched
    when validation fails. A stored value that does not validate (for example
    one written by an older build) reads back as None.
    """

    def __init__(self, storage: KeyValueStorage, key: str = API_BASE_URL_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> str | None:
        value = self._storage.get(self._key)
        if value is None:
            return None
        try:
            return validate_endpoint(value)
        except InvalidEndpointError:
            logger.warning(
                "Ignoring invalid persisted endpoint",
                extra={"endpoint": value, "event": "store_invalid"},
            )
            return None

    def set(self, endpoint: str) -> str:
        """Persist ``endpoint`` and return the stored value.

        Raises:
            InvalidEndpointError: ``endpoint`` is not an absolute http(s) URL.
        """
        value = validate_endpoint(endpoint)
        self._storage.set(self._key, value)
        logger.info("Persisted endpoint override", extra={"endpoint": value, "event": "store_set"})
        return value

    def clear(self) -> None:
        self._storage.delete(self._key)
        logger.info("Cleared endpoint override", extra={"event": "store_clear"})
