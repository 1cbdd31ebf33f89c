"""Persistence of the confirmed endpoint."""

from rentlink.store.endpoint_store import API_BASE_URL_KEY, EndpointStore
from rentlink.store.storage import InMemoryStorage, JsonFileStorage, KeyValueStorage

__all__ = [
    "API_BASE_URL_KEY",
    "EndpointStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
]
