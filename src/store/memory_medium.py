"""In-memory storage medium.

Used for tests and the ``memory`` backend. Contents live only as long
as the medium instance.
"""

from __future__ import annotations

import threading

from core.errors import BlobExistsError, BlobNotFoundError


class InMemoryMedium:
    """Thread-safe dictionary-backed storage medium."""

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, bytes]] = {}
        self._lock = threading.Lock()

    def list(self, namespace: str) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._namespaces.get(namespace, {})))

    def exists(self, namespace: str, key: str) -> bool:
        with self._lock:
            return key in self._namespaces.get(namespace, {})

    def read(self, namespace: str, key: str) -> bytes:
        with self._lock:
            blobs = self._namespaces.get(namespace, {})
            if key not in blobs:
                raise BlobNotFoundError(f"No blob at {namespace}/{key}.")
            return blobs[key]

    def write(self, namespace: str, key: str, data: bytes) -> None:
        with self._lock:
            blobs = self._namespaces.setdefault(namespace, {})
            if key in blobs:
                raise BlobExistsError(f"Blob already exists at {namespace}/{key}.")
            blobs[key] = bytes(data)

    def delete(self, namespace: str, key: str) -> None:
        with self._lock:
            self._namespaces.get(namespace, {}).pop(key, None)

    def delete_namespace(self, namespace: str) -> None:
        with self._lock:
            self._namespaces.pop(namespace, None)
