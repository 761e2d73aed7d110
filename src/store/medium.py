"""Storage medium contract.

This module defines the narrow capability interface the versioned
store depends on. File systems, object stores, and in-memory doubles
all satisfy it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageMedium(Protocol):
    """Hierarchical blob store addressed by namespace and key.

    Implementations must follow these rules:

    - ``write`` is create-if-absent and raises ``BlobExistsError`` when
      the key is already present.
    - ``read`` raises ``BlobNotFoundError`` for a missing key.
    - ``list`` returns an empty tuple for a missing namespace.
    - ``delete`` and ``delete_namespace`` are no-ops for missing targets.
    - Any other I/O failure is raised as ``BomRepoStoreError``.
    """

    def list(self, namespace: str) -> tuple[str, ...]:
        """Return the keys stored under a namespace."""
        ...

    def exists(self, namespace: str, key: str) -> bool:
        """Return whether a key is present in a namespace."""
        ...

    def read(self, namespace: str, key: str) -> bytes:
        """Return the blob stored at a key."""
        ...

    def write(self, namespace: str, key: str, data: bytes) -> None:
        """Create a blob at a key that does not exist yet."""
        ...

    def delete(self, namespace: str, key: str) -> None:
        """Remove the blob at a key."""
        ...

    def delete_namespace(self, namespace: str) -> None:
        """Remove a namespace and every blob inside it."""
        ...
