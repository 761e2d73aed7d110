"""bomrepo exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class BomRepoError(Exception):
    """Base exception for all bomrepo failures."""


class BomRepoConfigError(BomRepoError):
    """Raised for invalid runtime configuration."""


class BomRepoValidationError(BomRepoError):
    """Raised when a request fails a precondition before storage access."""


class BomRepoPayloadError(BomRepoError):
    """Raised when a stored or submitted document cannot be decoded."""


class BomRepoStoreError(BomRepoError):
    """Raised for storage medium failures."""


class BlobExistsError(BomRepoStoreError):
    """Raised by a storage medium when a create-only write hits an existing key."""


class BlobNotFoundError(BomRepoStoreError):
    """Raised by a storage medium when reading a key that does not exist."""


class BomRepoDependencyError(BomRepoError):
    """Raised when an optional runtime dependency is missing."""


class BomAlreadyExistsError(BomRepoError):
    """Raised when storing a document at an occupied serial number and version."""

    def __init__(self, serial_number: str, version: int) -> None:
        super().__init__(
            f"BOM {serial_number} version {version} already exists. "
            "Store it under a different version or omit the version to assign the next one."
        )
        self.serial_number = serial_number
        self.version = version
