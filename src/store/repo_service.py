"""Versioned BOM document store.

This module maps ``(serial_number, version)`` pairs onto blobs in an
injected storage medium. It assigns versions, rejects version clashes,
and serializes writers per serial number.
"""

from __future__ import annotations

from contextlib import contextmanager
import re
import threading
from typing import Iterator

from core.errors import (
    BlobExistsError,
    BlobNotFoundError,
    BomAlreadyExistsError,
    BomRepoValidationError,
)
from core.logging_config import get_logger
from core.serial_number import namespace_for
from core.types import BomDocument
from store.bom_payload import decode_bom, encode_bom
from store.medium import StorageMedium

_LOGGER = get_logger(__name__)
_VERSION_KEY_RE = re.compile(r"[1-9][0-9]{0,17}")


class BomRepoService:
    """Versioned document store over a storage medium.

    One namespace holds every version of a serial number and one blob
    holds each version. Version numbers are derived by listing the
    namespace; there is no separate index. Stores for the same serial
    number are serialized with a per-serial-number lock, and the
    medium's create-if-absent write guards against writers in other
    processes.
    """

    def __init__(self, medium: StorageMedium) -> None:
        """Create a store over a medium.

        Args:
            medium: Storage medium holding one namespace per serial number.
        """
        self._medium = medium
        self._locks = _SerialNumberLocks()

    def store(self, document: BomDocument) -> BomDocument:
        """Persist a new version of a document.

        When ``document.version`` is None the next version is assigned as
        one past the highest stored version, or 1 for a new serial number.

        Args:
            document: Document to persist.

        Returns:
            The stored document with its version populated.

        Raises:
            BomRepoValidationError: If serial number or version is invalid.
            BomAlreadyExistsError: If the requested version is already stored.
            BomRepoStoreError: If the storage medium fails.
        """
        serial_number = document.serial_number
        _require_serial_number(serial_number)
        if document.version is not None:
            _require_version(document.version)
        namespace = namespace_for(serial_number)
        with self._locks.hold(serial_number):
            if document.version is None:
                version = _next_version(self._list_namespace_versions(namespace))
            else:
                version = document.version
                if self._medium.exists(namespace, _version_key(version)):
                    _LOGGER.warning(
                        "bom_version_conflict", serial_number=serial_number, version=version
                    )
                    raise BomAlreadyExistsError(serial_number, version)
            stored = document.with_version(version)
            try:
                self._medium.write(namespace, _version_key(version), encode_bom(stored))
            except BlobExistsError as error:
                _LOGGER.warning(
                    "bom_version_conflict", serial_number=serial_number, version=version
                )
                raise BomAlreadyExistsError(serial_number, version) from error
        _LOGGER.info(
            "bom_stored",
            serial_number=serial_number,
            version=version,
            version_assigned=document.version is None,
        )
        return stored

    def retrieve(self, serial_number: str, version: int) -> BomDocument | None:
        """Load one exact version.

        Args:
            serial_number: Serial number to read.
            version: Version number to read.

        Returns:
            The stored document, or None when that version is absent.
        """
        _require_serial_number(serial_number)
        if version < 1:
            return None
        try:
            data = self._medium.read(namespace_for(serial_number), _version_key(version))
        except BlobNotFoundError:
            return None
        return decode_bom(data)

    def retrieve_latest(self, serial_number: str) -> BomDocument | None:
        """Load the highest stored version.

        Args:
            serial_number: Serial number to read.

        Returns:
            The latest document, or None when nothing is stored.
        """
        for version in reversed(self.list_versions(serial_number)):
            document = self.retrieve(serial_number, version)
            if document is not None:
                return document
        return None

    def retrieve_all(self, serial_number: str) -> list[BomDocument]:
        """Load every stored version in ascending version order.

        Args:
            serial_number: Serial number to read.

        Returns:
            Documents sorted by version; empty when nothing is stored.
        """
        documents: list[BomDocument] = []
        for version in self.list_versions(serial_number):
            document = self.retrieve(serial_number, version)
            if document is not None:
                documents.append(document)
        return documents

    def list_versions(self, serial_number: str) -> tuple[int, ...]:
        """Return stored version numbers in ascending order."""
        _require_serial_number(serial_number)
        return self._list_namespace_versions(namespace_for(serial_number))

    def delete(self, serial_number: str, version: int) -> None:
        """Remove one version; missing versions are ignored.

        Args:
            serial_number: Serial number to modify.
            version: Version number to remove.
        """
        _require_serial_number(serial_number)
        if version < 1:
            return
        self._medium.delete(namespace_for(serial_number), _version_key(version))
        _LOGGER.info("bom_deleted", serial_number=serial_number, version=version)

    def delete_all(self, serial_number: str) -> None:
        """Remove every version of a serial number; missing namespaces are ignored.

        Args:
            serial_number: Serial number to remove.
        """
        _require_serial_number(serial_number)
        with self._locks.hold(serial_number):
            self._medium.delete_namespace(namespace_for(serial_number))
        _LOGGER.info("bom_namespace_deleted", serial_number=serial_number)

    def _list_namespace_versions(self, namespace: str) -> tuple[int, ...]:
        """List version numbers stored under a namespace.

        Keys that are not canonical positive integers of at most 18 digits
        are skipped.

        Args:
            namespace: Encoded serial number namespace.

        Returns:
            Ascending version numbers.
        """
        versions = (
            int(key) for key in self._medium.list(namespace) if _VERSION_KEY_RE.fullmatch(key)
        )
        return tuple(sorted(versions))


class _SerialNumberLocks:
    """Registry of one lock per serial number currently in use.

    Entries are reference counted and dropped once no caller holds or
    waits on them, so the registry only grows with concurrent activity.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _LockEntry] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, serial_number: str) -> Iterator[None]:
        """Hold the lock for a serial number for the duration of the block."""
        with self._guard:
            entry = self._entries.get(serial_number)
            if entry is None:
                entry = _LockEntry()
                self._entries[serial_number] = entry
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[serial_number]


class _LockEntry:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


def _next_version(versions: tuple[int, ...]) -> int:
    """Return one past the highest version, or 1 when none exist."""
    return max(versions, default=0) + 1


def _version_key(version: int) -> str:
    return str(version)


def _require_serial_number(serial_number: str) -> None:
    """Reject empty serial numbers before touching storage.

    Args:
        serial_number: Serial number to check.

    Raises:
        BomRepoValidationError: If the serial number is empty or blank.
    """
    if not isinstance(serial_number, str) or not serial_number.strip():
        raise BomRepoValidationError(
            "BOM serial number is required. Provide a non-empty serial number."
        )


def _require_version(version: int) -> None:
    """Reject explicit versions that are not positive integers.

    Args:
        version: Requested version.

    Raises:
        BomRepoValidationError: If the version is not a positive integer.
    """
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise BomRepoValidationError(
            f"Invalid BOM version {version!r}: expected a positive integer. "
            "Omit the version to have the next one assigned."
        )
