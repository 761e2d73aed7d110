"""Python SDK for BOM repository operations.

This module exposes the request-boundary API: it validates serial
number syntax and delegates to the versioned store.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import BomRepoConfig
from core.errors import BomRepoValidationError
from core.serial_number import is_valid_serial_number
from core.types import BomDocument
from store.bom_payload import read_bom_file
from store.medium import StorageMedium
from store.medium_factory import build_storage_medium
from store.repo_service import BomRepoService


class BomRepoClient:
    """Primary SDK entry point for BOM repository workflows."""

    def __init__(
        self,
        config: BomRepoConfig | None = None,
        medium: StorageMedium | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            medium: Optional storage medium; built from config when omitted.
        """
        self._config = config or BomRepoConfig.from_env()
        self._service = BomRepoService(medium or build_storage_medium(self._config))

    @property
    def config(self) -> BomRepoConfig:
        return self._config

    def store(self, document: BomDocument) -> BomDocument:
        """Store a document, assigning the next version when none is set.

        Args:
            document: Document to store.

        Returns:
            Stored document with version populated.

        Raises:
            BomRepoValidationError: If the serial number is not a UUID URN.
            BomAlreadyExistsError: If the requested version already exists.
        """
        _validate_serial_number(document.serial_number)
        return self._service.store(document)

    def store_file(self, bom_path: str | Path, version: int | None = None) -> BomDocument:
        """Read a CycloneDX JSON file and store it.

        Args:
            bom_path: Path to the JSON document.
            version: Optional version overriding the one in the file.

        Returns:
            Stored document with version populated.
        """
        document = read_bom_file(Path(bom_path))
        if version is not None:
            document = document.with_version(version)
        return self.store(document)

    def retrieve(self, serial_number: str, version: int) -> BomDocument | None:
        """Load one version, or None when it is absent."""
        _validate_serial_number(serial_number)
        return self._service.retrieve(serial_number, version)

    def retrieve_latest(self, serial_number: str) -> BomDocument | None:
        """Load the latest version, or None when nothing is stored."""
        _validate_serial_number(serial_number)
        return self._service.retrieve_latest(serial_number)

    def retrieve_all(self, serial_number: str) -> list[BomDocument]:
        """Load all versions in ascending version order."""
        _validate_serial_number(serial_number)
        return self._service.retrieve_all(serial_number)

    def list_versions(self, serial_number: str) -> tuple[int, ...]:
        """Return stored version numbers in ascending order."""
        _validate_serial_number(serial_number)
        return self._service.list_versions(serial_number)

    def delete(self, serial_number: str, version: int) -> None:
        """Remove one version of a serial number."""
        _validate_serial_number(serial_number)
        self._service.delete(serial_number, version)

    def delete_all(self, serial_number: str) -> None:
        """Remove every version of a serial number."""
        _validate_serial_number(serial_number)
        self._service.delete_all(serial_number)

    def with_data_root(self, data_root: str) -> "BomRepoClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return BomRepoClient(replace(self._config, data_root=resolved_root))


def _validate_serial_number(serial_number: str) -> None:
    """Reject serial numbers that are not UUID URNs.

    Args:
        serial_number: Serial number from the caller.

    Raises:
        BomRepoValidationError: If the serial number is malformed.
    """
    if not is_valid_serial_number(serial_number):
        raise BomRepoValidationError(
            f"Invalid BOM serial number '{serial_number}': expected urn:uuid:<uuid>. "
            "Use an RFC 4122 UUID URN such as urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79."
        )
