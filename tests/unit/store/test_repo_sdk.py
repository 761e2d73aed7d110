"""Unit tests for the BOM repository SDK client."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import BomRepoConfig
from core.constants import REPO_DIR_NAME
from core.errors import BomRepoConfigError, BomRepoValidationError
from core.types import BomDocument
from tests.fixture_paths import fixture_path
from store.local_medium import LocalFileMedium
from store.medium_factory import build_storage_medium
from store.memory_medium import InMemoryMedium
from store.repo_sdk import BomRepoClient

_SERIAL_NUMBER = "urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79"


def _client(tmp_path: Path) -> BomRepoClient:
    return BomRepoClient(BomRepoConfig(data_root=tmp_path), medium=InMemoryMedium())


def test_store_file_assigns_first_version(tmp_path: Path) -> None:
    """Storing a fixture without a version should assign version 1."""
    client = _client(tmp_path)

    stored = client.store_file(fixture_path("boms/sample_bom.json"))

    assert (stored.serial_number, stored.version) == (_SERIAL_NUMBER, 1)


def test_store_file_keeps_version_from_document(tmp_path: Path) -> None:
    """A version inside the file should be used as the explicit version."""
    client = _client(tmp_path)

    stored = client.store_file(fixture_path("boms/versioned_bom.json"))

    assert stored.version == 4


def test_store_file_version_argument_overrides_document(tmp_path: Path) -> None:
    """An explicit version argument should win over the file's version."""
    client = _client(tmp_path)

    stored = client.store_file(fixture_path("boms/versioned_bom.json"), version=9)

    assert client.list_versions(stored.serial_number) == (9,)


@pytest.mark.parametrize("serial_number", ["abc", "urn_uuid_3e671687-395b-41f5-a30f-a58921a69b70"])
def test_store_rejects_malformed_serial_number(tmp_path: Path, serial_number: str) -> None:
    """Serial numbers that are not UUID URNs should be rejected."""
    client = _client(tmp_path)

    with pytest.raises(BomRepoValidationError):
        client.store(BomDocument(serial_number=serial_number))


def test_read_operations_validate_serial_number(tmp_path: Path) -> None:
    """Read and delete operations should validate serial numbers too."""
    client = _client(tmp_path)

    with pytest.raises(BomRepoValidationError):
        client.retrieve_latest("abc")


def test_client_round_trips_through_local_medium(tmp_path: Path) -> None:
    """The default local backend should persist under <data_root>/repo."""
    client = BomRepoClient(BomRepoConfig(data_root=tmp_path))

    client.store(BomDocument(serial_number=_SERIAL_NUMBER))

    assert client.retrieve(_SERIAL_NUMBER, 1) is not None
    assert (tmp_path / REPO_DIR_NAME).is_dir()


def test_with_data_root_switches_repository(tmp_path: Path) -> None:
    """A cloned client should read from its own data root."""
    client = BomRepoClient(BomRepoConfig(data_root=tmp_path / "a"))
    client.store(BomDocument(serial_number=_SERIAL_NUMBER))

    other = client.with_data_root(str(tmp_path / "b"))

    assert other.retrieve_all(_SERIAL_NUMBER) == []


def test_build_storage_medium_selects_backend(tmp_path: Path) -> None:
    """The factory should honour the configured backend name."""
    local = build_storage_medium(BomRepoConfig(data_root=tmp_path))
    memory = build_storage_medium(BomRepoConfig(data_root=tmp_path, storage_backend="memory"))

    assert isinstance(local, LocalFileMedium) and local.root == tmp_path / REPO_DIR_NAME
    assert isinstance(memory, InMemoryMedium)


def test_build_storage_medium_rejects_unknown_backend(tmp_path: Path) -> None:
    """Unknown backend names should raise a config error."""
    with pytest.raises(BomRepoConfigError):
        build_storage_medium(BomRepoConfig(data_root=tmp_path, storage_backend="ftp"))
