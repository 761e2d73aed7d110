"""Integration test for the file-backed BOM repository lifecycle."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from core.config import BomRepoConfig
from core.serial_number import namespace_for
from core.types import BomDocument
from store.repo_sdk import BomRepoClient


def test_versions_survive_client_restart(tmp_path, monkeypatch) -> None:
    """Versions written by one client should be visible to a fresh client."""
    monkeypatch.setenv("BOMREPO_DATA_ROOT", str(tmp_path))
    serial_number = "urn:uuid:{3e671687-395b-41f5-a30f-a58921a69b79}"
    writer = BomRepoClient()
    for _ in range(3):
        writer.store(BomDocument(serial_number=serial_number, content={"bomFormat": "CycloneDX"}))
    writer.store(BomDocument(serial_number=serial_number, version=10))

    reader = BomRepoClient(BomRepoConfig.from_env())
    latest = reader.retrieve_latest(serial_number)
    next_stored = reader.store(BomDocument(serial_number=serial_number))

    assert reader.list_versions(serial_number) == (1, 2, 3, 10, 11)
    assert latest is not None and latest.version == 10
    assert next_stored.version == 11
    assert (tmp_path / "repo" / namespace_for(serial_number) / "11").is_file()


def test_concurrent_local_writers_assign_unique_versions(tmp_path) -> None:
    """Threads sharing a client should never reuse a version on disk."""
    client = BomRepoClient(BomRepoConfig(data_root=tmp_path))
    serial_number = "urn:uuid:9b2a6f0e-5c1d-4e8a-9f3b-2d7c8e1a4b60"

    with ThreadPoolExecutor(max_workers=6) as executor:
        stored = list(
            executor.map(
                lambda _: client.store(BomDocument(serial_number=serial_number)),
                range(24),
            )
        )

    assert sorted(document.version for document in stored) == list(range(1, 25))
    assert [document.version for document in client.retrieve_all(serial_number)] == list(
        range(1, 25)
    )
