"""Unit tests for BOM JSON serialization."""

from __future__ import annotations

import json

import pytest

from core.errors import BomRepoPayloadError
from core.types import BomDocument
from tests.fixture_paths import fixture_path
from store.bom_payload import bom_to_payload, decode_bom, encode_bom, read_bom_file


def test_encode_merges_identity_into_content() -> None:
    """Encoded documents should carry serialNumber and version at top level."""
    document = BomDocument(
        serial_number="urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79",
        version=3,
        content={"bomFormat": "CycloneDX"},
    )

    payload = json.loads(encode_bom(document))

    assert payload == {
        "bomFormat": "CycloneDX",
        "serialNumber": "urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79",
        "version": 3,
    }


def test_payload_without_version_omits_field() -> None:
    """Unversioned documents should not emit a version field."""
    document = BomDocument(serial_number="s", content={"version": 7})

    assert "version" not in bom_to_payload(document)


def test_decode_separates_identity_from_content() -> None:
    """Decoding should lift identity fields out of the content mapping."""
    data = b'{"serialNumber": "s", "version": 2, "components": []}'

    document = decode_bom(data)

    assert (document.serial_number, document.version) == ("s", 2)
    assert dict(document.content) == {"components": []}


@pytest.mark.parametrize(
    "data",
    [
        b"not json",
        b"[]",
        b'{"version": 1}',
        b'{"serialNumber": ""}',
        b'{"serialNumber": "s", "version": "2"}',
        b'{"serialNumber": "s", "version": true}',
        b"\xff\xfe",
    ],
)
def test_decode_rejects_malformed_payloads(data: bytes) -> None:
    """Malformed documents should raise BomRepoPayloadError."""
    with pytest.raises(BomRepoPayloadError):
        decode_bom(data)


def test_read_bom_file_parses_fixture() -> None:
    """A CycloneDX JSON fixture should load without a version."""
    document = read_bom_file(fixture_path("boms/sample_bom.json"))

    assert document.version is None
    assert document.content["bomFormat"] == "CycloneDX"


def test_read_bom_file_raises_for_missing_path(tmp_path) -> None:
    """Missing files should raise BomRepoPayloadError."""
    with pytest.raises(BomRepoPayloadError):
        read_bom_file(tmp_path / "missing.json")
