"""JSON serialization for BOM documents.

Documents are persisted as CycloneDX-style JSON objects with the
``serialNumber`` and ``version`` fields merged into the content.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import SERIAL_NUMBER_FIELD, VERSION_FIELD
from core.errors import BomRepoPayloadError
from core.types import BomDocument


def bom_to_payload(document: BomDocument) -> dict[str, Any]:
    """Serialize a document into a JSON-safe payload.

    Args:
        document: Document to serialize.

    Returns:
        Dictionary payload for JSON encoding.
    """
    payload = dict(document.content)
    payload[SERIAL_NUMBER_FIELD] = document.serial_number
    if document.version is not None:
        payload[VERSION_FIELD] = document.version
    else:
        payload.pop(VERSION_FIELD, None)
    return payload


def bom_from_payload(payload: Any) -> BomDocument:
    """Deserialize a JSON payload into a document.

    Args:
        payload: Parsed JSON value.

    Returns:
        Parsed document; version is None when the payload has none.

    Raises:
        BomRepoPayloadError: If identity fields are missing or malformed.
    """
    if not isinstance(payload, dict):
        raise BomRepoPayloadError("Invalid BOM payload: expected JSON object at top level.")
    content = dict(payload)
    serial_number = content.pop(SERIAL_NUMBER_FIELD, None)
    if not isinstance(serial_number, str) or not serial_number:
        raise BomRepoPayloadError(
            f"Invalid BOM payload: '{SERIAL_NUMBER_FIELD}' must be a non-empty string."
        )
    version = content.pop(VERSION_FIELD, None)
    if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
        raise BomRepoPayloadError(
            f"Invalid BOM payload: '{VERSION_FIELD}' must be an integer, got {version!r}."
        )
    return BomDocument(serial_number=serial_number, version=version, content=content)


def encode_bom(document: BomDocument) -> bytes:
    """Encode a document as UTF-8 JSON bytes."""
    return (json.dumps(bom_to_payload(document), indent=2, sort_keys=True) + "\n").encode("utf-8")


def decode_bom(data: bytes) -> BomDocument:
    """Decode UTF-8 JSON bytes into a document.

    Args:
        data: Serialized document.

    Returns:
        Parsed document.

    Raises:
        BomRepoPayloadError: If bytes are not a valid BOM JSON object.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as error:
        raise BomRepoPayloadError(f"Invalid BOM payload: not UTF-8 ({error.reason}).") from error
    except json.JSONDecodeError as error:
        raise BomRepoPayloadError(
            f"Invalid BOM payload: {error.msg} at line {error.lineno}."
        ) from error
    return bom_from_payload(payload)


def read_bom_file(bom_path: Path) -> BomDocument:
    """Read a BOM JSON document from disk.

    Args:
        bom_path: Path to a CycloneDX JSON file.

    Returns:
        Parsed document.

    Raises:
        BomRepoPayloadError: If the file is missing or invalid.
    """
    try:
        data = bom_path.read_bytes()
    except OSError as error:
        raise BomRepoPayloadError(
            f"Failed to read BOM file at {bom_path}: {error}. Check the path and retry."
        ) from error
    return decode_bom(data)
