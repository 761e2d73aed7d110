"""Serial number helpers.

This module validates BOM serial numbers at the request boundary
and maps them onto storage-safe namespace names.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from core.constants import SERIAL_NUMBER_SAFE_CHARACTERS

_UUID_PATTERN = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
_SERIAL_NUMBER_RE = re.compile(rf"^urn:uuid:(?:{_UUID_PATTERN}|\{{{_UUID_PATTERN}\}})$")


def is_valid_serial_number(serial_number: str) -> bool:
    """Return whether a serial number is a UUID URN.

    Both ``urn:uuid:<uuid>`` and the braced ``urn:uuid:{<uuid>}`` forms
    are accepted.

    Args:
        serial_number: Candidate serial number.

    Returns:
        True when the value is a well-formed UUID URN.
    """
    return bool(_SERIAL_NUMBER_RE.fullmatch(serial_number))


def namespace_for(serial_number: str) -> str:
    """Encode a serial number into a single storage path segment.

    Every character outside ASCII letters, digits, and ``-._`` is
    percent-encoded, so distinct serial numbers never share a namespace.

    Args:
        serial_number: Serial number to encode.

    Returns:
        Namespace name safe for file systems and object keys.
    """
    namespace = quote(serial_number, safe=SERIAL_NUMBER_SAFE_CHARACTERS)
    if namespace in {".", ".."}:
        return namespace.replace(".", "%2E")
    return namespace
