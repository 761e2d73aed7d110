"""Shared typed models.

This module defines the immutable document model passed between
the SDK, the versioned store, and the payload codec.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class BomDocument:
    """One revision of a Software Bill of Materials.

    Attributes:
        serial_number: Caller-supplied identifier shared by all revisions.
        version: Revision number; None asks the store to assign the next one.
        content: Remaining top-level document fields, carried opaquely.
    """

    serial_number: str
    version: int | None = None
    content: Mapping[str, Any] = field(default_factory=dict)

    def with_version(self, version: int) -> "BomDocument":
        """Return a copy of this document pinned to a version."""
        return replace(self, version=version)
