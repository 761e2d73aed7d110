"""Public SDK surface for bomrepo.

This module provides a stable import path for library users.
It re-exports the client, the store, the media, and typed models.
"""

from __future__ import annotations

from core.config import BomRepoConfig
from core.errors import (
    BomAlreadyExistsError,
    BomRepoError,
    BomRepoStoreError,
    BomRepoValidationError,
)
from core.serial_number import is_valid_serial_number
from core.types import BomDocument
from store.local_medium import LocalFileMedium
from store.medium import StorageMedium
from store.memory_medium import InMemoryMedium
from store.repo_sdk import BomRepoClient
from store.repo_service import BomRepoService
from store.s3_medium import S3Medium

__all__ = [
    "BomAlreadyExistsError",
    "BomDocument",
    "BomRepoClient",
    "BomRepoConfig",
    "BomRepoError",
    "BomRepoService",
    "BomRepoStoreError",
    "BomRepoValidationError",
    "InMemoryMedium",
    "LocalFileMedium",
    "S3Medium",
    "StorageMedium",
    "is_valid_serial_number",
]
