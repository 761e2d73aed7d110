"""Storage medium selection from runtime config."""

from __future__ import annotations

from core.config import BomRepoConfig
from core.constants import REPO_DIR_NAME
from core.errors import BomRepoConfigError
from store.local_medium import LocalFileMedium
from store.medium import StorageMedium
from store.memory_medium import InMemoryMedium
from store.s3_medium import create_s3_medium


def build_storage_medium(config: BomRepoConfig) -> StorageMedium:
    """Build the storage medium named by ``config.storage_backend``.

    Args:
        config: Runtime configuration.

    Returns:
        Storage medium instance.

    Raises:
        BomRepoConfigError: If the backend name is unknown.
    """
    if config.storage_backend == "local":
        return LocalFileMedium(config.data_root / REPO_DIR_NAME)
    if config.storage_backend == "memory":
        return InMemoryMedium()
    if config.storage_backend == "s3":
        return create_s3_medium(config)
    raise BomRepoConfigError(
        f"Unsupported storage backend '{config.storage_backend}'. "
        "Use local, memory, or s3."
    )
