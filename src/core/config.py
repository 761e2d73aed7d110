"""Runtime configuration model for bomrepo.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_S3_PREFIX,
    DEFAULT_STORAGE_BACKEND,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_STORAGE_BACKENDS,
)
from core.errors import BomRepoConfigError


@dataclass(frozen=True)
class BomRepoConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the file-backed repository.
        storage_backend: Storage medium identifier (local, memory, s3).
        s3_bucket: Bucket holding BOM blobs when the backend is s3.
        s3_prefix: Key prefix under which namespaces are created in S3.
        s3_region: Optional AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
        log_level: Minimum level for structured log output.
    """

    data_root: Path
    storage_backend: str = DEFAULT_STORAGE_BACKEND
    s3_bucket: str | None = None
    s3_prefix: str = DEFAULT_S3_PREFIX
    s3_region: str | None = None
    s3_profile: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "BomRepoConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BomRepoConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("BOMREPO_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        storage_backend = _parse_storage_backend(
            os.getenv("BOMREPO_STORAGE_BACKEND", DEFAULT_STORAGE_BACKEND)
        )
        s3_bucket = os.getenv("BOMREPO_S3_BUCKET") or None
        if storage_backend == "s3" and s3_bucket is None:
            raise BomRepoConfigError(
                "BOMREPO_STORAGE_BACKEND is 's3' but BOMREPO_S3_BUCKET is not set. "
                "Set BOMREPO_S3_BUCKET to the bucket that should hold BOM documents."
            )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            storage_backend=storage_backend,
            s3_bucket=s3_bucket,
            s3_prefix=os.getenv("BOMREPO_S3_PREFIX", DEFAULT_S3_PREFIX).strip("/"),
            s3_region=os.getenv("BOMREPO_S3_REGION"),
            s3_profile=os.getenv("BOMREPO_S3_PROFILE"),
            log_level=_parse_log_level(os.getenv("BOMREPO_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _parse_storage_backend(raw_value: str) -> str:
    """Parse the storage backend environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized backend name.

    Raises:
        BomRepoConfigError: If the backend is not supported.
    """
    backend = raw_value.strip().lower()
    if backend not in SUPPORTED_STORAGE_BACKENDS:
        raise BomRepoConfigError(
            f"Invalid BOMREPO_STORAGE_BACKEND value '{raw_value}'. "
            f"Choose one of: {', '.join(SUPPORTED_STORAGE_BACKENDS)}."
        )
    return backend


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased level name.

    Raises:
        BomRepoConfigError: If the level is not supported.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise BomRepoConfigError(
            f"Invalid BOMREPO_LOG_LEVEL value '{raw_value}'. "
            f"Choose one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
