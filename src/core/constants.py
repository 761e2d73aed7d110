"""Core constants used across bomrepo modules.

This module centralizes storage layout names and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".bomrepo")
REPO_DIR_NAME = "repo"
TEMP_BLOB_PREFIX = ".tmp-"
DEFAULT_STORAGE_BACKEND = "local"
SUPPORTED_STORAGE_BACKENDS = ("local", "memory", "s3")
DEFAULT_S3_PREFIX = "bomrepo"
S3_DELETE_BATCH_SIZE = 1000
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
SERIAL_NUMBER_FIELD = "serialNumber"
VERSION_FIELD = "version"
SERIAL_NUMBER_SAFE_CHARACTERS = "-._"
