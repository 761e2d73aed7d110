"""File-system storage medium.

Namespaces are directories under a root directory and blobs are files.
Blobs are written to a hidden temporary file and hard-linked into
place, so a key is created atomically and never overwritten.
"""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

from core.constants import TEMP_BLOB_PREFIX
from core.errors import BlobExistsError, BlobNotFoundError, BomRepoStoreError


class LocalFileMedium:
    """Directory-tree storage medium rooted at a local path."""

    def __init__(self, root: Path) -> None:
        """Initialize the medium and create its root directory.

        Args:
            root: Directory holding one sub-directory per namespace.

        Raises:
            BomRepoStoreError: If the root directory cannot be created.
        """
        self._root = root
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise BomRepoStoreError(
                f"Failed to create repository directory at {root}: {error}. "
                "Check BOMREPO_DATA_ROOT and directory permissions."
            ) from error

    @property
    def root(self) -> Path:
        return self._root

    def list(self, namespace: str) -> tuple[str, ...]:
        namespace_dir = self._root / namespace
        try:
            entries = sorted(namespace_dir.iterdir())
        except FileNotFoundError:
            return ()
        except OSError as error:
            raise _store_error("list", namespace_dir, error) from error
        return tuple(
            entry.name
            for entry in entries
            if entry.is_file() and not entry.name.startswith(".")
        )

    def exists(self, namespace: str, key: str) -> bool:
        blob_path = self._root / namespace / key
        try:
            return blob_path.is_file()
        except OSError as error:
            raise _store_error("inspect", blob_path, error) from error

    def read(self, namespace: str, key: str) -> bytes:
        blob_path = self._root / namespace / key
        try:
            return blob_path.read_bytes()
        except FileNotFoundError as error:
            raise BlobNotFoundError(f"No blob at {blob_path}.") from error
        except OSError as error:
            raise _store_error("read", blob_path, error) from error

    def write(self, namespace: str, key: str, data: bytes) -> None:
        namespace_dir = self._root / namespace
        blob_path = namespace_dir / key
        temp_path = namespace_dir / f"{TEMP_BLOB_PREFIX}{uuid.uuid4().hex}"
        try:
            namespace_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(data)
            os.link(temp_path, blob_path)
        except FileExistsError as error:
            raise BlobExistsError(f"Blob already exists at {blob_path}.") from error
        except OSError as error:
            raise _store_error("write", blob_path, error) from error
        finally:
            temp_path.unlink(missing_ok=True)

    def delete(self, namespace: str, key: str) -> None:
        blob_path = self._root / namespace / key
        try:
            blob_path.unlink(missing_ok=True)
        except OSError as error:
            raise _store_error("delete", blob_path, error) from error

    def delete_namespace(self, namespace: str) -> None:
        namespace_dir = self._root / namespace
        try:
            shutil.rmtree(namespace_dir)
        except FileNotFoundError:
            return
        except OSError as error:
            raise _store_error("delete", namespace_dir, error) from error


def _store_error(operation: str, path: Path, error: OSError) -> BomRepoStoreError:
    """Build a storage error for a failed file-system operation.

    Args:
        operation: Operation name used in the message.
        path: Path the operation targeted.
        error: Underlying OS error.

    Returns:
        Error to raise, chained by the caller.
    """
    return BomRepoStoreError(
        f"Failed to {operation} {path}: {error}. "
        "Check repository directory permissions and free space."
    )
