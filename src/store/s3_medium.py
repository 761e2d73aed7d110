"""S3 storage medium.

Namespaces map onto key prefixes below a configured root prefix and
blobs onto single objects. Create-if-absent writes use the S3
``If-None-Match`` precondition.
"""

from __future__ import annotations

from typing import Any

from core.config import BomRepoConfig
from core.constants import S3_DELETE_BATCH_SIZE
from core.errors import (
    BlobExistsError,
    BlobNotFoundError,
    BomRepoDependencyError,
    BomRepoStoreError,
)

_MISSING_KEY_CODES = frozenset({"404", "NoSuchKey", "NotFound"})
_PRECONDITION_CODES = frozenset({"412", "PreconditionFailed", "ConditionalRequestConflict"})


class S3Medium:
    """Object-store medium backed by a boto3 S3 client."""

    def __init__(self, bucket: str, prefix: str, client: Any) -> None:
        """Create an S3 medium.

        Args:
            bucket: Destination bucket.
            prefix: Root key prefix; may be empty.
            client: Boto3 S3 client or a compatible object.
        """
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._client = client

    def list(self, namespace: str) -> tuple[str, ...]:
        namespace_prefix = self._namespace_prefix(namespace)
        return tuple(
            sorted(
                object_key[len(namespace_prefix):]
                for object_key in self._list_object_keys(namespace_prefix)
                if "/" not in object_key[len(namespace_prefix):]
            )
        )

    def exists(self, namespace: str, key: str) -> bool:
        object_key = self._object_key(namespace, key)
        try:
            self._client.head_object(Bucket=self._bucket, Key=object_key)
        except Exception as error:
            if _error_code(error) in _MISSING_KEY_CODES:
                return False
            raise self._store_error("inspect", object_key, error) from error
        return True

    def read(self, namespace: str, key: str) -> bytes:
        object_key = self._object_key(namespace, key)
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=object_key)
            return bytes(response["Body"].read())
        except Exception as error:
            if _error_code(error) in _MISSING_KEY_CODES:
                raise BlobNotFoundError(
                    f"No object at s3://{self._bucket}/{object_key}."
                ) from error
            raise self._store_error("read", object_key, error) from error

    def write(self, namespace: str, key: str, data: bytes) -> None:
        object_key = self._object_key(namespace, key)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=object_key,
                Body=data,
                ContentType="application/json",
                IfNoneMatch="*",
            )
        except Exception as error:
            if _error_code(error) in _PRECONDITION_CODES:
                raise BlobExistsError(
                    f"Object already exists at s3://{self._bucket}/{object_key}."
                ) from error
            raise self._store_error("write", object_key, error) from error

    def delete(self, namespace: str, key: str) -> None:
        object_key = self._object_key(namespace, key)
        try:
            self._client.delete_object(Bucket=self._bucket, Key=object_key)
        except Exception as error:
            raise self._store_error("delete", object_key, error) from error

    def delete_namespace(self, namespace: str) -> None:
        namespace_prefix = self._namespace_prefix(namespace)
        object_keys = list(self._list_object_keys(namespace_prefix))
        for start in range(0, len(object_keys), S3_DELETE_BATCH_SIZE):
            batch = object_keys[start:start + S3_DELETE_BATCH_SIZE]
            try:
                response = self._client.delete_objects(
                    Bucket=self._bucket,
                    Delete={"Objects": [{"Key": object_key} for object_key in batch], "Quiet": True},
                )
            except Exception as error:
                raise self._store_error("delete", namespace_prefix, error) from error
            failures = (response or {}).get("Errors") or []
            if failures:
                failed_keys = ", ".join(
                    f"{item.get('Key')} ({item.get('Code', 'unknown')})" for item in failures
                )
                raise BomRepoStoreError(
                    f"Failed to delete {len(failures)} object(s) under "
                    f"s3://{self._bucket}/{namespace_prefix}: {failed_keys}. "
                    "Check bucket permissions and retry the delete."
                )

    def _list_object_keys(self, namespace_prefix: str) -> list[str]:
        """List every object key below a namespace prefix.

        Args:
            namespace_prefix: Prefix ending in a slash.

        Returns:
            Full object keys.

        Raises:
            BomRepoStoreError: If listing fails.
        """
        object_keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=namespace_prefix):
                object_keys.extend(str(item["Key"]) for item in page.get("Contents", []))
        except Exception as error:
            raise self._store_error("list", namespace_prefix, error) from error
        return object_keys

    def _namespace_prefix(self, namespace: str) -> str:
        if self._prefix:
            return f"{self._prefix}/{namespace}/"
        return f"{namespace}/"

    def _object_key(self, namespace: str, key: str) -> str:
        return f"{self._namespace_prefix(namespace)}{key}"

    def _store_error(self, operation: str, object_key: str, error: Exception) -> BomRepoStoreError:
        return BomRepoStoreError(
            f"Failed to {operation} s3://{self._bucket}/{object_key}: {error}. "
            "Check AWS credentials and bucket permissions."
        )


def create_s3_medium(config: BomRepoConfig) -> S3Medium:
    """Create an S3 medium from runtime config.

    Args:
        config: Runtime config with bucket and session settings.

    Returns:
        S3 medium bound to a fresh boto3 client.

    Raises:
        BomRepoDependencyError: If boto3 is missing.
        BomRepoStoreError: If no bucket is configured.
    """
    if not config.s3_bucket:
        raise BomRepoStoreError(
            "S3 storage requires a bucket, but none is configured. "
            "Set BOMREPO_S3_BUCKET before using the s3 backend."
        )
    try:
        import boto3
    except ImportError as error:
        raise BomRepoDependencyError(
            "S3 storage requires boto3, but it is not installed. "
            "Install bomrepo[s3] to use the s3 backend."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return S3Medium(config.s3_bucket, config.s3_prefix, session.client("s3"))


def _error_code(error: Exception) -> str:
    """Extract the AWS error code from a botocore client error.

    Args:
        error: Exception raised by the client.

    Returns:
        Error code string, or an empty string for non-client errors.
    """
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return ""
    return str(response.get("Error", {}).get("Code", ""))
