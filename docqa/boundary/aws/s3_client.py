"""
S3 client for document bucket operations.

Stores uploaded documents and reads them back for text extraction. Paths
are blob store paths of the form
"/{key_prefix}/{unix_ts}_{slug}.{ext}"; the leading slash is stripped to form
the S3 object key.

Dependencies: boto3
System role: Blob store for raw uploaded documents
"""

import logging
import re
import time
import unicodedata
from pathlib import PurePosixPath

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docqa.core.exceptions import StorageError

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """
    Convert a filename stem to a lowercase ASCII slug.

    Args:
        value: Arbitrary text (e.g. "Q3 Report (final)")

    Returns:
        str: Dash separated slug (e.g. "q3-report-final"), "document" if empty
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _SLUG_INVALID.sub("-", normalized.lower()).strip("-")
    return slug or "document"


def build_document_path(key_prefix: str, filename: str, timestamp: int | None = None) -> str:
    """
    Build the blob store path for an uploaded file.

    Args:
        key_prefix: Folder inside the bucket (e.g. "rag_files")
        filename: Original upload filename
        timestamp: Unix seconds, defaults to now

    Returns:
        str: Path such as "/rag_files/1718000000_q3-report.pdf"
    """
    name = PurePosixPath(filename)
    ts = int(time.time()) if timestamp is None else timestamp
    extension = name.suffix.lower().lstrip(".")
    stored_name = f"{ts}_{slugify(name.stem)}"
    if extension:
        stored_name = f"{stored_name}.{extension}"
    return f"/{key_prefix.strip('/')}/{stored_name}"


class S3DocumentClient:
    """S3 client for document bucket operations."""

    def __init__(self, bucket: str, region: str = "ap-southeast-2", s3_client=None) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            s3_client: Pre-built boto3 client (tests)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    @staticmethod
    def _key(path: str) -> str:
        return path.lstrip("/")

    def put(self, data: bytes, path: str) -> str:
        """
        Store bytes at a blob store path.

        Args:
            data: Raw file content
            path: Blob store path

        Returns:
            str: The path the object was stored at

        Raises:
            StorageError: If the upload fails
        """
        try:
            self._s3_client.put_object(Bucket=self._bucket, Key=self._key(path), Body=data)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"{__name__}:put - Upload failed",
                extra={"bucket": self._bucket, "path": path, "error": str(e)},
            )
            raise StorageError(f"Failed to store document: {e}", path=path) from e

        logger.info(
            f"{__name__}:put - Stored document",
            extra={"bucket": self._bucket, "path": path, "size_bytes": len(data)},
        )
        return path

    def get(self, path: str) -> bytes:
        """
        Read the bytes stored at a blob store path.

        Raises:
            StorageError: If the object is missing or the download fails
        """
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=self._key(path))
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"{__name__}:get - Download failed",
                extra={"bucket": self._bucket, "path": path, "error": str(e)},
            )
            raise StorageError(f"Failed to read document: {e}", path=path) from e
