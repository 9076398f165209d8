"""S3-compatible storage driver (MinIO, AWS S3, Cloudflare R2, etc)."""

from fnmatch import fnmatch
from typing import Any, Dict, List, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from jewelrydam.storage.base import (
    BaseStorageDriver,
    FileInfo,
    StorageConnectionError,
    StorageError,
)


class S3StorageDriver(BaseStorageDriver):
    """S3-compatible storage driver.

    Supports:
    - MinIO (the development default)
    - AWS S3
    - Any S3-compatible API

    Configuration:
        aws_access_key_id: Access key
        aws_secret_access_key: Secret key
        bucket_name: Bucket name
        region: Region (default: us-east-1)
        endpoint_url: Custom endpoint URL (for MinIO, R2, etc)
        base_path: Prefix path within bucket (optional)
        public_url: Base URL objects are served from

    Example:
        >>> config = {
        ...     "aws_access_key_id": "minioadmin",
        ...     "aws_secret_access_key": "minioadmin",
        ...     "bucket_name": "jewelrydam",
        ...     "endpoint_url": "http://minio:9000",
        ... }
        >>> driver = S3StorageDriver(config)
        >>> await driver.upload_file("assets/3f2a.jpg", data, "image/jpeg")
    """

    provider = "s3"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.bucket_name = config["bucket_name"]
        self.base_path = config.get("base_path", "").strip("/")

        # S3 client configuration
        self.s3_config = {
            "aws_access_key_id": config["aws_access_key_id"],
            "aws_secret_access_key": config["aws_secret_access_key"],
            "region_name": config.get("region", "us-east-1"),
        }

        # Support custom endpoint (MinIO, R2, etc)
        if config.get("endpoint_url"):
            self.s3_config["endpoint_url"] = config["endpoint_url"]

        self.session = aioboto3.Session()

    def _get_full_key(self, file_path: str) -> str:
        """Get full S3 key with base_path prefix."""
        if self.base_path:
            return f"{self.base_path}/{file_path}".strip("/")
        return file_path.strip("/")

    def _strip_base_path(self, key: str) -> str:
        """Remove base_path prefix from S3 key."""
        if self.base_path and key.startswith(self.base_path + "/"):
            return key[len(self.base_path) + 1 :]
        return key

    def get_public_url(self, file_path: str) -> str:
        """Build the servable URL, including the base_path prefix."""
        return f"{self.public_url}/{self._get_full_key(file_path)}"

    async def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                try:
                    await s3.head_bucket(Bucket=self.bucket_name)
                except ClientError as e:
                    if e.response["Error"]["Code"] not in ("404", "NoSuchBucket"):
                        raise
                    await s3.create_bucket(Bucket=self.bucket_name)
        except (ClientError, BotoCoreError) as e:
            raise StorageConnectionError(f"Failed to ensure bucket {self.bucket_name}: {e}")

    async def list_files(self, path: str = "", pattern: str = "*") -> List[FileInfo]:
        """List files in the bucket."""
        prefix = self._get_full_key(path) if path else self.base_path

        if prefix and not prefix.endswith("/"):
            prefix += "/"

        files = []

        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                # Handle pagination
                paginator = s3.get_paginator("list_objects_v2")
                async for page in paginator.paginate(
                    Bucket=self.bucket_name, Prefix=prefix
                ):
                    for obj in page.get("Contents", []):
                        key = obj["Key"]
                        filename = key.split("/")[-1]

                        # Skip directories (keys ending with /)
                        if key.endswith("/"):
                            continue

                        if not fnmatch(filename, pattern):
                            continue

                        files.append(
                            FileInfo(
                                {
                                    "name": filename,
                                    "path": self._strip_base_path(key),
                                    "size_bytes": obj["Size"],
                                    "modified_at": obj["LastModified"],
                                }
                            )
                        )

        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to list files: {e}")

        return files

    async def upload_file(
        self, file_path: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """Upload file to the bucket, tagged with its content type."""
        key = self._get_full_key(file_path)
        extra = {"ContentType": content_type} if content_type else {}

        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.put_object(Bucket=self.bucket_name, Key=key, Body=content, **extra)

            return key

        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload file: {e}")

    async def delete_file(self, file_path: str) -> None:
        """Delete object from the bucket. S3 treats missing keys as success."""
        key = self._get_full_key(file_path)

        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.delete_object(Bucket=self.bucket_name, Key=key)

        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete file: {e}")

    async def test_connection(self) -> bool:
        """Test connection by checking the bucket exists."""
        try:
            async with self.session.client("s3", **self.s3_config) as s3:
                await s3.head_bucket(Bucket=self.bucket_name)
            return True

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code in ("404", "NoSuchBucket"):
                raise StorageConnectionError(f"Bucket not found: {self.bucket_name}")
            elif error_code == "403":
                raise StorageConnectionError(f"Access denied to bucket: {self.bucket_name}")
            return False

        except Exception:
            return False
