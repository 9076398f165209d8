"""Base storage driver interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

ASSET_PREFIX = "assets"
PRIMARY_EXTENSION = "jpg"
SECONDARY_EXTENSION = "tiff"


def asset_key(asset_id: str, extension: str = PRIMARY_EXTENSION) -> str:
    """Build the object key for an asset blob.

    Examples:
        >>> asset_key("3f2a")
        'assets/3f2a.jpg'
        >>> asset_key("3f2a", SECONDARY_EXTENSION)
        'assets/3f2a.tiff'
    """
    return f"{ASSET_PREFIX}/{asset_id}.{extension}"


def asset_id_from_key(key: str) -> Optional[str]:
    """Extract the asset ID from an object key, or None if it is not an asset key."""
    prefix, _, filename = key.rpartition("/")
    if prefix.split("/")[-1] != ASSET_PREFIX or "." not in filename:
        return None
    return filename.rsplit(".", 1)[0] or None


class FileInfo(Dict[str, Any]):
    """File information dict with typed access."""

    @property
    def path(self) -> str:
        return self["path"]

    @property
    def modified_at(self) -> Optional[datetime]:
        return self.get("modified_at")


class BaseStorageDriver(ABC):
    """Base class for storage drivers.

    All storage drivers implement this interface so the ingestion and
    deletion workflows work the same against MinIO/S3 or a local directory.
    """

    provider: str = "base"

    def __init__(self, config: Dict[str, Any]):
        """Initialize storage driver with configuration.

        Args:
            config: Storage configuration dict with provider-specific settings.
                ``public_url`` is the base URL blobs are served from.
        """
        self.config = config
        self.public_url = (config.get("public_url") or "").rstrip("/")

    def get_public_url(self, file_path: str) -> str:
        """Build the externally servable URL for a stored file."""
        return f"{self.public_url}/{file_path.lstrip('/')}"

    async def ensure_bucket(self) -> None:
        """Create the backing container if the provider needs one."""
        return None

    @abstractmethod
    async def list_files(self, path: str = "", pattern: str = "*") -> List[FileInfo]:
        """List files in storage.

        Args:
            path: Path to list files from (relative to base_path)
            pattern: Glob pattern to filter files (default: "*")

        Returns:
            List of FileInfo dicts with: name, path, size_bytes, modified_at

        Raises:
            StorageError: If listing fails
        """
        pass

    @abstractmethod
    async def upload_file(
        self, file_path: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """Upload file and return the path it was stored under.

        Args:
            file_path: Destination path (relative to base_path)
            content: File content as bytes
            content_type: MIME type recorded with the object

        Raises:
            StorageError: If upload fails
        """
        pass

    @abstractmethod
    async def delete_file(self, file_path: str) -> None:
        """Delete a file. Deleting a missing file is not an error.

        Raises:
            StorageError: If deletion fails
        """
        pass

    @abstractmethod
    async def test_connection(self) -> bool:
        """Test if storage is accessible."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class StorageConnectionError(StorageError):
    """Exception for connection errors."""

    pass
