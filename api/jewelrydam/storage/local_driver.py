"""Local filesystem storage driver."""

import os
from datetime import datetime
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from jewelrydam.storage.base import BaseStorageDriver, FileInfo, StorageError


class LocalStorageDriver(BaseStorageDriver):
    """Local filesystem storage driver.

    Configuration:
        base_path: Path to storage directory
        public_url: Base URL the directory is served from

    Example:
        >>> driver = LocalStorageDriver({"base_path": "/data/jewelrydam"})
        >>> await driver.upload_file("assets/3f2a.jpg", b"...")
    """

    provider = "local"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        # Resolved so traversal checks compare like with like
        self.base_path = Path(config["base_path"]).resolve()

        if not self.public_url:
            self.public_url = self.base_path.as_uri()

    def _validate_path(self, file_path: str) -> Path:
        """Validate path is within base_path (prevent directory traversal).

        Raises:
            StorageError: If path tries to escape base_path
        """
        full_path = (self.base_path / file_path).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            raise StorageError(
                f"Path {file_path} attempts to escape base directory"
            )

        return full_path

    async def ensure_bucket(self) -> None:
        """Create the base directory."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def list_files(self, path: str = "", pattern: str = "*") -> List[FileInfo]:
        """List files in local directory.

        Args:
            path: Relative path from base_path
            pattern: Glob pattern (default: "*" for all files)
        """
        search_path = self._validate_path(path) if path else self.base_path

        if not search_path.exists():
            return []

        files = []
        for root, _, filenames in os.walk(search_path):
            for filename in filenames:
                if fnmatch(filename, pattern):
                    full_path = Path(root) / filename
                    relative_path = full_path.relative_to(self.base_path)

                    stat = full_path.stat()
                    files.append(
                        FileInfo(
                            {
                                "name": filename,
                                "path": relative_path.as_posix(),
                                "size_bytes": stat.st_size,
                                "modified_at": datetime.fromtimestamp(stat.st_mtime),
                            }
                        )
                    )

        return files

    async def upload_file(
        self, file_path: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """Write file to local filesystem.

        The content type is not persisted; it is derived from the extension
        when the directory is served.
        """
        full_path = self._validate_path(file_path)

        # Create parent directories if they don't exist
        full_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            raise StorageError(f"Failed to upload file: {e}")

        return full_path.relative_to(self.base_path).as_posix()

    async def delete_file(self, file_path: str) -> None:
        """Remove file from local filesystem."""
        full_path = self._validate_path(file_path)

        try:
            await aiofiles.os.remove(full_path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}")

    async def test_connection(self) -> bool:
        """Test if base path exists and is writable."""
        try:
            return self.base_path.exists() and os.access(self.base_path, os.W_OK)
        except Exception:
            return False
