"""Object storage drivers for asset blobs."""

from jewelrydam.storage.base import (
    BaseStorageDriver,
    StorageError,
    asset_id_from_key,
    asset_key,
)
from jewelrydam.storage.factory import get_storage_driver

__all__ = [
    "BaseStorageDriver",
    "StorageError",
    "asset_id_from_key",
    "asset_key",
    "get_storage_driver",
]
