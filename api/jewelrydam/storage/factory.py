"""Storage driver factory."""

from typing import Optional

from jewelrydam.config import Settings
from jewelrydam.storage.base import BaseStorageDriver, StorageError
from jewelrydam.storage.local_driver import LocalStorageDriver
from jewelrydam.storage.s3_driver import S3StorageDriver


def get_storage_driver(settings: Settings) -> BaseStorageDriver:
    """Build the storage driver described by application settings.

    Args:
        settings: Application settings

    Returns:
        Configured storage driver instance

    Raises:
        StorageError: If the provider is not supported

    Example:
        >>> driver = get_storage_driver(settings)
        >>> await driver.upload_file("assets/3f2a.jpg", data, "image/jpeg")
    """
    provider = settings.storage_provider.lower()

    if provider == "local":
        return get_storage_driver_from_config(
            provider="local",
            base_path=settings.storage_local_path,
            credentials={"public_url": settings.storage_public_url},
        )

    elif provider in ("s3", "minio"):
        return get_storage_driver_from_config(
            provider="s3",
            base_path="",
            credentials={
                "aws_access_key_id": settings.minio_access_key,
                "aws_secret_access_key": settings.minio_secret_key,
                "bucket_name": settings.minio_bucket,
                "region": settings.minio_region,
                "endpoint_url": settings.minio_url,
                "public_url": settings.storage_public_url,
            },
        )

    else:
        raise StorageError(f"Unsupported storage provider: {provider}")


def get_storage_driver_from_config(
    provider: str, base_path: str, credentials: Optional[dict] = None
) -> BaseStorageDriver:
    """Get storage driver from explicit configuration.

    Args:
        provider: Storage provider (local, s3)
        base_path: Base path for storage
        credentials: Optional credentials/options dict

    Example:
        >>> driver = get_storage_driver_from_config(
        ...     provider="local",
        ...     base_path="/tmp/jewelrydam"
        ... )
    """
    driver_config = {"base_path": base_path}

    if credentials:
        driver_config.update(credentials)

    provider = provider.lower()

    if provider == "local":
        return LocalStorageDriver(driver_config)
    elif provider == "s3":
        required_fields = ["aws_access_key_id", "aws_secret_access_key", "bucket_name"]
        missing = [f for f in required_fields if not driver_config.get(f)]
        if missing:
            raise StorageError(f"Missing required S3 configuration: {missing}")
        return S3StorageDriver(driver_config)
    else:
        raise StorageError(f"Unsupported storage provider: {provider}")
