"""Application configuration."""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    postgres_host: str = "db"
    postgres_port: int = 5432
    postgres_user: str = "damuser"
    postgres_password: str = "dampassword"
    postgres_db: str = "jewelrydam"
    database_url_override: Optional[str] = None

    # Startup database probe
    db_connect_retries: int = 5
    db_connect_retry_delay: float = 2.0
    run_migrations_on_startup: bool = True

    # Object storage
    storage_provider: str = "s3"
    storage_local_path: str = "/tmp/jewelrydam-assets"
    minio_endpoint: str = "minio"
    minio_port: int = 9000
    minio_use_ssl: bool = False
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_bucket: str = "jewelrydam"
    minio_region: str = "us-east-1"
    storage_public_url: str = "http://localhost:9000/jewelrydam"

    # Redis
    redis_url: str = "redis://redis:6379/0"

    # Celery
    celery_broker_url: str = "redis://redis:6379/0"
    celery_result_backend: str = "redis://redis:6379/0"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3091
    api_reload: bool = True
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    # Environment
    environment: str = "development"

    @property
    def database_url(self) -> str:
        """Build database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def minio_url(self) -> str:
        """Build the S3 endpoint URL for MinIO."""
        scheme = "https" if self.minio_use_ssl else "http"
        return f"{scheme}://{self.minio_endpoint}:{self.minio_port}"


settings = Settings()
