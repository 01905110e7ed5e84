from pydantic import BaseModel
from typing import Optional
import os
from dotenv import load_dotenv

DEFAULT_BLOB_API_URL = "https://blob.vercel-storage.com"
TRUTHY = ('true', '1', 'yes', 'on')


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


class Settings(BaseModel):
    """Process-wide configuration, built once at startup."""

    database_url: Optional[str] = None
    blob_read_write_token: Optional[str] = None
    blob_api_url: str = DEFAULT_BLOB_API_URL
    blob_timeout_seconds: float = 30.0
    default_image_name: str = "image.png"
    cleanup_orphaned_blob_on_insert_failure: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()

        # Vercel Postgres exposes POSTGRES_URL; DATABASE_URL kept for local setups
        database_url = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL")
        environment = os.getenv("VERCEL_ENV") or os.getenv("ENVIRONMENT") or "development"

        return cls(
            database_url=database_url or None,
            blob_read_write_token=os.getenv("BLOB_READ_WRITE_TOKEN") or None,
            blob_api_url=os.getenv("BLOB_API_URL", DEFAULT_BLOB_API_URL).rstrip("/"),
            blob_timeout_seconds=float(os.getenv("BLOB_TIMEOUT_SECONDS", "30")),
            default_image_name=os.getenv("DEFAULT_IMAGE_NAME", "image.png"),
            cleanup_orphaned_blob_on_insert_failure=_env_flag("CLEANUP_ORPHANED_BLOB_ON_INSERT_FAILURE"),
            environment=environment.strip().lower(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_database(self) -> bool:
        return bool(self.database_url)

    @property
    def has_blob(self) -> bool:
        return bool(self.blob_read_write_token)
