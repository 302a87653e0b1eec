"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"
    log_buffer_size: int = 500  # Entries kept in the console log surface

    # Storage backend: "s3" (any S3-compatible endpoint) or "memory" (local dev)
    storage_backend: str = "s3"

    # S3-compatible storage (Supabase Storage S3 gateway, R2, MinIO, AWS)
    # These are privileged credentials and never leave the server
    storage_endpoint: Optional[str] = None  # e.g., https://<ref>.supabase.co/storage/v1/s3
    storage_access_key: Optional[str] = None
    storage_secret_key: Optional[str] = None
    storage_region: str = "auto"
    storage_public_url: Optional[str] = None  # Base for unsigned URLs, e.g., .../storage/v1/object/public

    # Console policies
    signed_url_ttl: int = 3600  # Signed preview URL lifetime in seconds (1 hour)
    bucket_file_size_limit: str = "50MB"  # Applied to newly created buckets
    upload_cache_max_age: int = 3600  # Cache-Control max-age for uploaded objects
    gallery_list_limit: int = 1000

    # Optional dashboard deep-link (no behavioral effect)
    studio_url: Optional[str] = None
    project_ref: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
