# bulkbridge/core/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "BulkBridge"

    # === AWS & S3 (verplicht; app start niet zonder) ===
    AWS_REGION: str = Field(..., description="AWS region for S3")
    AWS_ACCESS_KEY_ID: str
    AWS_SECRET_ACCESS_KEY: str
    AWS_S3_BUCKET_NAME: str = Field(..., description="Target bucket for multipart uploads")
    AWS_S3_ENDPOINT_URL: Optional[str] = None  # MinIO / andere S3-compatibele stores

    PRESIGN_EXPIRES_SECONDS: int = 3600  # 1 uur per part-URL

    # === Server ===
    PORT: int
    ALLOWED_ORIGINS: list[str] = ["*"]

    # === Logging ===
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance; faalt direct als een verplichte env var ontbreekt."""
    return Settings()
