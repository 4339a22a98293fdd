# bulkbridge/client/settings.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from bulkbridge.client.splitter import MAX_PART_SIZE


class ClientSettings(BaseSettings):
    API_BASE_URL: str = "http://localhost:3000"
    MAX_PART_SIZE: int = MAX_PART_SIZE
    MAX_CONCURRENCY: Optional[int] = None  # None = alle parts tegelijk
    TIMEOUT_SECONDS: float = 300.0

    model_config = SettingsConfigDict(
        env_prefix="BULKBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
