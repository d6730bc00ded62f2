"""Settings for the leanquery client."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class LeanQuerySettings(BaseSettings):
    """leanquery configuration settings."""

    # Application identity, sent as X-LC-Id / X-LC-Key
    LEANCLOUD_APP_ID: Optional[str] = None
    LEANCLOUD_APP_KEY: Optional[str] = None

    # REST API
    LEANCLOUD_API_SERVER: Optional[str] = None
    LEANCLOUD_API_VERSION: str = "1.1"
    LEANCLOUD_REQUEST_TIMEOUT: float = 30.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = LeanQuerySettings()
