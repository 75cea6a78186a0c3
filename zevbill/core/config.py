"""Application configuration settings."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_default_database_url() -> str:
    """Get the default database URL, using a mounted data volume if available."""
    if os.path.isdir("/data"):
        return "sqlite:////data/zevbill.db"
    return "sqlite:///./zevbill.db"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "ZEV Billing"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Local reference-data store
    DATABASE_URL: str = _get_default_database_url()

    # External bill-generation API
    BILLING_API_URL: str = "http://localhost:8080/api"
    BILLING_API_TIMEOUT: float = 30.0

    # "database" reads the local store, "http" the billing API's endpoints
    REFERENCE_SOURCE: Literal["database", "http"] = "database"

    # Wizard behaviour
    ADMIN_LOOKUP_TIMEOUT: float = 5.0
    DEFAULT_SENDER_COUNTRY: str = "Switzerland"
    SESSION_LIMIT: int = 100


settings = Settings()
