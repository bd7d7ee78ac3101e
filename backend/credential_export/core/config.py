from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Credential Export"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = "sqlite:///./credentials.db"

    # Export settings
    EXPORT_ROOT: Optional[str] = None  # Parent for temp dirs (system temp dir when unset)
    EXPORT_TEMP_PREFIX: str = "credential-exports"
    DEFAULT_EXPORT_MODE: str = "login"  # login or core
    CLEANUP_STAGING: bool = False  # Remove staging dir once the ZIP is written

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_EXPORT_MODE", "LOG_LEVEL", mode="before")
    @classmethod
    def strip_value(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


settings = Settings()
