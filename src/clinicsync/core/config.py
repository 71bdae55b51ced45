# src/clinicsync/core/config.py
from decimal import Decimal
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Environment setting
    ENVIRONMENT: str = Field(
        "development", description="Environment: development, staging, production"
    )

    # API settings
    API_PREFIX: str = Field("")
    DEBUG: bool = Field(False)
    ALLOWED_ORIGINS: str = Field("*")

    # Database settings
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("")
    DB_PASSWORD: str = Field("")
    DB_NAME: str = Field("clinicsync")
    DB_DRIVER: str = Field("postgresql+asyncpg")

    SQLITE_MODE: bool = False

    # Session scoping
    SESSION_ID_HEADER: str = Field(
        "X-Session-ID", description="Header carrying the owning session identifier"
    )

    # Synchronization
    REFETCH_SCOPE: str = Field(
        "all", description="Reconciliation after add: 'all' or 'affected'"
    )
    CURRENCY_QUANTUM: Decimal = Field(Decimal("0.01"))
    SAMPLE_ID_PREFIX: str = Field(
        "sample-", description="Ids with this prefix get fresh ids on restore"
    )
    MAX_LOADED_SESSIONS: int = Field(
        100, ge=1, description="Sessions kept in memory before the least recently used is dropped"
    )

    # Local settings store
    SETTINGS_STORE_PATH: str = Field("clinic_settings.json")

    # Uvicorn settings
    UVICORN_HOST: str = Field("127.0.0.1")
    UVICORN_PORT: int = Field(8000)
    WORKERS_COUNT: int = Field(1)
    RELOAD: bool = Field(False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def POSTGRESQL_DATABASE_URL(self) -> str:
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def SQLITE_DATABASE_URL(self) -> str:
        return f"sqlite+aiosqlite:///{self.DB_NAME}.db"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.SQLITE_DATABASE_URL
            if self.SQLITE_MODE
            else self.POSTGRESQL_DATABASE_URL
        )

    @property
    def ORIGINS(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @field_validator("REFETCH_SCOPE")
    @classmethod
    def validate_refetch_scope(cls, v: str) -> str:
        if v not in ("all", "affected"):
            raise ValueError("REFETCH_SCOPE must be 'all' or 'affected'")
        return v


settings = Settings()
