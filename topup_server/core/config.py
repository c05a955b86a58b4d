"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./topup.db", alias="url")
    echo: bool = False
    # seconds a SQLite connection waits for the write lock
    busy_timeout: float = Field(default=30.0, gt=0)
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"


class MidtransSettings(BaseModel):
    """Payment gateway credentials and webhook behaviour."""

    server_key: Optional[str] = None
    is_production: bool = False
    sandbox_base_url: str = "https://app.sandbox.midtrans.com"
    production_base_url: str = "https://app.midtrans.com"
    request_timeout: float = 10.0
    webhook_path: str = "/midtrans-webhook"
    # Reject notifications without a valid signature_key.
    require_signature: bool = False

    @property
    def snap_base_url(self) -> str:
        return self.production_base_url if self.is_production else self.sandbox_base_url


class LedgerSettings(BaseModel):
    max_attempts: int = Field(default=5, ge=1)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Top-up Server"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    midtrans: MidtransSettings = MidtransSettings()
    ledger: LedgerSettings = LedgerSettings()

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm


@lru_cache()
def get_settings() -> Settings:
    return Settings()
