from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    # App Info
    app_name: str = "MedStock Ledger"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./medstock.db"
    pool_pre_ping: bool = True
    pool_recycle: int = 300

    # Sale transactions
    sale_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per sale before a lock conflict surfaces as PersistenceError"
    )
    lock_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Maximum wait for the medicine row lock"
    )
    sale_retry_backoff_seconds: float = Field(default=0.05, ge=0)

    # Reporting
    business_timezone: str = Field(
        default="UTC",
        description="Timezone whose midnight starts the 'today' window on the dashboard"
    )
    low_stock_limit: int = Field(default=10, ge=1)
    recent_sales_limit: int = Field(default=10, ge=1)

    # Optional override for the sqlite busy timeout (defaults to lock_timeout_seconds)
    sqlite_busy_timeout_seconds: Optional[float] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MEDSTOCK_",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Build settings from the environment (and .env when present)"""
    return Settings()
