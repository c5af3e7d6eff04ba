# roomshare/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path} (exists={env_path.exists()})")
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: Literal["development", "test", "staging", "production"] = "development"
    log_level: str = Field(default="INFO", description="Root log level for the API process")

    database_url: str = Field(
        default="sqlite:///./roomshare.db",
        description="SQLAlchemy URL of the booking store",
    )
    database_isolation_level: Optional[str] = Field(
        default="SERIALIZABLE",
        description=(
            "Transaction isolation applied to non-SQLite engines so the conflict check "
            "and the booking insert are validated against the same snapshot"
        ),
    )
    database_echo: bool = False
    create_tables_on_startup: bool = Field(
        default=True,
        description="Create missing tables when the API starts (local/dev convenience)",
    )

    facility_timezone: str = Field(
        default="UTC",
        description="Timezone in which calendar dates and minutes-of-day are interpreted",
    )
    slow_operation_threshold_seconds: float = 1.0

    # Fallback booking settings used until an admin stores the AppSettings row
    default_granularity_minutes: int = Field(default=30, ge=5, le=120)
    default_max_advance_days: int = Field(default=30, ge=1, le=365)
    default_max_booking_duration_hours: int = Field(default=4, ge=1, le=24)
    default_max_active_bookings: int = Field(default=5, ge=1, le=50)

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("facility_timezone")
    @classmethod
    def _validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()


settings = Settings()
