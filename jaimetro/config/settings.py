import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    SQLite is meant for local development only. Set DATABASE_URL to a
    PostgreSQL connection string in production.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "jaimetro.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    jwt_secret: str = Field(default="dev_secret_change_me", validation_alias="JWT_SECRET")
    auth_algorithm: str = Field(default="HS256", validation_alias="AUTH_ALGORITHM")
    auth_token_expire_hours: int = Field(default=8, validation_alias="AUTH_TOKEN_EXPIRE_HOURS")
    admin_user: str = Field(default="admin", validation_alias="ADMIN_USER")
    admin_pass: str = Field(default="supersecret", validation_alias="ADMIN_PASS")
    cookie_secure: bool = Field(default=False, validation_alias="COOKIE_SECURE")
    business_day_utc_offset_minutes: int = Field(
        default=330,  # IST, +05:30
        validation_alias="BUSINESS_DAY_UTC_OFFSET_MINUTES",
        description="Fixed offset from UTC used to compute the business day",
    )
    business_day_rollover_hour: int = Field(
        default=1,
        validation_alias="BUSINESS_DAY_ROLLOVER_HOUR",
        description="Local hour before which the previous day's record is shown",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("business_day_rollover_hour")
    @classmethod
    def validate_rollover_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("BUSINESS_DAY_ROLLOVER_HOUR must be between 0 and 23")
        return value

    @field_validator("jwt_secret")
    @classmethod
    def warn_default_secret(cls, value: str) -> str:
        if value == "dev_secret_change_me":
            logger.warning("JWT_SECRET is not set. Using the development secret, do not deploy like this.")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
