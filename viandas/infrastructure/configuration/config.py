"""
Configuration management for the Viandas CRM
"""


import threading
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from viandas.domain.business_rules import PriceDefaults
from viandas.domain.services.pricing import PriceTable
from viandas.infrastructure.utilities.constants import CacheSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database configuration
    database_url: str = Field("sqlite:///data/viandas.db")
    supabase_connection_string: str | None = Field(None)

    # Application settings
    log_level: str = Field("INFO")
    log_dir: str = Field("logs")
    environment: str = Field("development")
    timezone: str = Field("America/Argentina/Buenos_Aires")

    # Price table
    price_single: float = Field(PriceDefaults.SINGLE, ge=0)
    price_pack5: float = Field(PriceDefaults.PACK5, ge=0)
    price_pack10: float = Field(PriceDefaults.PACK10, ge=0)
    delivery_fee: float = Field(PriceDefaults.DELIVERY, ge=0)
    currency: str = Field("ARS")

    # Shared collection caches
    cache_ttl_seconds: int = Field(CacheSettings.DEFAULT_TTL_SECONDS, ge=0)

    class Config:  # pylint: disable=too-few-public-methods
        """Pydantic model configuration"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def effective_database_url(self) -> str:
        """Supabase connection string when configured, else DATABASE_URL"""
        return self.supabase_connection_string or self.database_url

    @property
    def tzinfo(self) -> ZoneInfo:
        """Business timezone used for 'today', week and month windows"""
        return ZoneInfo(self.timezone)

    def price_table(self) -> PriceTable:
        """Build the price table used by the order total calculator"""
        return PriceTable(
            single=self.price_single,
            pack5=self.price_pack5,
            pack10=self.price_pack10,
            delivery=self.delivery_fee,
        )


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
