"""Application configuration pulled from environment variables via pydantic."""
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the city weather service."""
    model_config = SettingsConfigDict(
        env_prefix="WEATHER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # The two secrets keep their historical, unprefixed variable names.
    geocoding_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEOCODING_API_KEY", "geocoding_api_key"),
    )
    weather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WEATHER_API_KEY", "weather_api_key"),
    )

    geocoding_url: str = "https://api.opencagedata.com/geocode/v1/json"
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    display_timezone: str = "Asia/Kolkata"
    http_timeout_seconds: float = 10.0
    hourly_points: int = 8
    daily_points: int = 5
    log_level: str = "INFO"
    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "port"))

    @field_validator("geocoding_url", "openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("display_timezone", mode="after")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Reject timezone names zoneinfo cannot load."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @field_validator("http_timeout_seconds", mode="after")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)

    def missing_api_keys(self) -> List[str]:
        """Names of the required secret variables that are not set."""
        missing = []
        if not self.geocoding_api_key:
            missing.append("GEOCODING_API_KEY")
        if not self.weather_api_key:
            missing.append("WEATHER_API_KEY")
        return missing


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'geocoding_api_key', 'weather_api_key'})}")
