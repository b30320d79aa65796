from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Deployment-specific pricing constants."""

    regular_included_km: float = Field(
        default=3.0,
        ge=0.0,
        description="Kilometers covered by the regular-ride base fare",
    )
    deadhead_min_movement_km: float = Field(
        default=0.5,
        ge=0.0,
        description="Below this traveled distance no dead-mileage surcharge applies",
    )

    # Depot the vehicles return to (Hosur bus stand in the default deployment)
    depot_latitude: float = Field(default=12.7401984, ge=-90.0, le=90.0)
    depot_longitude: float = Field(default=77.824, ge=-180.0, le=180.0)

    # City-center reference used to orient airport transfers
    city_center_latitude: float = Field(default=12.7401984, ge=-90.0, le=90.0)
    city_center_longitude: float = Field(default=77.824, ge=-180.0, le=180.0)

    airport_reference_distance_km: float = Field(
        default=40.0,
        gt=0.0,
        description="Nominal corridor length the fixed airport fares are priced for",
    )
    outstation_slab_max_round_trip_km: float = Field(
        default=300.0,
        gt=0.0,
        description="Same-day round trips up to this GPS distance are priced by slab",
    )
    gst_rate_charges: float = Field(default=0.05, ge=0.0, le=1.0)
    gst_rate_platform_fee: float = Field(default=0.18, ge=0.0, le=1.0)
    default_rental_hours: int = Field(default=4, ge=1, le=24)

    model_config = SettingsConfigDict(env_prefix="FARE_")


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class DatabaseSettings(BaseSettings):
    path: str = Field(
        default="data/fare_engine.db",
        description="SQLite file holding rate cards, bookings and completions",
    )

    model_config = SettingsConfigDict(env_prefix="DB_")

    @model_validator(mode="after")
    def validate_path(self) -> "DatabaseSettings":
        if not self.path.strip():
            raise ValueError("Required setting not provided: DB_PATH")
        return self


class APISettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(env_prefix="API_")


class Settings(BaseSettings):
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
