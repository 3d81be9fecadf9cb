from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taximeter.fare import Tariff
from taximeter.location_filter import FilterThresholds


class TariffSettings(BaseSettings):
    base_fare: float = Field(default=2.5, ge=0.0)
    price_per_km: float = Field(default=1.5, ge=0.0)
    price_per_minute: float = Field(default=0.5, ge=0.0)

    model_config = SettingsConfigDict(env_prefix="TAXIMETER_TARIFF_")

    def to_tariff(self) -> Tariff:
        return Tariff(
            base_fare=self.base_fare,
            price_per_km=self.price_per_km,
            price_per_minute=self.price_per_minute,
        )


class FilterSettings(BaseSettings):
    """GPS filtering thresholds.

    The defaults assume the location source delivers a fix every 2-5 seconds.
    A slower source needs a larger max_jump_m.
    """

    max_accuracy_m: float = Field(
        default=50.0,
        gt=0.0,
        le=1000.0,
        description="Samples reporting a worse accuracy radius are discarded",
    )
    max_jump_m: float = Field(
        default=500.0,
        gt=0.0,
        le=10_000.0,
        description="Displacement between consecutive fixes treated as a GPS jump",
    )
    min_displacement_m: float = Field(
        default=1.0,
        ge=0.0,
        le=100.0,
        description="Displacement below this is treated as jitter and not billed",
    )

    model_config = SettingsConfigDict(env_prefix="TAXIMETER_FILTER_")

    @model_validator(mode="after")
    def validate_noise_below_jump(self) -> "FilterSettings":
        if self.min_displacement_m >= self.max_jump_m:
            raise ValueError(
                f"min_displacement_m ({self.min_displacement_m}) must be below "
                f"max_jump_m ({self.max_jump_m})"
            )
        return self

    def to_thresholds(self) -> FilterThresholds:
        return FilterThresholds(
            max_accuracy_m=self.max_accuracy_m,
            max_jump_m=self.max_jump_m,
            min_displacement_m=self.min_displacement_m,
        )


class MeterSettings(BaseSettings):
    tick_interval_seconds: float = Field(default=1.0, ge=0.05, le=10.0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"
    currency: str = Field(default="DH", min_length=1, max_length=8)

    model_config = SettingsConfigDict(env_prefix="TAXIMETER_")


class Settings(BaseSettings):
    meter: MeterSettings = Field(default_factory=MeterSettings)
    tariff: TariffSettings = Field(default_factory=TariffSettings)
    filter: FilterSettings = Field(default_factory=FilterSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
