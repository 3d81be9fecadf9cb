"""Location samples consumed by the meter."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocationSample(BaseModel):
    """A GPS fix already resolved by the location source.

    Samples are values: the meter never mutates them and only keeps a
    reference to the last accepted one.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    accuracy_m: float | None = Field(default=None, ge=0.0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are read as UTC so samples always compare."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
