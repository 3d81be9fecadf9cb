from pydantic import BaseModel, ConfigDict, Field


class Tariff(BaseModel):
    """Fare formula configuration, fixed for the lifetime of a controller."""

    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(default=2.5, ge=0)
    price_per_km: float = Field(default=1.5, ge=0)
    price_per_minute: float = Field(default=0.5, ge=0)


DEFAULT_TARIFF = Tariff()


class FareBreakdown(BaseModel):
    """Detailed breakdown of fare components."""

    base_fare: float = Field(ge=0)
    distance_charge: float = Field(ge=0)
    time_charge: float = Field(ge=0)
    total_fare: float = Field(ge=0)


def _validate_inputs(distance_km: float, elapsed_seconds: float) -> None:
    if distance_km < 0:
        raise ValueError("Distance must be non-negative")
    if elapsed_seconds < 0:
        raise ValueError("Elapsed time must be non-negative")


def compute_fare(
    distance_km: float, elapsed_seconds: float, tariff: Tariff = DEFAULT_TARIFF
) -> float:
    """
    Calculate the running fare.

    Time is charged per fractional minute, so every second adds
    price_per_minute / 60 to the fare.
    """
    _validate_inputs(distance_km, elapsed_seconds)
    return (
        tariff.base_fare
        + distance_km * tariff.price_per_km
        + (elapsed_seconds / 60.0) * tariff.price_per_minute
    )


def fare_breakdown(
    distance_km: float, elapsed_seconds: float, tariff: Tariff = DEFAULT_TARIFF
) -> FareBreakdown:
    _validate_inputs(distance_km, elapsed_seconds)

    distance_charge = distance_km * tariff.price_per_km
    time_charge = (elapsed_seconds / 60.0) * tariff.price_per_minute

    return FareBreakdown(
        base_fare=tariff.base_fare,
        distance_charge=distance_charge,
        time_charge=time_charge,
        total_fare=compute_fare(distance_km, elapsed_seconds, tariff),
    )
