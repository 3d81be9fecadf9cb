from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from taximeter.controller import TripController
from taximeter.fare import Tariff
from taximeter.geo.distance import offset_position
from taximeter.location import LocationSample
from taximeter.location_filter import LocationFilter
from taximeter.snapshots import TripSnapshot


class SampleFactory:
    """Builds location samples placed by metric offsets from an origin.

    Positions are cumulative: each call moves relative to the previous
    sample, and timestamps advance by `interval_seconds`.
    """

    def __init__(
        self,
        origin: tuple[float, float] = (0.0, 0.0),
        interval_seconds: float = 3.0,
        start: datetime | None = None,
    ):
        self.lat, self.lon = origin
        self.interval = timedelta(seconds=interval_seconds)
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def at_origin(self, accuracy_m: float | None = 5.0) -> LocationSample:
        return LocationSample(
            latitude=self.lat, longitude=self.lon, accuracy_m=accuracy_m, timestamp=self.now
        )

    def move(
        self, north_m: float = 0.0, east_m: float = 0.0, accuracy_m: float | None = 5.0
    ) -> LocationSample:
        self.lat, self.lon = offset_position(self.lat, self.lon, north_m, east_m)
        self.now += self.interval
        return LocationSample(
            latitude=self.lat, longitude=self.lon, accuracy_m=accuracy_m, timestamp=self.now
        )


@pytest.fixture
def samples() -> SampleFactory:
    """Sample factory anchored at (0, 0)."""
    return SampleFactory()


@pytest.fixture
def tariff() -> Tariff:
    return Tariff(base_fare=2.5, price_per_km=1.5, price_per_minute=0.5)


@pytest.fixture
def mock_tick_source():
    """Tick source double recording start/stop calls."""
    return Mock(spec=["start", "stop"])


@pytest.fixture
def controller(tariff: Tariff) -> TripController:
    """Controller driven manually (no tick source)."""
    return TripController(tariff=tariff, location_filter=LocationFilter())


@pytest.fixture
def published(controller: TripController) -> list[TripSnapshot]:
    """Snapshots published by the controller fixture."""
    snapshots: list[TripSnapshot] = []
    controller.subscribe(snapshots.append)
    return snapshots
