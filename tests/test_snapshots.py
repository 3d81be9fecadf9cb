from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from taximeter.location import LocationSample
from taximeter.snapshots import TripSnapshot
from taximeter.trip import TripEvent, TripStatus


@pytest.fixture
def sample() -> LocationSample:
    return LocationSample(
        latitude=33.5731,
        longitude=-7.5898,
        accuracy_m=4.0,
        timestamp=datetime(2024, 5, 1, 8, 30, tzinfo=UTC),
    )


@pytest.mark.unit
class TestTripSnapshot:
    def test_frozen(self, sample):
        snapshot = TripSnapshot(
            event=TripEvent.TICK,
            trip_id="trip-1",
            status=TripStatus.RUNNING,
            elapsed_seconds=10,
            distance_km=0.3,
            fare=3.03,
            last_accepted_location=sample,
            last_known_position=sample,
        )
        with pytest.raises(AttributeError):
            snapshot.fare = 0.0

    def test_to_dict(self, sample):
        snapshot = TripSnapshot(
            event=TripEvent.DISTANCE,
            trip_id="trip-1",
            status=TripStatus.RUNNING,
            elapsed_seconds=42,
            distance_km=1.25,
            fare=4.725,
            last_accepted_location=sample,
            last_known_position=None,
        )

        data = snapshot.to_dict()

        assert data["event"] == "distance"
        assert data["status"] == "running"
        assert data["elapsed_seconds"] == 42
        assert data["last_accepted_location"] == {
            "latitude": 33.5731,
            "longitude": -7.5898,
            "accuracy_m": 4.0,
            "timestamp": "2024-05-01T08:30:00+00:00",
        }
        assert data["last_known_position"] is None


@pytest.mark.unit
class TestLocationSample:
    def test_rejects_out_of_range_coordinates(self):
        with pytest.raises(ValidationError):
            LocationSample(latitude=91.0, longitude=0.0)
        with pytest.raises(ValidationError):
            LocationSample(latitude=0.0, longitude=-181.0)

    def test_rejects_negative_accuracy(self):
        with pytest.raises(ValidationError):
            LocationSample(latitude=0.0, longitude=0.0, accuracy_m=-1.0)

    def test_accuracy_is_optional(self):
        sample = LocationSample(latitude=1.0, longitude=2.0)
        assert sample.accuracy_m is None
        assert sample.timestamp.tzinfo is not None
        assert sample.coordinates == (1.0, 2.0)

    def test_naive_timestamp_is_read_as_utc(self):
        sample = LocationSample.model_validate_json(
            '{"latitude": 1.0, "longitude": 2.0, "timestamp": "2024-05-01T08:30:00"}'
        )
        assert sample.timestamp == datetime(2024, 5, 1, 8, 30, tzinfo=UTC)

    def test_offset_timestamp_is_kept(self):
        sample = LocationSample.model_validate_json(
            '{"latitude": 1.0, "longitude": 2.0, "timestamp": "2024-05-01T09:30:00+01:00"}'
        )
        assert sample.timestamp == datetime(2024, 5, 1, 8, 30, tzinfo=UTC)
