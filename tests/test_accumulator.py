import pytest

from taximeter.accumulator import DistanceAccumulator


@pytest.mark.unit
class TestDistanceAccumulator:
    def test_starts_at_zero(self):
        acc = DistanceAccumulator()
        assert acc.total_m == 0.0
        assert acc.total_km == 0.0

    def test_sums_in_meters_and_reports_kilometers(self):
        acc = DistanceAccumulator()
        acc.add(50.0)
        acc.add(25.5)
        assert acc.total_m == pytest.approx(75.5)
        assert acc.total_km == pytest.approx(0.0755)

    def test_add_returns_running_total(self):
        acc = DistanceAccumulator()
        assert acc.add(10.0) == pytest.approx(10.0)
        assert acc.add(2.0) == pytest.approx(12.0)

    def test_rejects_negative_increment(self):
        acc = DistanceAccumulator()
        acc.add(10.0)
        with pytest.raises(ValueError):
            acc.add(-1.0)
        assert acc.total_m == pytest.approx(10.0)

    def test_many_small_increments_stay_stable(self):
        acc = DistanceAccumulator()
        for _ in range(10_000):
            acc.add(1.5)
        assert acc.total_km == pytest.approx(15.0, rel=1e-9)

    def test_reset(self):
        acc = DistanceAccumulator()
        acc.add(123.0)
        acc.reset()
        assert acc.total_m == 0.0
