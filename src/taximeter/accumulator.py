class DistanceAccumulator:
    """Running total of billed displacement.

    Increments are summed in meters and converted to kilometers only when
    read, so repeated unit conversions never accumulate rounding error.
    """

    def __init__(self) -> None:
        self._total_m = 0.0

    @property
    def total_m(self) -> float:
        return self._total_m

    @property
    def total_km(self) -> float:
        return self._total_m / 1000.0

    def add(self, displacement_m: float) -> float:
        """Add a non-negative displacement and return the new total in meters."""
        if displacement_m < 0:
            raise ValueError("Displacement must be non-negative")
        self._total_m += displacement_m
        return self._total_m

    def reset(self) -> None:
        self._total_m = 0.0
