"""GPS sample filtering for distance billing.

Each incoming sample is compared against the last accepted sample (the
reference point). The filter decides whether the displacement is billable
and whether the sample should replace the reference point:

- low accuracy: not billed, reference kept
- no reference yet: becomes the reference, nothing billed
- implausible jump: not billed, reference moves
- below noise floor: not billed, reference moves
- otherwise: billed, reference moves
"""

import logging
from dataclasses import dataclass
from enum import Enum

from taximeter.core.exceptions import ConfigurationError
from taximeter.geo.distance import sample_distance_m
from taximeter.location import LocationSample

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    LOW_ACCURACY = "low_accuracy"
    IMPLAUSIBLE_JUMP = "implausible_jump"
    BELOW_NOISE_THRESHOLD = "below_noise_threshold"


@dataclass(frozen=True)
class FilterThresholds:
    """Filtering limits, tuned for a 2-5 second sampling interval."""

    max_accuracy_m: float = 50.0
    max_jump_m: float = 500.0
    min_displacement_m: float = 1.0

    def __post_init__(self) -> None:
        if self.max_accuracy_m <= 0:
            raise ConfigurationError(
                "max_accuracy_m must be positive",
                details={"max_accuracy_m": self.max_accuracy_m},
            )
        if self.min_displacement_m < 0:
            raise ConfigurationError(
                "min_displacement_m must be non-negative",
                details={"min_displacement_m": self.min_displacement_m},
            )
        if self.min_displacement_m >= self.max_jump_m:
            raise ConfigurationError(
                "min_displacement_m must be below max_jump_m",
                details={
                    "min_displacement_m": self.min_displacement_m,
                    "max_jump_m": self.max_jump_m,
                },
            )


@dataclass(frozen=True)
class Accepted:
    sample: LocationSample
    displacement_m: float

    @property
    def distance_km(self) -> float:
        return self.displacement_m / 1000.0

    @property
    def updates_reference(self) -> bool:
        return True


@dataclass(frozen=True)
class Reference:
    """First usable sample of a segment: establishes the reference point."""

    sample: LocationSample

    @property
    def updates_reference(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    sample: LocationSample
    reason: RejectionReason
    displacement_m: float | None = None

    @property
    def updates_reference(self) -> bool:
        # A fix with poor accuracy must not anchor the next measurement
        return self.reason != RejectionReason.LOW_ACCURACY


FilterOutcome = Accepted | Reference | Rejected


class LocationFilter:
    """Stateless per-sample validation against the current reference point."""

    def __init__(self, thresholds: FilterThresholds | None = None) -> None:
        self.thresholds = thresholds or FilterThresholds()

    def evaluate(
        self, sample: LocationSample, last_accepted: LocationSample | None
    ) -> FilterOutcome:
        limits = self.thresholds

        if sample.accuracy_m is not None and sample.accuracy_m > limits.max_accuracy_m:
            logger.debug(
                "Rejected sample: accuracy %.1fm exceeds %.1fm",
                sample.accuracy_m,
                limits.max_accuracy_m,
            )
            return Rejected(sample=sample, reason=RejectionReason.LOW_ACCURACY)

        if last_accepted is None:
            return Reference(sample=sample)

        displacement_m = sample_distance_m(last_accepted, sample)

        if displacement_m > limits.max_jump_m:
            logger.debug(
                "Rejected sample: jump of %.1fm exceeds %.1fm",
                displacement_m,
                limits.max_jump_m,
            )
            return Rejected(
                sample=sample,
                reason=RejectionReason.IMPLAUSIBLE_JUMP,
                displacement_m=displacement_m,
            )

        if displacement_m < limits.min_displacement_m:
            return Rejected(
                sample=sample,
                reason=RejectionReason.BELOW_NOISE_THRESHOLD,
                displacement_m=displacement_m,
            )

        return Accepted(sample=sample, displacement_m=displacement_m)
