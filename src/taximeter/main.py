"""Replay recorded GPS samples through the meter.

Usage:
    taximeter-replay trip.jsonl
    taximeter-replay trip.jsonl --json
    python -m taximeter trip.jsonl -v

Each line of the input is a JSON object with latitude, longitude,
accuracy_m (optional) and an ISO-8601 timestamp. The meter clock advances by
one tick per whole second between consecutive sample timestamps.
"""

import argparse
import json
import sys
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from taximeter.controller import TripController
from taximeter.location import LocationSample
from taximeter.location_filter import LocationFilter
from taximeter.meter_logging import get_logger, log_trip_context, setup_logging
from taximeter.settings import get_settings
from taximeter.snapshots import TripSnapshot
from taximeter.summary import TripNotifier, trip_end_summary

logger = get_logger(__name__)


def load_samples(lines: Iterable[str]) -> Iterator[LocationSample]:
    """Parse JSON-lines samples, skipping blank and invalid lines."""
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield LocationSample.model_validate_json(line)
        except ValidationError as e:
            logger.warning("Skipping invalid sample on line %d: %s", lineno, e.errors()[0]["msg"])


def replay_samples(
    controller: TripController, samples: Iterable[LocationSample]
) -> TripSnapshot:
    """Start a trip and feed samples, ticking the clock from their timestamps."""
    controller.start()
    clock: datetime | None = None

    with log_trip_context(controller.trip_id):
        for sample in samples:
            if clock is None:
                clock = sample.timestamp
            whole_seconds = int((sample.timestamp - clock).total_seconds())
            # Out-of-order samples do not move the clock backwards
            for _ in range(max(whole_seconds, 0)):
                controller.on_tick()
            if whole_seconds > 0:
                clock += timedelta(seconds=whole_seconds)
            controller.on_location_sample(sample)

    return controller.snapshot()


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Replay recorded GPS samples through the taximeter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", type=Path, help="JSON-lines file of location samples")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final trip snapshot as JSON instead of a summary",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print running summaries and debug logs",
    )
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(
        level="DEBUG" if args.verbose else settings.meter.log_level,
        json_output=settings.meter.log_format == "json",
        environment=settings.meter.environment,
    )

    if not args.path.is_file():
        logger.error("Sample file not found: %s", args.path)
        return 1

    controller = TripController(
        tariff=settings.tariff.to_tariff(),
        location_filter=LocationFilter(settings.filter.to_thresholds()),
    )
    if args.verbose:
        controller.subscribe(TripNotifier(logger.debug, currency=settings.meter.currency))

    with args.path.open(encoding="utf-8") as f:
        snapshot = replay_samples(controller, load_samples(f))

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
    else:
        print(trip_end_summary(snapshot, settings.meter.currency))
    return 0


if __name__ == "__main__":
    sys.exit(main())
