"""
Analytics Service

Derives everything the screen shows from the measurement log:
- Per-minute rate against the previous entry for the list view
- Chart axis bounds
- Linear projection of when the value crosses the low or high threshold
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from sugardiff.models.measurement import Measurement
from sugardiff.services.measurement_log import MeasurementLog
from sugardiff.utils.exceptions import DegenerateRateError
from sugardiff.utils.helpers import format_duration

# Crossing targets, fixed domain constants
LOW_THRESHOLD = 80
HIGH_THRESHOLD = 300

MINUTES_PER_DAY = 1440
CHART_Y_BOUNDS = (0.0, 400.0)

WAITING_TEXT = "Waiting for measurements..."
NO_ESTIMATE_TEXT = "no estimate"
SAME_TIME_TEXT = "No estimate: last two measurements share a time"


class Direction(Enum):
    """Which threshold the trend is heading for."""
    LOW = 'low'
    HIGH = 'high'


@dataclass(frozen=True)
class Projection:
    """
    Estimated crossing of a threshold.

    Attributes:
        direction: LOW for a falling or flat trend, HIGH for a rising one
        target: Threshold value being approached
        rate: Change per minute between the two latest measurements
        minutes: Minutes until the crossing, None when the trend is flat
    """
    direction: Direction
    target: int
    rate: float
    minutes: Optional[float]


@dataclass(frozen=True)
class EntryRate:
    """A measurement with its rate against the preceding log entry."""
    measurement: Measurement
    rate: Optional[float] = None
    degenerate: bool = False


def project_crossing(log: MeasurementLog) -> Optional[Projection]:
    """
    Project when the value reaches a threshold, from the last two entries.

    Returns:
        Projection, or None while fewer than two measurements exist

    Raises:
        DegenerateRateError: the last two entries share a timestamp
    """
    pair = log.last_two()
    if pair is None:
        return None

    prev, last = pair
    rate = last.diff(prev)

    if rate <= 0:
        direction, target = Direction.LOW, LOW_THRESHOLD
    else:
        direction, target = Direction.HIGH, HIGH_THRESHOLD

    # A flat trend never reaches the target
    minutes = (target - last.value) / rate if rate != 0 else None
    return Projection(direction=direction, target=target, rate=rate, minutes=minutes)


def projection_text(log: MeasurementLog) -> str:
    """Human-readable projection line."""
    try:
        projection = project_crossing(log)
    except DegenerateRateError:
        # Same timestamp on both entries, direction is unknown
        return SAME_TIME_TEXT

    if projection is None:
        return WAITING_TEXT

    if projection.minutes is None:
        duration = NO_ESTIMATE_TEXT
    else:
        # Already past the target
        duration = format_duration(max(projection.minutes, 0.0) * 60)
    return f"Time to {projection.direction.value}: {duration}"


def windowed_rates(log: MeasurementLog, n: int) -> List[EntryRate]:
    """
    Trailing window of the log, each entry paired with its rate.

    Rates are taken against the preceding entry of the whole log, so the
    first row of a window still shows one unless it is the first entry.
    """
    if n <= 0:
        return []

    start = max(len(log) - n, 0)
    rows = []
    for i in range(start, len(log)):
        m = log[i]
        if i == 0:
            rows.append(EntryRate(m))
            continue
        try:
            rows.append(EntryRate(m, rate=m.diff(log[i - 1])))
        except DegenerateRateError:
            rows.append(EntryRate(m, degenerate=True))
    return rows


def format_entry(row: EntryRate) -> str:
    """List line: '[HH:MM] <value> (<+rate> / min)'."""
    text = str(row.measurement)
    if row.degenerate:
        return f"{text} (-- / min)"
    if row.rate is not None:
        return f"{text} ({row.rate:+.3f} / min)"
    return text


def chart_x_bounds(points: Sequence[Tuple[float, float]],
                   upper: float = MINUTES_PER_DAY,
                   lower_factor: float = 0.9) -> Tuple[float, float]:
    """Time axis bounds: a margin below the earliest point up to end of day."""
    if not points:
        return 0.0, upper
    return min(x for x, _ in points) * lower_factor, upper
