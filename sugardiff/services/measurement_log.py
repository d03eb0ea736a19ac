"""
Measurement Log

Keeps measurements ordered by time of day, no matter the order in which
they were typed in.
"""

from typing import Iterator, List, Optional, Tuple

from sugardiff.models.measurement import Measurement


class MeasurementLog:
    """Measurements in non-decreasing timestamp order."""

    def __init__(self):
        self._entries: List[Measurement] = []

    def insert(self, measurement: Measurement) -> int:
        """
        Insert a measurement at its sorted position.

        Scans from the end for the last entry not later than the new one and
        inserts right after it, so entries sharing a timestamp keep the order
        they were added in. An entry earlier than everything goes first.

        Returns:
            Index the measurement was stored at
        """
        idx = 0
        for i in range(len(self._entries) - 1, -1, -1):
            if self._entries[i].timestamp <= measurement.timestamp:
                idx = i + 1
                break

        self._entries.insert(idx, measurement)
        return idx

    def window(self, n: int) -> List[Measurement]:
        """Last n entries, or all of them if there are fewer."""
        if n <= 0:
            return []
        return list(self._entries[-n:])

    def chart_points(self) -> List[Tuple[float, float]]:
        """(timestamp, value) pairs in log order."""
        return [(float(m.timestamp), float(m.value)) for m in self._entries]

    def last_two(self) -> Optional[Tuple[Measurement, Measurement]]:
        """(previous, last), or None with fewer than two entries."""
        if len(self._entries) < 2:
            return None
        return self._entries[-2], self._entries[-1]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Measurement]:
        return iter(self._entries)

    def __getitem__(self, idx: int) -> Measurement:
        return self._entries[idx]
