"""
Measurement domain model.

Defines Time (a wall-clock time of day) and Measurement (a value recorded at
a Time). Both are immutable and are built only by parsing user input.
"""

import re
from dataclasses import dataclass

from sugardiff.utils.exceptions import (
    DegenerateRateError,
    InvalidValueError,
    MalformedTimeError,
)

# Time fields are small unsigned numbers
MAX_TIME_FIELD = 255

# Measured values are 16-bit signed
MIN_VALUE = -32768
MAX_VALUE = 32767

_UNSIGNED_RE = re.compile(r'\+?[0-9]+')
_SIGNED_RE = re.compile(r'[+-]?[0-9]+')


@dataclass(frozen=True)
class Time:
    """
    A time of day as hours and minutes.

    Attributes:
        h: Hour, 0-23 expected but not enforced.
        m: Minute, 0-59 expected but not enforced.
    """

    h: int
    m: int

    @classmethod
    def parse(cls, raw: str) -> 'Time':
        """
        Parse "H:MM" or "HH:MM". Fields past the second are ignored.

        Raises:
            MalformedTimeError: fewer than two fields, or a non-numeric field
        """
        fields = raw.split(':')
        if len(fields) < 2:
            raise MalformedTimeError(raw, "expected HH:MM")

        h = _parse_time_field(raw, fields[0])
        m = _parse_time_field(raw, fields[1])
        return cls(h, m)

    @property
    def timestamp(self) -> int:
        """Minutes since midnight."""
        return self.h * 60 + self.m

    def __str__(self) -> str:
        return f"{self.h:02d}:{self.m:02d}"


def _parse_time_field(raw: str, field: str) -> int:
    if not _UNSIGNED_RE.fullmatch(field):
        raise MalformedTimeError(raw, f"'{field}' is not a number")
    digits = field.lstrip('+').lstrip('0') or '0'
    if len(digits) > len(str(MAX_TIME_FIELD)) or int(digits) > MAX_TIME_FIELD:
        raise MalformedTimeError(raw, f"'{field}' is out of range")
    return int(digits)


def parse_value(text: str) -> int:
    """Parse a measured value; surrounding whitespace is ignored."""
    stripped = text.strip()
    if not _SIGNED_RE.fullmatch(stripped):
        raise InvalidValueError(text)

    digits = stripped.lstrip('+-').lstrip('0')
    # int() refuses very long digit strings, so check the length first
    if len(digits) > len(str(MAX_VALUE)):
        raise InvalidValueError(text, f"must be between {MIN_VALUE} and {MAX_VALUE}")
    value = int(digits or '0')
    if stripped.startswith('-'):
        value = -value
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise InvalidValueError(text, f"must be between {MIN_VALUE} and {MAX_VALUE}")
    return value


@dataclass(frozen=True)
class Measurement:
    """
    A single value recorded at a time of day.

    Attributes:
        y: The measured value.
        t: When it was measured.
    """

    y: int
    t: Time

    @classmethod
    def parse(cls, value_text: str, time_text: str) -> 'Measurement':
        """
        Build a measurement from the two raw input strings.

        The value is parsed first, so its error wins when both are bad.

        Raises:
            InvalidValueError: value_text is not a whole number
            MalformedTimeError: time_text is not HH:MM
        """
        y = parse_value(value_text)
        t = Time.parse(time_text.strip())
        return cls(y, t)

    @property
    def timestamp(self) -> int:
        return self.t.timestamp

    @property
    def value(self) -> int:
        return self.y

    def diff(self, other: 'Measurement') -> float:
        """
        Rate of change per minute from other to self. Positive means rising.

        Raises:
            DegenerateRateError: both measurements share a timestamp
        """
        dt = self.timestamp - other.timestamp
        if dt == 0:
            raise DegenerateRateError(self.timestamp)
        return (self.y - other.y) / dt

    def __str__(self) -> str:
        return f"[{self.t}] {self.y}"
