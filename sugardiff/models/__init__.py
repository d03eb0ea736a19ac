"""Domain models for Sugar Diff."""

from .measurement import Measurement, Time, parse_value

__all__ = ['Measurement', 'Time', 'parse_value']
