"""Services deriving views and projections from measurements."""

from .measurement_log import MeasurementLog
from .analytics import (
    Direction,
    EntryRate,
    Projection,
    chart_x_bounds,
    format_entry,
    project_crossing,
    projection_text,
    windowed_rates
)

__all__ = [
    'MeasurementLog',
    'Direction',
    'EntryRate',
    'Projection',
    'chart_x_bounds',
    'format_entry',
    'project_crossing',
    'projection_text',
    'windowed_rates'
]
