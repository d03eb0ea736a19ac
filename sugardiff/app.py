"""
Application state and keyboard handling.

The control loop owns one AppState and passes it to handle_key for every
key press. Rendering reads the same state; nothing here touches the terminal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from blessed.keyboard import Keystroke

from sugardiff.models.measurement import Measurement, parse_value
from sugardiff.services.measurement_log import MeasurementLog
from sugardiff.utils.exceptions import MeasurementError
from sugardiff.utils.logger import StructuredLogger


class InputMode(Enum):
    """Which text buffer receives keystrokes."""
    VALUE = 'value'
    TIME = 'time'


@dataclass
class AppState:
    """Everything the control loop mutates."""
    value_input: str = ''
    time_input: str = ''
    input_mode: InputMode = InputMode.VALUE
    log: MeasurementLog = field(default_factory=MeasurementLog)
    status: str = ''
    status_level: str = 'info'
    running: bool = True

    @property
    def active_input(self) -> str:
        if self.input_mode is InputMode.VALUE:
            return self.value_input
        return self.time_input

    def set_active_input(self, text: str):
        if self.input_mode is InputMode.VALUE:
            self.value_input = text
        else:
            self.time_input = text


def add_measurement(state: AppState, logger: StructuredLogger) -> Optional[Measurement]:
    """
    Parse both buffers and insert the result into the log.

    On failure the buffers and the log stay as they were and the error is
    shown in the status line.
    """
    try:
        m = Measurement.parse(state.value_input, state.time_input)
    except MeasurementError as e:
        state.status = e.message
        state.status_level = 'error'
        logger.log_action('warning', 'Rejected measurement', error_code=e.error_code, **e.details)
        return None

    idx = state.log.insert(m)
    state.value_input = ''
    state.time_input = ''
    state.status = f"Added {m}"
    state.status_level = 'info'
    logger.log_action('info', 'Added measurement', value=m.value, time=str(m.t),
                      index=idx, total=len(state.log))
    return m


def submit(state: AppState, logger: StructuredLogger):
    """Enter: move from value to time entry, or add the measurement."""
    if state.input_mode is InputMode.VALUE:
        try:
            parse_value(state.value_input)
        except MeasurementError as e:
            state.status = e.message
            state.status_level = 'error'
            logger.log_action('warning', 'Rejected value', error_code=e.error_code, **e.details)
            return
        state.status = ''
        state.input_mode = InputMode.TIME
    elif add_measurement(state, logger) is not None:
        state.input_mode = InputMode.VALUE


def handle_key(state: AppState, key: Keystroke, logger: StructuredLogger):
    """Apply one key press to the state."""
    if key.name == 'KEY_ESCAPE':
        state.running = False
    elif key.name == 'KEY_ENTER':
        submit(state, logger)
    elif key.name in ('KEY_BACKSPACE', 'KEY_DELETE'):
        state.set_active_input(state.active_input[:-1])
    elif not key.is_sequence and len(key) == 1 and key.isprintable():
        state.set_active_input(state.active_input + str(key))
