import pytest

from blessed.keyboard import Keystroke

from sugardiff.models.measurement import Measurement
from sugardiff.services.measurement_log import MeasurementLog
from sugardiff.utils.logger import StructuredLogger
from sugardiff.utils.validators import SettingsSchema


@pytest.fixture
def logger(tmp_path):
    """
    Logger writing under the test's temporary directory.
    """
    structured = StructuredLogger(tmp_path / "logs" / "test.log", level="DEBUG")
    yield structured
    structured.close()


@pytest.fixture
def settings() -> SettingsSchema:
    return SettingsSchema()


@pytest.fixture
def make_log():
    """
    Build a MeasurementLog from (value, time) string pairs, inserted in order.
    """
    def _make_log(*pairs):
        log = MeasurementLog()
        for value_text, time_text in pairs:
            log.insert(Measurement.parse(value_text, time_text))
        return log
    return _make_log


@pytest.fixture
def keys():
    """
    Turn a string into printable keystrokes, plus the named keys used by the TUI.
    """
    class Keys:
        ENTER = Keystroke('\n', code=343, name='KEY_ENTER')
        ESCAPE = Keystroke('\x1b', code=361, name='KEY_ESCAPE')
        BACKSPACE = Keystroke('\x7f', code=263, name='KEY_BACKSPACE')
        UP = Keystroke('\x1b[A', code=259, name='KEY_UP')

        @staticmethod
        def typed(text):
            return [Keystroke(ch) for ch in text]

    return Keys
