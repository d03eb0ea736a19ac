"""
Structured logging - file only, the terminal belongs to the TUI
"""

import logging
import json
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """Structured logger that doesn't spam console."""

    def __init__(self, log_file: Optional[Path] = None, level: str = 'INFO'):
        self.log_file = Path(log_file) if log_file else Path('logs/sugar_diff.log')
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        # Setup logging
        self.logger = logging.getLogger('sugardiff')
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # One file handler per target file
        target = str(self.log_file.resolve())
        if not any(getattr(h, 'baseFilename', None) == target for h in self.logger.handlers):
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def log_action(self, level: str, message: str, **kwargs):
        """Log an action with structured data."""
        if level == 'error':
            self.logger.error(f"{message} | {json.dumps(kwargs)}")
        elif level == 'warning':
            self.logger.warning(f"{message} | {json.dumps(kwargs)}")
        elif level == 'info':
            self.logger.info(f"{message} | {json.dumps(kwargs)}")
        else:
            self.logger.debug(f"{message} | {json.dumps(kwargs)}")

    def close(self):
        """Detach and close file handlers."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


# Global logger instance
_logger_instance = None

def get_logger(log_file: Optional[Path] = None, level: str = 'INFO') -> StructuredLogger:
    """Get the global logger instance. Arguments only apply on first call."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = StructuredLogger(log_file, level)
    return _logger_instance
