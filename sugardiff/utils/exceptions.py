"""Custom exceptions for Sugar Diff."""

from typing import Optional, Dict, Any


class SugarDiffError(Exception):
    """Base exception for all Sugar Diff errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class MeasurementError(SugarDiffError):
    """A measurement could not be built from user input."""
    pass


class MalformedTimeError(MeasurementError):
    """Time text is not two colon-separated numeric fields."""
    
    def __init__(self, raw: str, reason: str):
        super().__init__(
            message=f"Malformed time '{raw}': {reason}",
            error_code="MALFORMED_TIME",
            details={"raw": raw, "reason": reason}
        )


class InvalidValueError(MeasurementError):
    """Value text is not a signed integer in the accepted range."""
    
    def __init__(self, raw: str, reason: str = "expected a whole number"):
        super().__init__(
            message=f"Invalid value '{raw}': {reason}",
            error_code="INVALID_VALUE",
            details={"raw": raw, "reason": reason}
        )


class DegenerateRateError(SugarDiffError):
    """Two measurements share a timestamp, so no rate exists between them."""
    
    def __init__(self, timestamp: int):
        super().__init__(
            message=f"No elapsed time between measurements at minute {timestamp}",
            error_code="DEGENERATE_RATE",
            details={"timestamp": timestamp}
        )


class ConfigurationError(SugarDiffError):
    """Configuration error."""
    pass
