"""Configuration validation using Pydantic."""

from typing import Any, Dict, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, ValidationError as PydanticValidationError
from sugardiff.utils.exceptions import ConfigurationError


class DisplaySettings(BaseModel):
    """Measurement list settings."""
    window_size: int = Field(default=6, ge=1, le=100, description="Rows shown in the measurement list")

    model_config = ConfigDict(extra='forbid')


class ChartSettings(BaseModel):
    """Chart axis settings."""
    x_upper: float = Field(default=1440.0, gt=0, description="Right edge of the time axis, in minutes")
    x_lower_factor: float = Field(default=0.9, ge=0, le=1, description="Left edge as a fraction of the earliest timestamp")
    y_bounds: Tuple[float, float] = Field(default=(0.0, 400.0), description="Value axis bounds")

    @field_validator('y_bounds')
    @classmethod
    def validate_y_bounds(cls, v):
        if v[0] >= v[1]:
            raise ValueError('y_bounds lower bound must be below the upper bound')
        return v

    model_config = ConfigDict(extra='forbid')


class LoggingSettings(BaseModel):
    """Log file settings."""
    file: str = Field(default='logs/sugar_diff.log', min_length=1, description="Log file path")
    level: str = Field(default='INFO', description="Minimum level written to the log file")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v = v.upper()
        if v not in allowed_levels:
            raise ValueError(f'level must be one of {allowed_levels}')
        return v

    model_config = ConfigDict(extra='forbid')


class SettingsSchema(BaseModel):
    """Validation schema for config.yaml."""
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    chart: ChartSettings = Field(default_factory=ChartSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(extra='forbid')  # Reject unknown sections


def validate_config(data: Dict[str, Any], schema: type[BaseModel] = SettingsSchema) -> BaseModel:
    """
    Validate configuration data against a Pydantic schema.

    Args:
        data: Parsed configuration dictionary
        schema: Pydantic model class

    Returns:
        Validated model instance

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return schema(**data)
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            field = '.'.join(str(x) for x in error['loc'])
            errors.append(f"{field}: {error['msg']}")
        raise ConfigurationError(
            message="Invalid configuration",
            error_code="CONFIG_ERROR",
            details={"errors": errors}
        )
