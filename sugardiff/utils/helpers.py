"""Helper utility functions."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from sugardiff.utils.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = "config/config.yaml"


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        minutes = int(seconds / 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s" if secs > 0 else f"{minutes}m"
    else:
        hours = int(seconds / 3600)
        minutes = int((seconds % 3600) / 60)
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"


def find_config_file(config_path: str = DEFAULT_CONFIG_PATH) -> Optional[Path]:
    """
    Locate a config file.
    Relative paths are tried from the current directory upwards, then
    relative to the project root.
    """
    config_file = Path(config_path)
    if config_file.is_absolute():
        return config_file if config_file.exists() else None

    # Check up to 5 levels up
    current = Path.cwd()
    for _ in range(5):
        potential_config = current / config_path
        if potential_config.exists():
            return potential_config
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    # Last resort: try relative to the project root
    project_root = Path(__file__).resolve().parent.parent.parent
    potential_config = project_root / config_path
    if potential_config.exists():
        return potential_config
    return None


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Without a path the default config/config.yaml is looked up, and an empty
    dict is returned when it does not exist. An explicitly requested file
    must exist.

    Raises:
        ConfigurationError: requested file missing, or not valid YAML
    """
    requested = config_path is not None
    config_file = find_config_file(config_path or DEFAULT_CONFIG_PATH)

    if config_file is None:
        if requested:
            raise ConfigurationError(
                message=f"Config file not found: {config_path}",
                error_code="CONFIG_ERROR",
                details={"path": config_path, "searched_from": str(Path.cwd())}
            )
        return {}

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            message=f"Config file is not valid YAML: {config_file}",
            error_code="CONFIG_ERROR",
            details={"path": str(config_file), "error": str(e)}
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            message=f"Config file must contain a mapping: {config_file}",
            error_code="CONFIG_ERROR",
            details={"path": str(config_file)}
        )
    return config
