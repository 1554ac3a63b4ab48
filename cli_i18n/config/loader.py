"""
Configuration loading

Settings come from the environment, optionally overlaid with a YAML file and
explicit overrides (in increasing priority).
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .settings import Settings

logger = structlog.get_logger(__name__)


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a YAML config file into a flat settings dict."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", source=str(path), previous_error=e) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}", source=str(path), previous_error=e) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping", source=str(path))
    return data


def load_config(config_file: Union[str, Path, None] = None, **overrides: Any) -> Settings:
    """Build Settings from environment, an optional YAML file and overrides.

    Overrides whose value is None are ignored, so unset CLI options don't
    mask file or environment values.
    """
    data: Dict[str, Any] = {}
    if config_file is not None:
        data.update(read_config_file(Path(config_file)))
        logger.debug("Loaded config file", file=str(config_file), keys=sorted(data))

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return Settings(**data)
    except ValidationError as e:
        source: Optional[str] = str(config_file) if config_file is not None else None
        raise ConfigurationError(f"Invalid configuration: {e}", source=source, previous_error=e) from e
