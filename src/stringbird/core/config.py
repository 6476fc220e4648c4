"""Configuration management for stringbird."""

import os
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from stringbird.constants import ConfigDefaults, LoggingDefaults
from stringbird.core.exceptions import ConfigurationError
from stringbird.core.logging import configure_logging, get_logger
from stringbird.models.config import StringBirdConfig


def validate_config_file(config_path: str) -> StringBirdConfig:
    """Validate a .stringbird.yml file.

    Args:
        config_path: Path to the YAML config file

    Returns:
        Validated StringBirdConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    # An empty file means "all defaults"
    if config_data is None:
        return StringBirdConfig()

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        return StringBirdConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def resolve_config_path(config_path: Optional[str] = None) -> Optional[str]:
    """Resolve which config file to use.

    Precedence: explicit path > STRINGBIRD_CONFIG env > .stringbird.yml in the
    working directory > None.
    """
    if config_path:
        return config_path

    env_config = os.environ.get(ConfigDefaults.ENV_VAR)
    if env_config:
        return env_config

    if os.path.isfile(ConfigDefaults.FILENAME):
        return ConfigDefaults.FILENAME

    return None


def load_config(config_path: Optional[str] = None, **overrides: Any) -> StringBirdConfig:
    """Load configuration and apply command-line overrides.

    Args:
        config_path: Explicit config file path (--config)
        **overrides: Field values that take precedence over the file; None values are ignored

    Returns:
        Effective StringBirdConfig

    Raises:
        ConfigurationError: If the config file or an override is invalid
    """
    logger = get_logger("config")
    resolved_path = resolve_config_path(config_path)
    config = validate_config_file(resolved_path) if resolved_path else StringBirdConfig()

    updates: Dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}
    if updates:
        try:
            config = StringBirdConfig(**{**config.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigurationError(resolved_path or "<command line>", f"Validation failed: {e}") from e

    logger.debug(
        "config_loaded",
        config_path=resolved_path,
        store_file=config.store_file,
        dialect=config.dialect,
    )
    return config


def configure_logging_from_env(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    quiet: bool = False,
) -> None:
    """Configure logging from flags and environment.

    Precedence: flags > LOG_LEVEL / LOG_FILE env vars > defaults. With quiet,
    stderr only receives warnings and errors.
    """
    level = log_level or os.environ.get("LOG_LEVEL", LoggingDefaults.DEFAULT_LEVEL)
    destination = log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=level, log_file=destination, quiet=quiet)
