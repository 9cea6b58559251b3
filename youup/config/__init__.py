"""Endpoints configuration loading."""

from youup.config.loader import (
    ConfigurationError,
    ConfigurationInvalidError,
    ConfigurationNotFoundError,
    config_path,
    create_sample_configuration,
    load_endpoints_configuration,
    read_configuration,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationInvalidError",
    "ConfigurationNotFoundError",
    "config_path",
    "create_sample_configuration",
    "load_endpoints_configuration",
    "read_configuration",
]
