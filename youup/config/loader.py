"""Loading and creating the endpoints configuration file.

Default location follows the XDG base directory convention::

    $XDG_CONFIG_HOME/you-up/endpoints.json
    ~/.config/you-up/endpoints.json      (when XDG_CONFIG_HOME is unset)
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from youup.models.config_models import EndpointsConfiguration
from youup.utils.env import env_is_set, get_env
from youup.utils.logger import Logger

APP_DIR_NAME = "you-up"
CONFIG_FILE_NAME = "endpoints.json"

_log = Logger.get("config", require_configured=False)


class ConfigurationError(Exception):
    """Base exception for configuration file errors."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigurationNotFoundError(ConfigurationError):
    """Raised when the configuration file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "configuration file not found")


class ConfigurationInvalidError(ConfigurationError):
    """Raised when the configuration file cannot be parsed or validated."""

    pass


def config_path() -> Path | None:
    """Return the configuration file path, or None if no home is known."""
    if env_is_set("XDG_CONFIG_HOME"):
        base = Path(get_env("XDG_CONFIG_HOME", default=""))
    elif env_is_set("HOME"):
        base = Path(get_env("HOME", default="")) / ".config"
    else:
        return None
    return base / APP_DIR_NAME / CONFIG_FILE_NAME


def read_configuration(path: Path) -> EndpointsConfiguration:
    """Read and validate a configuration file.

    Args:
        path: JSON file to read.

    Returns:
        The validated configuration, exactly as found on disk.

    Raises:
        ConfigurationNotFoundError: If the file does not exist.
        ConfigurationInvalidError: If the file is not valid JSON, is not an
            object, lacks ``endpoints`` or fails validation.
    """
    if not path.exists():
        raise ConfigurationNotFoundError(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationInvalidError(path, f"invalid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationInvalidError(path, f"unreadable: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationInvalidError(path, "top-level value must be an object")
    if "endpoints" not in data:
        raise ConfigurationInvalidError(path, "missing required key 'endpoints'")

    try:
        return EndpointsConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationInvalidError(path, str(e)) from e


def load_endpoints_configuration(path: Path | None = None) -> EndpointsConfiguration:
    """Load the configuration, falling back to the built-in defaults.

    Never raises for missing, unreadable or invalid files, and a file
    without any endpoints is replaced by the defaults as a whole.

    Args:
        path: File to load. Defaults to :func:`config_path`.

    Returns:
        The configuration to use for this run.
    """
    path = path or config_path()
    if path is None:
        _log.debug("No configuration directory, using defaults")
        return EndpointsConfiguration.default()

    try:
        config = read_configuration(path)
    except ConfigurationNotFoundError:
        _log.debug(f"No configuration at {path}, using defaults")
        return EndpointsConfiguration.default()
    except ConfigurationError as e:
        _log.warning(f"Ignoring configuration: {e}")
        return EndpointsConfiguration.default()

    if not config.endpoints:
        _log.warning(f"{path} lists no endpoints, using defaults")
        return EndpointsConfiguration.default()

    _log.debug(
        f"Loaded {len(config.endpoints)} endpoints and "
        f"{len(config.dns_test_domains)} DNS test domains from {path}"
    )
    return config


def create_sample_configuration(path: Path | None = None) -> Path:
    """Write the default configuration to disk.

    Args:
        path: Destination. Defaults to :func:`config_path`.

    Returns:
        The path written.

    Raises:
        ConfigurationError: If no destination can be determined.
        OSError: If the file cannot be written.
    """
    path = path or config_path()
    if path is None:
        raise ConfigurationError(
            Path(CONFIG_FILE_NAME), "cannot determine configuration directory"
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(EndpointsConfiguration.default().to_file_dict(), f, indent=2)
        f.write("\n")

    _log.info(f"Wrote sample configuration to {path}")
    return path
