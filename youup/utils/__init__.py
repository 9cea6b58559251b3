"""youup utilities - environment access and logging."""

from youup.utils.env import (
    EnvVarError,
    EnvVarTypeError,
    env_is_set,
    get_env,
)
from youup.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "env_is_set",
    "get_env",
]
