"""Version information for youup."""

from youup.version.youup_version import YOUUP_VERSION, Version

__all__ = ["YOUUP_VERSION", "Version"]
