"""you-up - Gateway, DNS and internet reachability diagnostics."""

from youup.version.youup_version import YOUUP_VERSION, Version

__version__ = str(YOUUP_VERSION)
__version_info__ = YOUUP_VERSION

__all__ = [
    "YOUUP_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
