"""System network info providers.

Platform-specific access to router and DNS configuration behind an
abstract base class and factory. Supports Linux and macOS.

Example:
    >>> from youup.backends.network import get_network_info_provider
    >>> provider = get_network_info_provider()
    >>> if provider:
    ...     entries = provider.get_router_entries()
"""

from youup.backends.network.base import SystemNetworkInfoProvider
from youup.backends.network.factory import (
    NetworkInfoProviderFactory,
    get_network_info_provider,
)

__all__ = [
    "NetworkInfoProviderFactory",
    "SystemNetworkInfoProvider",
    "get_network_info_provider",
]
