"""Factory for creating platform-specific network info providers."""

import platform

from youup.backends.network.base import SystemNetworkInfoProvider


class NetworkInfoProviderFactory:
    """Factory for creating network info providers for the current platform.

    Selects the Linux or Darwin/macOS implementation based on the running
    system.
    """

    @staticmethod
    def create() -> SystemNetworkInfoProvider | None:
        """Create a network info provider for the current platform.

        Returns
        -------
            SystemNetworkInfoProvider subclass instance, or None if the
            platform is unsupported
        """
        system = platform.system()

        if system == "Linux":
            from youup.backends.network.linux import LinuxNetworkInfoProvider

            return LinuxNetworkInfoProvider()
        elif system == "Darwin":
            from youup.backends.network.darwin import DarwinNetworkInfoProvider

            return DarwinNetworkInfoProvider()
        else:
            return None


def get_network_info_provider() -> SystemNetworkInfoProvider | None:
    """Get a network info provider for the current platform.

    Returns
    -------
        SystemNetworkInfoProvider instance or None if unsupported
    """
    return NetworkInfoProviderFactory.create()
