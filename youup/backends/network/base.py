"""Base class for system network info providers - implemented per platform."""

from abc import ABC, abstractmethod

from youup.models.network_models import DNSServerInfo, ServiceRouterEntry


class SystemNetworkInfoProvider(ABC):
    """Abstract access to the operating system's network configuration.

    Providers report what the OS knows, unmerged and unfiltered for
    duplicates. Merging, classification and gateway selection happen in
    :class:`youup.core.gateway.GatewayResolver`.

    Implementations may raise ``OSError``, ``ValueError`` or
    ``subprocess.SubprocessError`` when the OS cannot be queried.
    """

    @abstractmethod
    def get_router_entries(self) -> list[ServiceRouterEntry]:
        """
        Get router entries for active network services.

        IPv4 and IPv6 routers of a service are reported as separate
        entries, in the order the OS enumerates them.

        Returns:
            List of router entries (possibly empty)
        """
        pass

    @abstractmethod
    def get_dns_entries(self) -> list[DNSServerInfo]:
        """
        Get configured DNS servers.

        Global servers come first, followed by per-service servers. The
        same address may appear more than once.

        Returns:
            List of DNS server entries (possibly empty)
        """
        pass
