"""Concurrent gateway, internet and DNS checks assembled into one snapshot."""

from __future__ import annotations

import asyncio

from youup.backends.network.factory import get_network_info_provider
from youup.core.gateway import GatewayResolver
from youup.core.prober import ProbeResult, ReachabilityProber
from youup.models.config_models import EndpointsConfiguration
from youup.models.network_models import (
    DNSServerInfo,
    NetworkStatus,
    RouterAddress,
    Unknown,
    Unreachable,
)
from youup.utils.logger import Logger

_log = Logger.get("core.checker", require_configured=False)


class NetworkChecker:
    """Entry point for reachability checks.

    Configuration is passed in rather than read from disk here; the CLI
    loads it once per run.

    Args:
        config: Endpoints and DNS test domains. Defaults to the built-in set.
        resolver: Gateway resolver. Defaults to one backed by the provider
            for the current platform.
        prober: Reachability prober. Defaults to a 3-second HTTP prober.

    Example:
        >>> checker = NetworkChecker()
        >>> status = asyncio.run(checker.check_network_status())
        >>> status.internet.is_reachable
        True
    """

    def __init__(
        self,
        config: EndpointsConfiguration | None = None,
        resolver: GatewayResolver | None = None,
        prober: ReachabilityProber | None = None,
    ) -> None:
        if config is None:
            config = EndpointsConfiguration.default()
        self._config = config
        self._resolver = resolver or GatewayResolver(get_network_info_provider())
        self._prober = prober or ReachabilityProber()

    async def check_network_status(self) -> NetworkStatus:
        """Run the gateway, internet and DNS checks concurrently.

        The snapshot timestamp is taken once all three have finished.
        """
        gateway, internet, dns = await asyncio.gather(
            self.check_gateway_reachability(),
            self.check_internet_reachability(),
            self.check_dns_reachability(),
        )
        return NetworkStatus(gateway=gateway, internet=internet, dns=dns)

    async def check_gateway_reachability(self) -> ProbeResult | Unknown:
        """Probe the default gateway; Unknown when there is none."""
        # Provider queries block on file and subprocess I/O.
        gateway = await asyncio.to_thread(self._resolver.default_gateway)
        if gateway is None:
            _log.info("No default gateway found")
            return Unknown()

        _log.debug(f"Probing gateway {gateway}")
        return await self._prober.probe_gateway(gateway)

    async def check_internet_reachability(self) -> ProbeResult:
        """Probe endpoints in order; first Reachable wins, else Unreachable."""
        for endpoint in self._config.endpoints:
            result = await self._prober.probe_internet(endpoint)
            if result.is_reachable:
                return result
            _log.debug(f"Endpoint {endpoint} failed: {result}")
        return Unreachable()

    async def check_dns_reachability(self) -> ProbeResult:
        """Probe test domains in order; first Reachable wins, else Unreachable."""
        for domain in self._config.dns_test_domains:
            result = await self._prober.probe_dns(domain)
            if result.is_reachable:
                return result
            _log.debug(f"DNS test domain {domain} failed: {result}")
        return Unreachable()

    def get_active_routers(self) -> list[RouterAddress]:
        """Routers of active interfaces, merged per interface."""
        return self._resolver.list_active_routers()

    def get_dns_servers(self) -> list[DNSServerInfo]:
        """Configured DNS servers, deduplicated by address."""
        return self._resolver.list_dns_servers()

    def get_configured_endpoints(self) -> list[str]:
        """Internet test endpoints in probing order."""
        return list(self._config.endpoints)

    def get_configured_dns_test_domains(self) -> list[str]:
        """DNS test domains in probing order."""
        return list(self._config.dns_test_domains)
