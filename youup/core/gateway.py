"""Gateway discovery: active routers, default gateway and DNS servers."""

from __future__ import annotations

import subprocess

from youup.backends.network.base import SystemNetworkInfoProvider
from youup.models.constants import LINK_LOCAL_ROUTER, MediaType
from youup.models.network_models import DNSServerInfo, RouterAddress, ServiceRouterEntry
from youup.utils.logger import Logger

_log = Logger.get("core.gateway", require_configured=False)

# Checked in order against service name and hardware descriptor.
_NAME_TOKENS: tuple[tuple[tuple[str, ...], MediaType], ...] = (
    (("wi-fi", "wifi", "airport"), MediaType.WIFI),
    (("thunderbolt",), MediaType.THUNDERBOLT),
    (("ethernet",), MediaType.ETHERNET),
    (("usb",), MediaType.USB),
    (("bluetooth",), MediaType.BLUETOOTH),
    (("cellular", "mobile"), MediaType.CELLULAR),
    (("firewire",), MediaType.FIREWIRE),
    (("bridge",), MediaType.BRIDGE),
)

# Checked in order against the interface name; longer prefixes first where
# they overlap ("bridge" before "br").
_PREFIXES: tuple[tuple[tuple[str, ...], MediaType], ...] = (
    (("lo",), MediaType.LOOPBACK),
    (("utun", "tun", "tap", "gif", "stf", "ipsec", "ppp", "wg"), MediaType.TUNNEL),
    (("bridge", "br", "virbr", "docker"), MediaType.BRIDGE),
    (("wl",), MediaType.WIFI),
    (("en", "eth"), MediaType.ETHERNET),
    (("fw",), MediaType.FIREWIRE),
    (("ww",), MediaType.CELLULAR),
)

_PROVIDER_ERRORS = (OSError, ValueError, subprocess.SubprocessError)


def classify_media_type(
    interface_name: str,
    service_name: str | None = None,
    hardware: str | None = None,
) -> MediaType:
    """Classify the medium behind an interface.

    User-assigned names and hardware descriptors win over interface name
    conventions, since "en0" is Wi-Fi on most Macs.

    Args:
        interface_name: OS interface name (e.g., "en0", "wlan0").
        service_name: User-assigned service name (e.g., "Wi-Fi").
        hardware: Hardware descriptor (e.g., "AirPort").

    Returns:
        The media type, MediaType.UNKNOWN when nothing matches.
    """
    for text in (service_name, hardware):
        if not text:
            continue
        lowered = text.lower()
        for tokens, media_type in _NAME_TOKENS:
            if any(token in lowered for token in tokens):
                return media_type

    lowered_name = interface_name.lower()
    for prefixes, media_type in _PREFIXES:
        if lowered_name.startswith(prefixes):
            return media_type

    return MediaType.UNKNOWN


def is_meaningful(router: RouterAddress) -> bool:
    """Whether an interface has a router worth showing.

    True for any IPv4 router, or an IPv6 router other than the bare
    link-local prefix.
    """
    if router.ipv4_router:
        return True
    return bool(router.ipv6_router) and router.ipv6_router != LINK_LOCAL_ROUTER


def merge_router_entries(entries: list[ServiceRouterEntry]) -> list[RouterAddress]:
    """Merge per-family router entries into one record per interface.

    A later entry overwrites the fields it carries and leaves the other
    address family untouched. Interfaces keep their first-seen order.
    """
    merged: dict[str, RouterAddress] = {}

    for entry in entries:
        media_type = classify_media_type(
            entry.interface_name, entry.service_name, entry.hardware
        )
        existing = merged.get(entry.interface_name)
        if existing is None:
            existing = RouterAddress(interface_name=entry.interface_name)
        if media_type == MediaType.UNKNOWN:
            media_type = existing.media_type

        update: dict[str, object] = {"media_type": media_type}
        if entry.is_ipv6:
            update["ipv6_router"] = entry.router
        else:
            update["ipv4_router"] = entry.router
        merged[entry.interface_name] = existing.model_copy(update=update)

    return list(merged.values())


class GatewayResolver:
    """Resolve routers and DNS servers from a system network info provider.

    Provider failures never escape: they are logged and reported as
    "nothing found".

    Args:
        provider: Platform provider; None on unsupported platforms.
    """

    def __init__(self, provider: SystemNetworkInfoProvider | None) -> None:
        self._provider = provider

    def list_active_routers(self) -> list[RouterAddress]:
        """Routers of active interfaces, one record per interface."""
        if self._provider is None:
            _log.debug("No network info provider for this platform")
            return []

        try:
            entries = self._provider.get_router_entries()
        except _PROVIDER_ERRORS as e:
            _log.warning(f"Could not read router configuration: {e}")
            return []

        routers = merge_router_entries(entries)
        _log.debug(f"Found {len(routers)} interfaces with routers")
        return routers

    def default_gateway(self) -> str | None:
        """Pick the gateway to probe.

        The first IPv4 router wins regardless of interface order; IPv6 is
        only used when no interface has an IPv4 router.
        """
        routers = self.list_active_routers()

        for router in routers:
            if router.ipv4_router:
                return router.ipv4_router

        for router in routers:
            if router.ipv6_router:
                return router.ipv6_router

        return None

    def list_dns_servers(self) -> list[DNSServerInfo]:
        """Configured DNS servers, deduplicated by address (first wins)."""
        if self._provider is None:
            return []

        try:
            entries = self._provider.get_dns_entries()
        except _PROVIDER_ERRORS as e:
            _log.warning(f"Could not read DNS configuration: {e}")
            return []

        servers: dict[str, DNSServerInfo] = {}
        for entry in entries:
            servers.setdefault(entry.address, entry)
        return list(servers.values())
