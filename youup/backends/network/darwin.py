"""macOS network info provider using the SystemConfiguration dynamic store.

The dynamic store is read through ``scutil``, which prints values as
nested ``<dictionary>`` / ``<array>`` blocks::

    <dictionary> {
      Addresses : <array> {
        0 : 192.168.1.23
      }
      InterfaceName : en0
      Router : 192.168.1.1
    }
"""

from __future__ import annotations

import re
import subprocess
from typing import Any

from youup.backends.network.base import SystemNetworkInfoProvider
from youup.models.network_models import DNSServerInfo, ServiceRouterEntry
from youup.utils.logger import Logger

SCUTIL_TIMEOUT_SECONDS = 5

_SERVICE_KEY = re.compile(r"State:/Network/Service/([^/\s]+)/(IPv4|IPv6)")

_log = Logger.get("backends.network.darwin", require_configured=False)


def parse_scutil_value(text: str) -> dict[str, Any]:
    """Parse one ``scutil show`` result into nested dicts and lists.

    Args:
        text: Raw scutil output for a single key.

    Returns:
        The top-level dictionary, or an empty dict for "No such key".
    """
    root: dict[str, Any] = {}
    stack: list[dict[str, Any] | list[Any]] = [root]

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line == "<dictionary> {":
            continue
        if line == "}":
            if len(stack) > 1:
                stack.pop()
            continue

        key, sep, value = line.partition(" : ")
        if not sep:
            continue

        child: dict[str, Any] | list[Any] | None = None
        if value == "<dictionary> {":
            child = {}
        elif value == "<array> {":
            child = []

        container = stack[-1]
        item = child if child is not None else value
        if isinstance(container, list):
            container.append(item)
        else:
            container[key] = item

        if child is not None:
            stack.append(child)

    return root


class DarwinNetworkInfoProvider(SystemNetworkInfoProvider):
    """Network info for macOS systems.

    Reads:
    - State:/Network/Service/<id>/IPv4 and /IPv6: interface and router
    - Setup:/Network/Service/<id>: user-assigned service name
    - Setup:/Network/Service/<id>/Interface: hardware descriptor
    - State:/Network/Global/DNS and State:/Network/Service/<id>/DNS
    """

    def get_router_entries(self) -> list[ServiceRouterEntry]:
        """Get router entries for every service with a Router value.

        Returns
        -------
            All IPv4 entries first, then all IPv6 entries.
        """
        entries = []
        for family in ("IPv4", "IPv6"):
            for service_id in self._list_services(family):
                state = self._show(f"State:/Network/Service/{service_id}/{family}")
                interface_name = state.get("InterfaceName")
                router = state.get("Router")
                if not isinstance(interface_name, str) or not isinstance(router, str):
                    continue

                service_name, hardware = self._service_setup(service_id)
                entries.append(
                    ServiceRouterEntry(
                        service_id=service_id,
                        interface_name=interface_name,
                        router=router,
                        is_ipv6=family == "IPv6",
                        service_name=service_name,
                        hardware=hardware,
                    )
                )
        return entries

    def get_dns_entries(self) -> list[DNSServerInfo]:
        """Get global DNS servers followed by per-service servers."""
        servers = [
            DNSServerInfo(address=address, is_ipv6=":" in address)
            for address in self._server_addresses("State:/Network/Global/DNS")
        ]

        service_ids = self._list_services("IPv4") + self._list_services("IPv6")
        for service_id in dict.fromkeys(service_ids):
            state = self._show(f"State:/Network/Service/{service_id}/IPv4")
            if not state:
                state = self._show(f"State:/Network/Service/{service_id}/IPv6")
            interface_name = state.get("InterfaceName")
            if not isinstance(interface_name, str):
                interface_name = None
            for address in self._server_addresses(
                f"State:/Network/Service/{service_id}/DNS"
            ):
                servers.append(
                    DNSServerInfo(
                        address=address,
                        interface=interface_name,
                        is_ipv6=":" in address,
                    )
                )
        return servers

    def _service_setup(self, service_id: str) -> tuple[str | None, str | None]:
        """Return (user-defined service name, hardware) for a service."""
        setup = self._show(f"Setup:/Network/Service/{service_id}")
        interface = self._show(f"Setup:/Network/Service/{service_id}/Interface")

        service_name = setup.get("UserDefinedName") or interface.get("UserDefinedName")
        hardware = interface.get("Hardware")
        return (
            service_name if isinstance(service_name, str) else None,
            hardware if isinstance(hardware, str) else None,
        )

    def _server_addresses(self, key: str) -> list[str]:
        addresses = self._show(key).get("ServerAddresses", [])
        if not isinstance(addresses, list):
            return []
        return [address for address in addresses if isinstance(address, str)]

    def _list_services(self, family: str) -> list[str]:
        """Service IDs that publish state for the given address family."""
        output = self._run_scutil(f"list State:/Network/Service/[^/]+/{family}\n")
        service_ids = []
        for match in _SERVICE_KEY.finditer(output):
            if match.group(2) == family and match.group(1) not in service_ids:
                service_ids.append(match.group(1))
        return service_ids

    def _show(self, key: str) -> dict[str, Any]:
        return parse_scutil_value(self._run_scutil(f"show {key}\n"))

    @staticmethod
    def _run_scutil(script: str) -> str:
        """Run scutil with a command script on stdin and return stdout."""
        result = subprocess.run(
            ["scutil"],
            input=script,
            capture_output=True,
            text=True,
            timeout=SCUTIL_TIMEOUT_SECONDS,
            check=True,
        )
        _log.debug(f"scutil {script.strip()!r}: {len(result.stdout)} bytes")
        return result.stdout
