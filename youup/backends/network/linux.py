"""Linux network info provider using procfs, sysfs and resolv.conf."""

from __future__ import annotations

import ipaddress
import re
import shutil
import socket
import struct
import subprocess
from pathlib import Path

import psutil

from youup.backends.network.base import SystemNetworkInfoProvider
from youup.models.network_models import DNSServerInfo, ServiceRouterEntry
from youup.utils.logger import Logger

RTF_UP = 0x0001
RTF_GATEWAY = 0x0002

ARPHRD_ETHER = 1

_RESOLVECTL_LINK = re.compile(r"^Link \d+ \(([^)]+)\):\s*(.*)$")

_log = Logger.get("backends.network.linux", require_configured=False)


class LinuxNetworkInfoProvider(SystemNetworkInfoProvider):
    """Network info for Linux systems.

    Uses:
    - /proc/net/route: IPv4 default routes
    - /proc/net/ipv6_route: IPv6 default routes
    - /sys/class/net/<iface>: hardware descriptor of each interface
    - psutil.net_if_stats(): interface up/down state
    - /etc/resolv.conf and ``resolvectl dns``: DNS servers

    The root paths are parameters so tests can point them at fixtures.
    """

    def __init__(
        self,
        proc_root: str | Path = "/proc",
        sys_root: str | Path = "/sys",
        resolv_conf: str | Path = "/etc/resolv.conf",
    ) -> None:
        self._proc_root = Path(proc_root)
        self._sys_root = Path(sys_root)
        self._resolv_conf = Path(resolv_conf)

    def get_router_entries(self) -> list[ServiceRouterEntry]:
        """Get default-route gateways of interfaces that are up.

        Returns
        -------
            IPv4 entries followed by IPv6 entries.
        """
        active = self._active_interfaces()
        routes = self._ipv4_default_routes() + self._ipv6_default_routes()

        entries = []
        for interface_name, router, is_ipv6 in routes:
            if active is not None and interface_name not in active:
                _log.debug(f"Skipping {interface_name}: interface is down")
                continue
            entries.append(
                ServiceRouterEntry(
                    service_id=interface_name,
                    interface_name=interface_name,
                    router=router,
                    is_ipv6=is_ipv6,
                    hardware=self._hardware_descriptor(interface_name),
                )
            )
        return entries

    def get_dns_entries(self) -> list[DNSServerInfo]:
        """Get nameservers from resolv.conf, then per-link resolvectl servers."""
        return self._resolv_conf_servers() + self._resolvectl_servers()

    @staticmethod
    def _active_interfaces() -> set[str] | None:
        """Names of interfaces psutil reports as up, None if unknown."""
        stats = psutil.net_if_stats()
        if not stats:
            return None
        return {name for name, if_stats in stats.items() if if_stats.isup}

    def _ipv4_default_routes(self) -> list[tuple[str, str, bool]]:
        """Parse /proc/net/route for default routes through a gateway.

        Addresses in this file are little-endian hex, e.g. ``0101A8C0`` is
        192.168.1.1.
        """
        route_file = self._proc_root / "net" / "route"
        if not route_file.exists():
            return []

        routes = []
        lines = route_file.read_text().splitlines()
        for line in lines[1:]:
            fields = line.split()
            if len(fields) < 4:
                continue
            interface_name, destination, gateway, flags = fields[:4]
            try:
                flag_bits = int(flags, 16)
                if int(destination, 16) != 0 or not flag_bits & RTF_GATEWAY:
                    continue
                if not flag_bits & RTF_UP:
                    continue
                router = socket.inet_ntoa(struct.pack("<L", int(gateway, 16)))
            except (ValueError, struct.error):
                _log.debug(f"Unparseable route line: {line!r}")
                continue
            routes.append((interface_name, router, False))
        return routes

    def _ipv6_default_routes(self) -> list[tuple[str, str, bool]]:
        """Parse /proc/net/ipv6_route for ::/0 routes with a next hop.

        Columns: destination, prefix length, source, source prefix length,
        next hop, metric, refcount, use, flags, interface.
        """
        route_file = self._proc_root / "net" / "ipv6_route"
        if not route_file.exists():
            return []

        routes = []
        for line in route_file.read_text().splitlines():
            fields = line.split()
            if len(fields) < 10:
                continue
            destination, prefix_len, next_hop = fields[0], fields[1], fields[4]
            interface_name = fields[9]
            try:
                if int(destination, 16) != 0 or int(prefix_len, 16) != 0:
                    continue
                if int(next_hop, 16) == 0:
                    continue
                router = ipaddress.IPv6Address(bytes.fromhex(next_hop)).compressed
            except ValueError:
                _log.debug(f"Unparseable IPv6 route line: {line!r}")
                continue
            routes.append((interface_name, router, True))
        return routes

    def _hardware_descriptor(self, interface_name: str) -> str | None:
        """Describe the hardware behind an interface from sysfs.

        Returns
        -------
            "Wi-Fi", "Bridge", "Bluetooth", "USB", "Ethernet", or None when
            nothing identifies the hardware.
        """
        iface_dir = self._sys_root / "class" / "net" / interface_name
        if not iface_dir.exists():
            return None

        if (iface_dir / "wireless").exists() or (iface_dir / "phy80211").exists():
            return "Wi-Fi"
        if (iface_dir / "bridge").exists():
            return "Bridge"

        device = iface_dir / "device"
        if device.exists():
            device_path = str(device.resolve()).lower()
            if "bluetooth" in device_path:
                return "Bluetooth"
            if "/usb" in device_path:
                return "USB"

        try:
            arp_type = int((iface_dir / "type").read_text().strip())
        except (OSError, ValueError):
            return None
        if arp_type == ARPHRD_ETHER and device.exists():
            return "Ethernet"
        return None

    def _resolv_conf_servers(self) -> list[DNSServerInfo]:
        if not self._resolv_conf.exists():
            return []

        servers = []
        for line in self._resolv_conf.read_text().splitlines():
            fields = line.split()
            if len(fields) >= 2 and fields[0] == "nameserver":
                address = fields[1].split("%", 1)[0]
                servers.append(
                    DNSServerInfo(address=address, is_ipv6=":" in address)
                )
        return servers

    @staticmethod
    def _resolvectl_servers() -> list[DNSServerInfo]:
        """Per-link servers from systemd-resolved, if it is in use."""
        if shutil.which("resolvectl") is None:
            return []

        try:
            result = subprocess.run(
                ["resolvectl", "dns"],
                capture_output=True,
                text=True,
                timeout=2,
                check=True,
            )
        except (subprocess.SubprocessError, OSError) as e:
            _log.debug(f"resolvectl unavailable: {e}")
            return []

        servers = []
        for line in result.stdout.splitlines():
            match = _RESOLVECTL_LINK.match(line.strip())
            if not match:
                continue
            interface_name, addresses = match.groups()
            for address in addresses.split():
                address = address.split("#", 1)[0].split("%", 1)[0]
                servers.append(
                    DNSServerInfo(
                        address=address,
                        interface=interface_name,
                        is_ipv6=":" in address,
                    )
                )
        return servers
