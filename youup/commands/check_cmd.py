"""Check command - probes gateway, internet and DNS and prints a diagnosis."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from youup.config.loader import load_endpoints_configuration
from youup.core.checker import NetworkChecker
from youup.core.diagnosis import classify_status, describe
from youup.core.gateway import is_meaningful
from youup.models.constants import LINK_LOCAL_ROUTER, CheckMode, Diagnosis
from youup.models.network_models import status_latency_ms
from youup.utils.logger import Logger

_TARGET_LABELS = {
    "gateway": "Gateway/Router",
    "internet": "Internet",
    "dns": "DNS Resolution",
}


def run_check(
    mode: CheckMode = CheckMode.FULL,
    verbose: bool = False,
    json_output: bool = False,
    config_file: str | Path | None = None,
) -> int:
    """Run the requested checks and print the results.

    Args:
        mode: Which targets to check.
        verbose: Print interfaces, routers, DNS servers and test targets first.
        json_output: Print a JSON document instead of text.
        config_file: Endpoints configuration file; defaults to the XDG path.

    Returns:
        Process exit code: 0 when every checked target is reachable, else 1.
    """
    log = Logger.get("commands.check")
    config = load_endpoints_configuration(Path(config_file) if config_file else None)
    checker = NetworkChecker(config=config)

    if verbose and not json_output:
        print("🔍 Checking network connectivity...")
        _print_verbose_info(checker, mode)
        print()

    log.debug(f"Running {mode} check")
    results = asyncio.run(_collect(checker, mode))

    if json_output:
        print(json.dumps(_to_json(results), indent=2, ensure_ascii=False))
    else:
        _print_results(results)

    all_reachable = all(
        status.is_reachable
        for key, status in results.items()
        if key in _TARGET_LABELS
    )
    return 0 if all_reachable else 1


async def _collect(checker: NetworkChecker, mode: CheckMode) -> dict[str, Any]:
    """Run the checks for ``mode``; full mode yields the whole snapshot."""
    if mode is CheckMode.FULL:
        status = await checker.check_network_status()
        return {
            "gateway": status.gateway,
            "internet": status.internet,
            "dns": status.dns,
            "diagnosis": classify_status(status),
            "timestamp": status.timestamp,
        }
    elif mode is CheckMode.GATEWAY_ONLY:
        return {"gateway": await checker.check_gateway_reachability()}
    elif mode is CheckMode.INTERNET_ONLY:
        return {"internet": await checker.check_internet_reachability()}
    elif mode is CheckMode.DNS_ONLY:
        return {"dns": await checker.check_dns_reachability()}
    raise ValueError(f"Unhandled check mode: {mode}")


def _to_json(results: dict[str, Any]) -> dict[str, Any]:
    timestamp = results.get("timestamp") or datetime.now(timezone.utc)
    data: dict[str, Any] = {"timestamp": timestamp.isoformat()}

    for key in _TARGET_LABELS:
        if key not in results:
            continue
        status = results[key]
        latency_ms = status_latency_ms(status)
        data[key] = {
            "status": str(status),
            "reachable": status.is_reachable,
            "latency_ms": round(latency_ms, 1) if latency_ms is not None else None,
        }

    diagnosis: Diagnosis | None = results.get("diagnosis")
    if diagnosis is not None:
        data["diagnosis"] = {
            "category": diagnosis.value,
            "summary": describe(diagnosis).headline,
        }
    return data


def _print_results(results: dict[str, Any]) -> None:
    for key, label in _TARGET_LABELS.items():
        if key not in results:
            continue
        status = results[key]
        icon = "✅" if status.is_reachable else "❌"
        print(f"{icon} {label}: {status}")

    diagnosis: Diagnosis | None = results.get("diagnosis")
    if diagnosis is None:
        return

    text = describe(diagnosis)
    print()
    print("📊 Network Diagnosis:")
    print(f"   {text.icon} {text.headline}")
    if text.hint:
        print(f"   💡 {text.hint}")


def _print_verbose_info(checker: NetworkChecker, mode: CheckMode) -> None:
    """Print the network context the checks run against."""
    routers = [r for r in checker.get_active_routers() if is_meaningful(r)]

    if routers:
        print("📡 Active Network Interfaces:")
        for router in routers:
            media = router.media_type
            print(f"  {media.emoji} {router.interface_name} ({media.value})")
        print()

    if mode in (CheckMode.FULL, CheckMode.GATEWAY_ONLY):
        addresses: set[str] = set()
        for router in routers:
            if router.ipv4_router:
                addresses.add(router.ipv4_router)
            if router.ipv6_router and router.ipv6_router != LINK_LOCAL_ROUTER:
                addresses.add(router.ipv6_router)

        if addresses:
            print("🏠 Router Addresses:")
            for address in sorted(addresses):
                family = "IPv6" if ":" in address else "IPv4"
                print(f"  • {address} ({family})")
            print()

    if mode in (CheckMode.FULL, CheckMode.DNS_ONLY):
        servers = checker.get_dns_servers()
        if servers:
            print("🧭 DNS Servers:")
            for server in servers:
                family = "IPv6" if server.is_ipv6 else "IPv4"
                scope = f", {server.interface}" if server.interface else ""
                print(f"  • {server.address} ({family}{scope})")
            print()

    if mode in (CheckMode.FULL, CheckMode.INTERNET_ONLY):
        print("🌐 Internet Test Endpoints:")
        for endpoint in checker.get_configured_endpoints():
            host = urlparse(endpoint).hostname
            print(f"  • {endpoint} ({host})" if host else f"  • {endpoint}")
        print()

    if mode in (CheckMode.FULL, CheckMode.DNS_ONLY):
        print("🔤 DNS Test Domains:")
        for domain in checker.get_configured_dns_test_domains():
            print(f"  • {domain}")
