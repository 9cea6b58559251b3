"""Constants for youup models and commands."""

import sys

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035

DEFAULT_PROBE_TIMEOUT_SECONDS = 3.0

DEFAULT_ENDPOINTS = (
    "https://dns.google",
    "https://1.1.1.1",
    "https://httpbin.org/get",
)

DEFAULT_DNS_TEST_DOMAINS = (
    "google.com",
    "cloudflare.com",
    "example.com",
    "apple.com",
)

# IPv6 link-local router prefix; routers reporting only this are not real
# gateway targets.
LINK_LOCAL_ROUTER = "fe80::"


class MediaType(StrEnum):
    """Physical or virtual medium behind a network interface."""

    ETHERNET = "ethernet"
    WIFI = "wifi"
    CELLULAR = "cellular"
    BLUETOOTH = "bluetooth"
    THUNDERBOLT = "thunderbolt"
    USB = "usb"
    FIREWIRE = "firewire"
    BRIDGE = "bridge"
    TUNNEL = "tunnel"
    LOOPBACK = "loopback"
    UNKNOWN = "unknown"

    @property
    def emoji(self) -> str:
        """Icon used in the verbose interface listing."""
        return _MEDIA_EMOJI[self]


_MEDIA_EMOJI: dict[MediaType, str] = {
    MediaType.ETHERNET: "🔌",
    MediaType.WIFI: "📶",
    MediaType.CELLULAR: "📱",
    MediaType.BLUETOOTH: "🔵",
    MediaType.THUNDERBOLT: "⚡",
    MediaType.USB: "🔗",
    MediaType.FIREWIRE: "🔥",
    MediaType.BRIDGE: "🌉",
    MediaType.TUNNEL: "🚇",
    MediaType.LOOPBACK: "🔄",
    MediaType.UNKNOWN: "❓",
}


class Diagnosis(StrEnum):
    """Diagnosis categories for a gateway/internet/DNS reachability triple."""

    ALL_OPERATIONAL = "all-operational"
    DNS_FAILURE = "dns-failure"
    ISP_WAN_ISSUE = "isp-wan-issue"
    ISP_ISSUE_AFFECTING_BOTH = "isp-issue-affecting-both"
    UNUSUAL_GATEWAY_DOWN_REST_UP = "unusual-gateway-down-rest-up"
    VERY_UNUSUAL = "very-unusual"
    CHECK_CABLES_ROUTER = "check-cables-router"
    NO_CONNECTIVITY = "no-connectivity"

    # Two-signal mode only (DNS not checked)
    UNUSUAL_GATEWAY_DOWN = "unusual-gateway-down"


class CheckMode(StrEnum):
    """Which targets a CLI invocation checks."""

    FULL = "full"
    GATEWAY_ONLY = "gateway-only"
    INTERNET_ONLY = "internet-only"
    DNS_ONLY = "dns-only"
