"""Map gateway/internet/DNS reachability to a diagnosis category."""

from __future__ import annotations

from typing import NamedTuple

from youup.models.constants import Diagnosis
from youup.models.network_models import NetworkStatus

# (gateway, internet, dns) -> diagnosis; total over all eight inputs.
_THREE_SIGNAL: dict[tuple[bool, bool, bool], Diagnosis] = {
    (True, True, True): Diagnosis.ALL_OPERATIONAL,
    (True, True, False): Diagnosis.DNS_FAILURE,
    (True, False, True): Diagnosis.ISP_WAN_ISSUE,
    (True, False, False): Diagnosis.ISP_ISSUE_AFFECTING_BOTH,
    (False, True, True): Diagnosis.UNUSUAL_GATEWAY_DOWN_REST_UP,
    (False, True, False): Diagnosis.VERY_UNUSUAL,
    (False, False, True): Diagnosis.CHECK_CABLES_ROUTER,
    (False, False, False): Diagnosis.NO_CONNECTIVITY,
}

# (gateway, internet) -> diagnosis, used when DNS was not checked.
_TWO_SIGNAL: dict[tuple[bool, bool], Diagnosis] = {
    (True, True): Diagnosis.ALL_OPERATIONAL,
    (True, False): Diagnosis.ISP_WAN_ISSUE,
    (False, True): Diagnosis.UNUSUAL_GATEWAY_DOWN,
    (False, False): Diagnosis.NO_CONNECTIVITY,
}


class DiagnosisText(NamedTuple):
    """Icon, headline and optional hint shown for a diagnosis."""

    icon: str
    headline: str
    hint: str | None


_TEXT: dict[Diagnosis, DiagnosisText] = {
    Diagnosis.ALL_OPERATIONAL: DiagnosisText(
        "🎉", "All systems operational - full internet connectivity", None
    ),
    Diagnosis.DNS_FAILURE: DiagnosisText(
        "⚠️",
        "Internet reachable, but DNS resolution is failing",
        "Check your DNS server settings or try a public resolver",
    ),
    Diagnosis.ISP_WAN_ISSUE: DiagnosisText(
        "⚠️",
        "Local network OK, but internet is unreachable",
        "This suggests an ISP or WAN connectivity issue",
    ),
    Diagnosis.ISP_ISSUE_AFFECTING_BOTH: DiagnosisText(
        "⚠️",
        "Local network OK, but both internet and DNS are failing",
        "This suggests an ISP issue affecting internet and DNS",
    ),
    Diagnosis.UNUSUAL_GATEWAY_DOWN_REST_UP: DiagnosisText(
        "🤔",
        "Internet and DNS work but the gateway is not responding",
        "This is unusual - your router may be blocking the probe",
    ),
    Diagnosis.VERY_UNUSUAL: DiagnosisText(
        "🤔",
        "Internet reachable while gateway and DNS both fail",
        "This is very unusual - check router and DNS configuration",
    ),
    Diagnosis.CHECK_CABLES_ROUTER: DiagnosisText(
        "🚫",
        "Gateway and internet unreachable, DNS still resolves",
        "Check your network cables, WiFi connection, and router",
    ),
    Diagnosis.NO_CONNECTIVITY: DiagnosisText(
        "🚫",
        "No network connectivity detected",
        "Check your network cables, WiFi connection, and router",
    ),
    Diagnosis.UNUSUAL_GATEWAY_DOWN: DiagnosisText(
        "🤔",
        "Internet reachable but gateway is not responding",
        "This is unusual - check your router configuration",
    ),
}


def classify(gateway: bool, internet: bool, dns: bool | None = None) -> Diagnosis:
    """Classify a reachability combination.

    Args:
        gateway: Whether the default gateway answered.
        internet: Whether an internet endpoint answered.
        dns: Whether a test domain resolved; None when DNS was not checked,
            which selects the four-category two-signal table.

    Returns:
        The diagnosis category.
    """
    if dns is None:
        return _TWO_SIGNAL[(bool(gateway), bool(internet))]
    return _THREE_SIGNAL[(bool(gateway), bool(internet), bool(dns))]


def classify_status(status: NetworkStatus) -> Diagnosis:
    """Classify a full gateway/internet/DNS snapshot."""
    return classify(
        status.gateway.is_reachable,
        status.internet.is_reachable,
        status.dns.is_reachable,
    )


def describe(diagnosis: Diagnosis) -> DiagnosisText:
    """Human-readable text for a diagnosis."""
    return _TEXT[diagnosis]
