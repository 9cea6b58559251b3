"""Pydantic models and constants for youup."""

from youup.models.config_models import EndpointsConfiguration
from youup.models.constants import CheckMode, Diagnosis, MediaType
from youup.models.network_models import (
    DNSServerInfo,
    NetworkStatus,
    Reachable,
    ReachabilityStatus,
    RouterAddress,
    ServiceRouterEntry,
    Timeout,
    Unknown,
    Unreachable,
)

__all__ = [
    "CheckMode",
    "DNSServerInfo",
    "Diagnosis",
    "EndpointsConfiguration",
    "MediaType",
    "NetworkStatus",
    "Reachable",
    "ReachabilityStatus",
    "RouterAddress",
    "ServiceRouterEntry",
    "Timeout",
    "Unknown",
    "Unreachable",
]
