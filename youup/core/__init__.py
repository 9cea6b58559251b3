"""Reachability probing and diagnosis engine."""

from youup.core.checker import NetworkChecker
from youup.core.diagnosis import classify, classify_status, describe
from youup.core.gateway import GatewayResolver, classify_media_type, is_meaningful
from youup.core.prober import ReachabilityProber

__all__ = [
    "GatewayResolver",
    "NetworkChecker",
    "ReachabilityProber",
    "classify",
    "classify_media_type",
    "classify_status",
    "describe",
    "is_meaningful",
]
