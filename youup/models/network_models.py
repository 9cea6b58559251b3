"""Pydantic models for reachability results and system network info."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from youup.models.constants import MediaType

if sys.version_info >= (3, 11):  # noqa: UP036
    from typing import assert_never
else:
    from typing_extensions import assert_never


class _Status(BaseModel):
    """Common base for the reachability variants."""

    model_config = ConfigDict(frozen=True)

    @property
    def is_reachable(self) -> bool:
        """True only for the Reachable variant."""
        return False

    def __str__(self) -> str:
        return format_status(self)  # type: ignore[arg-type]


class Reachable(_Status):
    """Target answered within the timeout."""

    kind: Literal["reachable"] = "reachable"
    latency: float | None = Field(
        None, ge=0, description="Round-trip wall-clock latency in seconds"
    )

    @property
    def is_reachable(self) -> bool:
        return True

    @property
    def latency_ms(self) -> float | None:
        """Latency in milliseconds, if measured."""
        if self.latency is None:
            return None
        return self.latency * 1000


class Unreachable(_Status):
    """Target answered negatively or the connection failed outright."""

    kind: Literal["unreachable"] = "unreachable"


class Unknown(_Status):
    """No probe was attempted because the target could not be determined."""

    kind: Literal["unknown"] = "unknown"


class Timeout(_Status):
    """No answer within the probe timeout."""

    kind: Literal["timeout"] = "timeout"


ReachabilityStatus = Annotated[
    Union[Reachable, Unreachable, Unknown, Timeout],
    Field(discriminator="kind"),
]


def format_status(status: Reachable | Unreachable | Unknown | Timeout) -> str:
    """Render a status the way the CLI prints it."""
    if isinstance(status, Reachable):
        if status.latency is not None:
            return f"reachable ({status.latency * 1000:.0f}ms)"
        return "reachable"
    elif isinstance(status, Unreachable):
        return "unreachable"
    elif isinstance(status, Unknown):
        return "unknown"
    elif isinstance(status, Timeout):
        return "timeout"
    else:
        assert_never(status)


def status_latency_ms(
    status: Reachable | Unreachable | Unknown | Timeout,
) -> float | None:
    """Latency in milliseconds for a reachable status, None otherwise."""
    if isinstance(status, Reachable):
        return status.latency_ms
    elif isinstance(status, (Unreachable, Unknown, Timeout)):
        return None
    else:
        assert_never(status)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NetworkStatus(BaseModel):
    """Point-in-time snapshot of gateway, internet and DNS reachability."""

    model_config = ConfigDict(frozen=True)

    gateway: ReachabilityStatus = Field(..., description="Default gateway status")
    internet: ReachabilityStatus = Field(..., description="Internet endpoint status")
    dns: ReachabilityStatus = Field(..., description="DNS resolution status")
    timestamp: datetime = Field(
        default_factory=_utc_now, description="When the snapshot was assembled"
    )


class RouterAddress(BaseModel):
    """Router addresses for one active network interface."""

    model_config = ConfigDict(frozen=True)

    interface_name: str = Field(..., description="Interface name (e.g., 'en0', 'eth0')")
    ipv4_router: str | None = Field(None, description="IPv4 router address")
    ipv6_router: str | None = Field(None, description="IPv6 router address")
    media_type: MediaType = Field(
        MediaType.UNKNOWN, description="Medium behind the interface"
    )


class ServiceRouterEntry(BaseModel):
    """One router entry as reported by the operating system.

    A network service reports IPv4 and IPv6 routers separately, so the
    same interface usually shows up twice.
    """

    model_config = ConfigDict(frozen=True)

    service_id: str = Field(..., description="OS identifier of the network service")
    interface_name: str = Field(..., description="Interface the service is bound to")
    router: str = Field(..., description="Router address")
    is_ipv6: bool = Field(False, description="Whether the router is an IPv6 address")
    service_name: str | None = Field(
        None, description="User-assigned service name (e.g., 'Wi-Fi')"
    )
    hardware: str | None = Field(
        None, description="Hardware descriptor (e.g., 'AirPort', 'Ethernet')"
    )


class DNSServerInfo(BaseModel):
    """A DNS server configured on the system."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Server IP address")
    interface: str | None = Field(
        None, description="Interface the server is scoped to (None for global)"
    )
    is_ipv6: bool = Field(False, description="Whether the address is IPv6")
