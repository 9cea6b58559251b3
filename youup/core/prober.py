"""Single bounded-time reachability probes over HTTP HEAD.

Three probe flavours share one request path and differ only in how the
outcome is classified:

- gateway: any HTTP response means the router is up
- internet: only a 2xx response counts
- dns: anything short of a timeout or a name-resolution failure counts,
  because reaching the connect stage proves the name resolved
"""

from __future__ import annotations

import asyncio
import socket
import time
from enum import Enum

import httpx

from youup.models.constants import DEFAULT_PROBE_TIMEOUT_SECONDS
from youup.models.network_models import Reachable, Timeout, Unreachable
from youup.utils.logger import Logger

_log = Logger.get("core.prober", require_configured=False)

_RESOLUTION_FAILURE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "name does not resolve",
    "no address associated with hostname",
    "getaddrinfo failed",
    "could not be resolved",
    "hostname could not be found",
)

ProbeResult = Reachable | Unreachable | Timeout


class ProbeKind(Enum):
    """How a probe outcome is classified."""

    GATEWAY = "gateway"
    INTERNET = "internet"
    DNS = "dns"


def gateway_url(host: str) -> str:
    """URL probed for a gateway address; IPv6 literals get brackets."""
    if ":" in host and not host.startswith("["):
        return f"http://[{host}]"
    return f"http://{host}"


def dns_test_url(domain: str) -> str:
    """URL probed for a DNS test domain."""
    if "://" in domain:
        return domain
    return f"https://{domain}"


def is_resolution_failure(error: BaseException) -> bool:
    """Whether an error (or anything in its cause chain) is a failed lookup.

    Exception groups raised by the async transport are searched member by
    member.
    """
    seen: set[int] = set()
    pending: list[BaseException] = [error]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        message = str(current).lower()
        if any(marker in message for marker in _RESOLUTION_FAILURE_MARKERS):
            return True
        pending.extend(getattr(current, "exceptions", ()))
        cause = current.__cause__ or current.__context__
        if cause is not None:
            pending.append(cause)
    return False


def _mentions_timeout(error: BaseException) -> bool:
    message = str(error).lower()
    return "timeout" in message or "timed out" in message


class ReachabilityProber:
    """Issue one HTTP HEAD request per probe and classify the outcome.

    Probes never raise for network failures and never retry. Each probe
    opens its own client so the connection is released as soon as the
    probe finishes or is cancelled.

    Args:
        timeout: Hard upper bound for a probe, in seconds.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @property
    def timeout(self) -> float:
        """Probe timeout in seconds."""
        return self._timeout

    async def probe_gateway(self, host: str) -> ProbeResult:
        """Probe a router address; any HTTP answer means reachable."""
        return await self.probe(gateway_url(host), ProbeKind.GATEWAY)

    async def probe_internet(self, url: str) -> ProbeResult:
        """Probe an internet endpoint; only 2xx means reachable."""
        return await self.probe(url, ProbeKind.INTERNET)

    async def probe_dns(self, domain: str) -> ProbeResult:
        """Probe a domain; reachable unless its name fails to resolve."""
        return await self.probe(dns_test_url(domain), ProbeKind.DNS)

    async def probe(self, url: str, kind: ProbeKind) -> ProbeResult:
        """Send one HEAD request to ``url`` and classify it as ``kind``.

        Args:
            url: Absolute http(s) URL.
            kind: Classification policy.

        Returns:
            Reachable with latency, Unreachable, or Timeout.
        """
        try:
            request_url = httpx.URL(url)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            _log.debug(f"{kind.value} probe: invalid URL {url!r}: {e}")
            return Unreachable()
        if request_url.scheme not in ("http", "https") or not request_url.host:
            _log.debug(f"{kind.value} probe: not an absolute http(s) URL: {url!r}")
            return Unreachable()
        if request_url.port is not None and not 0 <= request_url.port <= 65535:
            _log.debug(f"{kind.value} probe: port out of range: {url!r}")
            return Unreachable()

        try:
            return await asyncio.wait_for(
                self._head(request_url, kind), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            _log.debug(f"{kind.value} probe {url}: timeout after {self._timeout}s")
            return Timeout()

    async def _head(self, url: httpx.URL, kind: ProbeKind) -> ProbeResult:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            # Client setup (TLS context, pools) stays outside the measurement
            start = time.perf_counter()
            try:
                response = await client.head(url)
            except httpx.TimeoutException:
                _log.debug(f"{kind.value} probe {url}: transport timeout")
                return Timeout()
            except Exception as e:
                # Connect errors can surface wrapped in exception groups
                latency = time.perf_counter() - start
                result = self._classify_error(kind, e, latency)
                _log.debug(
                    f"{kind.value} probe {url}: {type(e).__name__}: {e} -> {result}"
                )
                return result
            latency = time.perf_counter() - start

        # Redirects are followed; the final response is classified
        result = self._classify_response(kind, response.status_code, latency)
        _log.debug(f"{kind.value} probe {url}: HTTP {response.status_code} -> {result}")
        return result

    @staticmethod
    def _classify_response(
        kind: ProbeKind, status_code: int, latency: float
    ) -> ProbeResult:
        if kind is ProbeKind.INTERNET:
            if 200 <= status_code <= 299:
                return Reachable(latency=latency)
            return Unreachable()
        elif kind is ProbeKind.GATEWAY or kind is ProbeKind.DNS:
            return Reachable(latency=latency)
        raise ValueError(f"Unhandled probe kind: {kind}")

    @staticmethod
    def _classify_error(
        kind: ProbeKind, error: Exception, latency: float
    ) -> ProbeResult:
        if _mentions_timeout(error):
            return Timeout()
        if kind is ProbeKind.DNS:
            if is_resolution_failure(error):
                return Unreachable()
            return Reachable(latency=latency)
        elif kind is ProbeKind.GATEWAY or kind is ProbeKind.INTERNET:
            return Unreachable()
        raise ValueError(f"Unhandled probe kind: {kind}")
