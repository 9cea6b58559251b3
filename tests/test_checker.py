"""Tests for the network status aggregator."""

import asyncio
from datetime import datetime, timezone

import httpx

from youup.core.checker import NetworkChecker
from youup.core.gateway import GatewayResolver
from youup.core.prober import ReachabilityProber
from youup.models.config_models import EndpointsConfiguration
from youup.models.constants import DEFAULT_DNS_TEST_DOMAINS, DEFAULT_ENDPOINTS
from youup.models.network_models import (
    DNSServerInfo,
    NetworkStatus,
    Reachable,
    RouterAddress,
    Timeout,
    Unknown,
    Unreachable,
)


class FakeResolver:
    """Resolver stand-in with a fixed default gateway."""

    def __init__(self, gateway: str | None = "192.168.1.1") -> None:
        self.gateway = gateway

    def default_gateway(self) -> str | None:
        return self.gateway

    def list_active_routers(self) -> list[RouterAddress]:
        return [RouterAddress(interface_name="en0", ipv4_router=self.gateway)]

    def list_dns_servers(self) -> list[DNSServerInfo]:
        return [DNSServerInfo(address="192.168.1.1")]


class FakeProber:
    """Prober stand-in returning scripted results and recording calls."""

    def __init__(self, results: dict[str, object] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, str]] = []

    async def probe_gateway(self, host):
        self.calls.append(("gateway", host))
        return self.results.get(host, Reachable(latency=0.001))

    async def probe_internet(self, url):
        self.calls.append(("internet", url))
        return self.results.get(url, Unreachable())

    async def probe_dns(self, domain):
        self.calls.append(("dns", domain))
        return self.results.get(domain, Unreachable())


def _checker(prober, gateway="192.168.1.1", endpoints=None, domains=None):
    config = EndpointsConfiguration(
        endpoints=endpoints or ["https://a.example", "https://b.example"],
        dns_test_domains=domains or ["x.example", "y.example"],
    )
    return NetworkChecker(config=config, resolver=FakeResolver(gateway), prober=prober)


class TestInternetPipeline:
    """Ordered, short-circuiting internet checks."""

    def test_timeout_then_success_reports_second_latency(self):
        prober = FakeProber(
            {
                "https://a.example": Timeout(),
                "https://b.example": Reachable(latency=0.04),
            }
        )
        result = asyncio.run(_checker(prober).check_internet_reachability())

        assert result == Reachable(latency=0.04)

    def test_stops_at_first_success(self):
        prober = FakeProber({"https://a.example": Reachable(latency=0.01)})
        asyncio.run(_checker(prober).check_internet_reachability())

        assert prober.calls == [("internet", "https://a.example")]

    def test_exhausted_list_is_unreachable_even_after_timeouts(self):
        prober = FakeProber(
            {"https://a.example": Unreachable(), "https://b.example": Timeout()}
        )
        result = asyncio.run(_checker(prober).check_internet_reachability())

        assert result == Unreachable()
        assert [call[1] for call in prober.calls] == [
            "https://a.example",
            "https://b.example",
        ]


class TestDnsPipeline:
    """Ordered, short-circuiting DNS checks."""

    def test_refused_after_unresolved_is_reachable(self):
        """A refused connection still proves the second name resolved."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "x.example":
                raise httpx.ConnectError(
                    "[Errno -2] Name or service not known", request=request
                )
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        prober = ReachabilityProber(transport=httpx.MockTransport(handler))
        result = asyncio.run(_checker(prober).check_dns_reachability())

        assert isinstance(result, Reachable)

    def test_all_unresolved_is_unreachable(self):
        prober = FakeProber({"x.example": Timeout(), "y.example": Unreachable()})
        assert asyncio.run(_checker(prober).check_dns_reachability()) == Unreachable()


class TestGatewayPipeline:
    """Gateway resolution followed by a single probe."""

    def test_no_gateway_is_unknown_without_probing(self):
        prober = FakeProber()
        result = asyncio.run(_checker(prober, gateway=None).check_gateway_reachability())

        assert result == Unknown()
        assert prober.calls == []

    def test_probes_resolved_gateway(self):
        prober = FakeProber({"10.0.0.1": Timeout()})
        result = asyncio.run(_checker(prober, gateway="10.0.0.1").check_gateway_reachability())

        assert result == Timeout()
        assert prober.calls == [("gateway", "10.0.0.1")]

    def test_resolver_without_provider_is_unknown(self):
        checker = NetworkChecker(resolver=GatewayResolver(None), prober=FakeProber())
        assert asyncio.run(checker.check_gateway_reachability()) == Unknown()


class TestNetworkStatus:
    """Aggregated snapshot."""

    def test_snapshot_combines_all_three(self):
        prober = FakeProber(
            {
                "192.168.1.1": Reachable(latency=0.002),
                "https://a.example": Reachable(latency=0.03),
                "y.example": Reachable(latency=0.05),
            }
        )
        before = datetime.now(timezone.utc)
        status = asyncio.run(_checker(prober).check_network_status())

        assert isinstance(status, NetworkStatus)
        assert status.gateway == Reachable(latency=0.002)
        assert status.internet == Reachable(latency=0.03)
        assert status.dns == Reachable(latency=0.05)
        assert status.timestamp >= before

    def test_pipelines_run_concurrently(self):
        """A stalled gateway probe does not hold up the internet pipeline."""
        internet_started = asyncio.Event()

        class BlockingProber(FakeProber):
            async def probe_gateway(self, host):
                # Only completes if the internet pipeline runs meanwhile
                await asyncio.wait_for(internet_started.wait(), timeout=2)
                return Reachable(latency=0.001)

            async def probe_internet(self, url):
                internet_started.set()
                return Reachable(latency=0.01)

        status = asyncio.run(_checker(BlockingProber()).check_network_status())

        assert status.gateway.is_reachable
        assert status.internet.is_reachable

    def test_timestamp_taken_after_probes(self):
        """The snapshot is stamped once every pipeline has finished."""
        finished: list[datetime] = []

        class SlowProber(FakeProber):
            async def probe_dns(self, domain):
                await asyncio.sleep(0.05)
                finished.append(datetime.now(timezone.utc))
                return Reachable(latency=0.05)

        status = asyncio.run(_checker(SlowProber()).check_network_status())

        assert status.timestamp >= finished[0]


def test_configuration_accessors_default_and_copy():
    """Accessors expose the injected configuration without sharing lists."""
    checker = NetworkChecker(resolver=FakeResolver(), prober=FakeProber())

    assert checker.get_configured_endpoints() == list(DEFAULT_ENDPOINTS)
    assert checker.get_configured_dns_test_domains() == list(DEFAULT_DNS_TEST_DOMAINS)

    checker.get_configured_endpoints().append("https://mutated.example")
    assert "https://mutated.example" not in checker.get_configured_endpoints()


def test_router_and_dns_accessors_delegate_to_resolver():
    """Router and DNS listings come from the resolver."""
    checker = _checker(FakeProber())

    assert checker.get_active_routers()[0].ipv4_router == "192.168.1.1"
    assert checker.get_dns_servers() == [DNSServerInfo(address="192.168.1.1")]


def test_malformed_endpoints_do_not_break_the_snapshot():
    """Bad ports and odd transport errors end as statuses, not exceptions."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise OverflowError("connect(): port must be 0-65535")

    config = EndpointsConfiguration(
        endpoints=["https://1.1.1.1:99999", "https://b.example"],
        dns_test_domains=["localhost:99999"],
    )
    checker = NetworkChecker(
        config=config,
        resolver=GatewayResolver(None),
        prober=ReachabilityProber(transport=httpx.MockTransport(handler)),
    )

    status = asyncio.run(checker.check_network_status())

    assert status.gateway == Unknown()
    assert status.internet == Unreachable()
    assert status.dns == Unreachable()
