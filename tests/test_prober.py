"""Tests for the HTTP HEAD reachability prober."""

import asyncio
import socket
import sys
import time

import httpx
import pytest

from youup.core.prober import (
    ReachabilityProber,
    dns_test_url,
    gateway_url,
    is_resolution_failure,
)
from youup.models.network_models import Reachable, Timeout, Unreachable


def _prober(handler, timeout: float = 3.0) -> ReachabilityProber:
    return ReachabilityProber(timeout=timeout, transport=httpx.MockTransport(handler))


def _status(code: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(code)

    return handler


def _raise(error_cls, message: str):
    def handler(request: httpx.Request) -> httpx.Response:
        raise error_cls(message, request=request)

    return handler


class TestTargetUrls:
    """URL construction for gateway and DNS targets."""

    def test_gateway_ipv4(self):
        assert gateway_url("192.168.1.1") == "http://192.168.1.1"

    def test_gateway_ipv6_is_bracketed(self):
        assert gateway_url("fd00::1") == "http://[fd00::1]"
        assert gateway_url("[fd00::1]") == "http://[fd00::1]"

    def test_dns_domain_uses_https(self):
        assert dns_test_url("example.com") == "https://example.com"
        assert dns_test_url("http://example.com") == "http://example.com"


class TestInternetProbe:
    """Internet probes only accept 2xx responses."""

    @pytest.mark.parametrize("code", [200, 204, 299])
    def test_2xx_is_reachable(self, code):
        result = asyncio.run(_prober(_status(code)).probe_internet("https://dns.google"))

        assert isinstance(result, Reachable)
        assert result.latency is not None
        assert result.latency >= 0

    @pytest.mark.parametrize("code", [404, 500, 503])
    def test_other_status_is_unreachable(self, code):
        result = asyncio.run(_prober(_status(code)).probe_internet("https://dns.google"))
        assert result == Unreachable()

    def test_redirect_to_success_is_reachable(self):
        """The 2xx check applies to the response at the end of the redirects."""
        hosts = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            if request.url.host == "1.1.1.1":
                return httpx.Response(
                    301, headers={"Location": "https://one.one.one.one/"}
                )
            return httpx.Response(200)

        result = asyncio.run(_prober(handler).probe_internet("https://1.1.1.1"))

        assert result.is_reachable
        assert hosts == ["1.1.1.1", "one.one.one.one"]

    def test_redirect_to_error_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "/new"})
            return httpx.Response(404)

        prober = _prober(handler)
        assert asyncio.run(prober.probe_internet("https://a.example/old")) == Unreachable()

    def test_out_of_range_port_is_unreachable_without_request(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        result = asyncio.run(_prober(handler).probe_internet("https://1.1.1.1:99999"))

        assert result == Unreachable()
        assert calls == []

    def test_unexpected_transport_error_is_unreachable(self):
        """Errors outside httpx's hierarchy are folded, not raised."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise OverflowError("connect(): port must be 0-65535")

        result = asyncio.run(_prober(handler).probe_internet("https://1.1.1.1"))
        assert result == Unreachable()

    def test_latency_excludes_client_setup(self, monkeypatch):
        """Only the request itself is timed."""
        original_enter = httpx.AsyncClient.__aenter__

        async def slow_enter(self):
            await asyncio.sleep(0.3)
            return await original_enter(self)

        monkeypatch.setattr(httpx.AsyncClient, "__aenter__", slow_enter)

        result = asyncio.run(_prober(_status(200)).probe_internet("https://dns.google"))

        assert isinstance(result, Reachable)
        assert result.latency < 0.2

    def test_uses_head_request(self):
        """Probes never download a body."""
        methods = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200)

        asyncio.run(_prober(handler).probe_internet("https://1.1.1.1"))
        assert methods == ["HEAD"]

    def test_connection_error_is_unreachable(self):
        prober = _prober(_raise(httpx.ConnectError, "[Errno 111] Connection refused"))
        assert asyncio.run(prober.probe_internet("https://1.1.1.1")) == Unreachable()

    def test_transport_timeout_is_timeout(self):
        prober = _prober(_raise(httpx.ConnectTimeout, "timed out"))
        assert asyncio.run(prober.probe_internet("https://1.1.1.1")) == Timeout()

    def test_slow_response_hits_hard_timeout(self):
        """The overall probe deadline applies even if the transport hangs."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200)

        prober = _prober(handler, timeout=0.05)
        start = time.perf_counter()
        result = asyncio.run(prober.probe_internet("https://httpbin.org/get"))

        assert result == Timeout()
        assert time.perf_counter() - start < 2

    @pytest.mark.parametrize("url", ["not a url", "http://[::1", "ftp://example.com", ""])
    def test_unparseable_url_is_unreachable_without_request(self, url):
        """Bad URLs fail immediately and never reach the transport."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        start = time.perf_counter()
        result = asyncio.run(_prober(handler).probe_internet(url))

        assert result == Unreachable()
        assert calls == []
        assert time.perf_counter() - start < 1


class TestGatewayProbe:
    """Gateway probes accept any HTTP response."""

    @pytest.mark.parametrize("code", [200, 401, 404, 500])
    def test_any_response_is_reachable(self, code):
        result = asyncio.run(_prober(_status(code)).probe_gateway("192.168.1.1"))
        assert result.is_reachable

    def test_requests_plain_http_on_host(self):
        urls = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(200)

        asyncio.run(_prober(handler).probe_gateway("10.0.0.1"))
        assert urls == ["http://10.0.0.1"]

    def test_refused_is_unreachable(self):
        prober = _prober(_raise(httpx.ConnectError, "[Errno 111] Connection refused"))
        assert asyncio.run(prober.probe_gateway("192.168.1.1")) == Unreachable()


class TestDnsProbe:
    """DNS probes only fail on timeouts and name-resolution failures."""

    def test_resolution_failure_is_unreachable(self):
        prober = _prober(_raise(httpx.ConnectError, "[Errno -2] Name or service not known"))
        assert asyncio.run(prober.probe_dns("nope.invalid")) == Unreachable()

    def test_macos_resolution_failure_is_unreachable(self):
        prober = _prober(
            _raise(
                httpx.ConnectError,
                "[Errno 8] nodename nor servname provided, or not known",
            )
        )
        assert asyncio.run(prober.probe_dns("nope.invalid")) == Unreachable()

    def test_gaierror_cause_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            try:
                raise socket.gaierror(-3, "lookup failed")
            except socket.gaierror as e:
                raise httpx.ConnectError("connect failed", request=request) from e

        assert asyncio.run(_prober(handler).probe_dns("example.com")) == Unreachable()

    @pytest.mark.skipif(sys.version_info < (3, 11), reason="ExceptionGroup is 3.11+")
    def test_resolution_failure_inside_exception_group_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise ExceptionGroup(  # noqa: F821
                "unhandled errors in a TaskGroup",
                [socket.gaierror(-2, "Name or service not known")],
            )

        assert asyncio.run(_prober(handler).probe_dns("nope.invalid")) == Unreachable()

    def test_connection_refused_still_proves_resolution(self):
        prober = _prober(_raise(httpx.ConnectError, "[Errno 111] Connection refused"))
        result = asyncio.run(prober.probe_dns("example.com"))

        assert isinstance(result, Reachable)

    def test_tls_failure_still_proves_resolution(self):
        prober = _prober(
            _raise(httpx.ConnectError, "[SSL: CERTIFICATE_VERIFY_FAILED] certificate")
        )
        assert asyncio.run(prober.probe_dns("example.com")).is_reachable

    def test_error_status_is_reachable(self):
        assert asyncio.run(_prober(_status(403)).probe_dns("example.com")).is_reachable

    def test_timeout_is_timeout(self):
        prober = _prober(_raise(httpx.ReadTimeout, "read timed out"))
        assert asyncio.run(prober.probe_dns("example.com")) == Timeout()


def test_is_resolution_failure_ignores_unrelated_errors():
    """Only lookup failures count as resolution failures."""
    assert is_resolution_failure(socket.gaierror(-2, "Name or service not known"))
    assert is_resolution_failure(OSError("Temporary failure in name resolution"))
    assert not is_resolution_failure(ConnectionRefusedError("Connection refused"))
