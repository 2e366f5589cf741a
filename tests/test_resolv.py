import socket
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import dns.resolver
import pytest

from ssrkit.netutils import SockAddr
from ssrkit.resolv import ResolveMode, Resolver, choose_address

V4 = SockAddr.from_host("192.0.2.1", 443)
V4B = SockAddr.from_host("192.0.2.2", 443)
V6 = SockAddr.from_host("2001:db8::1", 443)


def _fake(records):
    async def resolve(qname, rdtype, **kwargs):
        if rdtype not in records:
            raise dns.resolver.NXDOMAIN()
        return [SimpleNamespace(address=a) for a in records[rdtype]]
    return AsyncMock(side_effect=resolve)


def test_mode_values():
    assert [ResolveMode(n) for n in range(4)] == [
        ResolveMode.IPV4_ONLY,
        ResolveMode.IPV6_ONLY,
        ResolveMode.IPV4_FIRST,
        ResolveMode.IPV6_FIRST,
    ]
    assert Resolver(["192.0.2.53"]).mode.value == 2
    assert Resolver(["192.0.2.53"], ipv6first=True).mode.value == 3


def test_choose_ipv4_first():
    assert choose_address([V6, V4, V4B], ResolveMode.IPV4_FIRST) == V4


def test_choose_ipv6_first():
    assert choose_address([V4, V6], ResolveMode.IPV6_FIRST) == V6


def test_choose_falls_back_to_first():
    assert choose_address([V4, V4B], ResolveMode.IPV6_FIRST) == V4
    assert choose_address([V6, V4], ResolveMode.IPV4_ONLY) == V6


def test_choose_nothing():
    assert choose_address([], ResolveMode.IPV4_FIRST) is None


def test_mode_from_ipv6first():
    assert Resolver(["192.0.2.53"], ipv6first=True).mode is ResolveMode.IPV6_FIRST
    assert Resolver(["192.0.2.53"]).mode is ResolveMode.IPV4_FIRST


def test_local_nameserver_sets_source():
    assert Resolver(["127.0.0.1"]).source == "127.0.0.1"
    assert Resolver(["192.0.2.53"]).source is None
    assert Resolver(["127.0.0.1", "192.0.2.53"]).source is None


@pytest.mark.asyncio
async def test_resolve_prefers_ipv4():
    resolver = Resolver(["192.0.2.53"])
    records = {"A": ["192.0.2.1"], "AAAA": ["2001:db8::1"]}
    with patch.object(resolver.resolver, "resolve", _fake(records)):
        result = await resolver.resolve("example.com", 443)
    assert result == V4
    assert result.family == socket.AF_INET


@pytest.mark.asyncio
async def test_resolve_prefers_ipv6():
    resolver = Resolver(["192.0.2.53"], ipv6first=True)
    records = {"A": ["192.0.2.1"], "AAAA": ["2001:db8::1"]}
    with patch.object(resolver.resolver, "resolve", _fake(records)):
        assert await resolver.resolve("example.com", 443) == V6


@pytest.mark.asyncio
async def test_resolve_uses_other_family_when_preferred_fails():
    resolver = Resolver(["192.0.2.53"])
    with patch.object(resolver.resolver, "resolve", _fake({"AAAA": ["2001:db8::1"]})):
        assert await resolver.resolve("example.com", 443) == V6


@pytest.mark.asyncio
async def test_resolve_nothing_found():
    resolver = Resolver(["192.0.2.53"])
    with patch.object(resolver.resolver, "resolve", _fake({})):
        assert await resolver.resolve("example.com", 443) is None


@pytest.mark.asyncio
async def test_ipv4_only_skips_aaaa_and_passes_source():
    resolver = Resolver(["127.0.0.1"])
    resolver.mode = ResolveMode.IPV4_ONLY
    fake = _fake({"A": ["192.0.2.2"], "AAAA": ["2001:db8::1"]})
    with patch.object(resolver.resolver, "resolve", fake):
        assert await resolver.resolve("example.com", 443) == V4B
    assert [c.args[1] for c in fake.call_args_list] == ["A"]
    assert fake.call_args.kwargs["source"] == "127.0.0.1"