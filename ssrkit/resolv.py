"""Asynchronous resolution of host names to a preferred socket address."""

from __future__ import annotations

import asyncio
import logging
import socket
from enum import IntEnum
from typing import Iterable, Sequence

import dns.asyncresolver
import dns.exception

from .netutils import SockAddr

log = logging.getLogger(__name__)


class ResolveMode(IntEnum):
    """Which address families are queried and which one is preferred."""

    IPV4_ONLY = 0
    IPV6_ONLY = 1
    IPV4_FIRST = 2
    IPV6_FIRST = 3


def choose_address(responses: Sequence[SockAddr],
                   mode: ResolveMode) -> SockAddr | None:
    """Pick the address to use from *responses* according to *mode*.

    With a family preference the first address of that family wins;
    otherwise, and when there is none, the first address is used.
    """
    prefer = {
        ResolveMode.IPV4_FIRST: socket.AF_INET,
        ResolveMode.IPV6_FIRST: socket.AF_INET6,
    }.get(mode)
    if prefer is not None:
        chosen = next((addr for addr in responses if addr.family == prefer), None)
        if chosen is not None:
            return chosen
    return responses[0] if responses else None


class Resolver:
    """Resolve names through the system or the given name servers."""

    def __init__(self, nameservers: Iterable[str] | None = None,
                 ipv6first: bool = False) -> None:
        self.mode = ResolveMode.IPV6_FIRST if ipv6first else ResolveMode.IPV4_FIRST
        servers = list(nameservers) if nameservers is not None else None
        if servers is None:
            self.resolver = dns.asyncresolver.Resolver()
        else:
            self.resolver = dns.asyncresolver.Resolver(configure=False)
            self.resolver.nameservers = servers
        self.source: str | None = None
        if servers is not None and len(servers) == 1:
            server = servers[0]
            if server.startswith("127.0.0.1") or server.startswith("::1"):
                log.info("bind UDP resolver to %s", server)
                self.source = server

    async def _query(self, hostname: str, rdtype: str) -> list[str]:
        try:
            answer = await self.resolver.resolve(
                hostname, rdtype, source=self.source, raise_on_no_answer=False
            )
        except dns.exception.DNSException as exc:
            log.info("%s resolv: %s", "IPv4" if rdtype == "A" else "IPv6", exc)
            return []
        return [record.address for record in answer]

    async def resolve(self, hostname: str, port: int = 0) -> SockAddr | None:
        """Resolve *hostname* and return the preferred address with *port*.

        Returns None when no address was found.
        """
        rdtypes = []
        if self.mode is not ResolveMode.IPV6_ONLY:
            rdtypes.append("A")
        if self.mode is not ResolveMode.IPV4_ONLY:
            rdtypes.append("AAAA")
        results = await asyncio.gather(
            *(self._query(hostname, rdtype) for rdtype in rdtypes)
        )
        responses = [SockAddr.from_host(address, port)
                     for addresses in results for address in addresses]
        return choose_address(responses, self.mode)