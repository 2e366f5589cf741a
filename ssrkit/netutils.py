"""Socket address helpers: parsing, resolving, comparing and validating."""

from __future__ import annotations

import ipaddress
import logging
import socket
import time
from dataclasses import dataclass

log = logging.getLogger(__name__)

INET_SIZE = 4
INET6_SIZE = 16

_SO_REUSEPORT = getattr(socket, "SO_REUSEPORT", 15)

_VALID_LABEL_CHARS = frozenset(
    "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
)


@dataclass(frozen=True, order=True)
class SockAddr:
    """An IPv4 or IPv6 socket address, ordered by family, port, then address."""

    family: int
    port: int
    address: bytes

    @classmethod
    def from_host(cls, host: str, port: int | str | None = 0) -> "SockAddr":
        """Build an address from an IP literal; raise ValueError otherwise."""
        ip = ipaddress.ip_address(host.split("%", 1)[0])
        family = socket.AF_INET if ip.version == 4 else socket.AF_INET6
        return cls(family=family, port=int(port) if port is not None else 0,
                   address=ip.packed)

    def host(self) -> str:
        """Return the address in its textual form."""
        return str(ipaddress.ip_address(self.address))

    def as_tuple(self) -> tuple:
        """Return the address in the form the socket module takes."""
        if self.family == socket.AF_INET6:
            return (self.host(), self.port, 0, 0)
        return (self.host(), self.port)


def get_sockaddr_len(family: int) -> int:
    """Return the size of the C socket address structure for *family*."""
    if family == socket.AF_INET:
        return 16
    if family == socket.AF_INET6:
        return 28
    return 0


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def get_sockaddr(host: str, port: int | str | None = None,
                 block: bool = False, ipv6first: bool = False) -> SockAddr:
    """Resolve *host* and *port* to a socket address.

    IP literals are used directly. Names are resolved; with *block* a
    failed lookup is retried up to seven times with growing delays.
    Raises OSError when the name cannot be resolved.
    """
    if _is_ip_literal(host):
        return SockAddr.from_host(host, port)

    infos: list = []
    error: OSError | None = None
    for attempt in range(1, 8):
        try:
            infos = socket.getaddrinfo(host, port, socket.AF_UNSPEC,
                                       socket.SOCK_STREAM)
            error = None
        except socket.gaierror as exc:
            error = exc
        if not block or error is None:
            break
        delay = 2 ** attempt
        time.sleep(delay)
        log.error("failed to resolve server name, wait %d seconds", delay)

    if error is not None:
        log.error("getaddrinfo: %s", error)
        raise error

    prefer = socket.AF_INET6 if ipv6first else socket.AF_INET
    chosen = next((info for info in infos if info[0] == prefer), None)
    if chosen is None and infos:
        chosen = infos[0]
    if chosen is None or chosen[0] not in (socket.AF_INET, socket.AF_INET6):
        log.error("failed to resolve remote addr")
        raise OSError(f"failed to resolve remote addr: {host}")
    sockaddr = chosen[4]
    return SockAddr.from_host(sockaddr[0], sockaddr[1])


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def sockaddr_cmp(addr1: SockAddr, addr2: SockAddr) -> int:
    """Compare family, port and address; return -1, 0 or 1."""
    return _sign(addr1, addr2)


def sockaddr_cmp_addr(addr1: SockAddr, addr2: SockAddr) -> int:
    """Compare family and address, ignoring the port; return -1, 0 or 1."""
    return _sign((addr1.family, addr1.address), (addr2.family, addr2.address))


def validate_hostname(hostname: str | None) -> bool:
    """Check that *hostname* is a syntactically valid DNS name."""
    if hostname is None:
        return False
    if not 1 <= len(hostname) <= 255:
        return False
    if hostname.startswith("."):
        return False
    labels = hostname.split(".")
    if hostname.endswith("."):
        labels.pop()
    for label in labels:
        if not 1 <= len(label) <= 63:
            return False
        if label.startswith("-") or label.endswith("-"):
            return False
        if not set(label) <= _VALID_LABEL_CHARS:
            return False
    return True


def set_reuseport(sock: socket.socket) -> None:
    """Enable SO_REUSEPORT on *sock*; raises OSError if not supported."""
    sock.setsockopt(socket.SOL_SOCKET, _SO_REUSEPORT, 1)


def bind_to_address(sock: socket.socket, host: str | None) -> None:
    """Bind *sock* to the IP literal *host* on an ephemeral port.

    Raises ValueError when *host* is missing or not an IP address.
    """
    if host is None or not _is_ip_literal(host):
        raise ValueError(f"not an IP address: {host!r}")
    sock.bind(SockAddr.from_host(host, 0).as_tuple())