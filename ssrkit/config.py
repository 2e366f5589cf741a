"""Configuration data for the proxy server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MAX_PORT_NUM = 1024
MAX_REMOTE_NUM = 10
MAX_CONF_SIZE = 128 * 1024
MAX_DNS_NUM = 4
MAX_CONNECT_TIMEOUT = 10
MAX_REQUEST_TIMEOUT = 60
MIN_UDP_TIMEOUT = 10


class Mode(IntEnum):
    """Which transports the server relays."""

    TCP_ONLY = 0
    TCP_AND_UDP = 1
    UDP_ONLY = 3


@dataclass
class Address:
    """A host with an optional port, both as given in the configuration."""

    host: str
    port: str | None = None


@dataclass
class PortPassword:
    """A port and the password that guards it."""

    port: str
    password: str


@dataclass
class Config:
    """Settings read from the configuration file."""

    remote_addrs: list[Address] = field(default_factory=list)
    port_passwords: list[PortPassword] = field(default_factory=list)
    remote_port: str | None = None
    local_addr: str | None = None
    local_port: str | None = None
    password: str | None = None
    protocol: str | None = None
    protocol_param: str | None = None
    method: str | None = None
    obfs: str | None = None
    obfs_param: str | None = None
    timeout: str | None = None
    user: str | None = None
    auth: bool = False
    fast_open: bool = False
    nofile: int = 0
    nameserver: str | None = None
    tunnel_address: str | None = None
    mode: Mode = Mode.TCP_ONLY
    mtu: int = 0
    mptcp: bool = False
    ipv6_first: bool = False

    def add_remote(self, address: Address) -> None:
        """Add a remote address; raise ValueError past MAX_REMOTE_NUM."""
        if len(self.remote_addrs) >= MAX_REMOTE_NUM:
            raise ValueError(f"too many remote addresses (max {MAX_REMOTE_NUM})")
        self.remote_addrs.append(address)

    def add_port_password(self, entry: PortPassword) -> None:
        """Add a port/password pair; raise ValueError past MAX_PORT_NUM."""
        if len(self.port_passwords) >= MAX_PORT_NUM:
            raise ValueError(f"too many port passwords (max {MAX_PORT_NUM})")
        self.port_passwords.append(entry)