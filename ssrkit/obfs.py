"""The obfuscation plugin interface and the server data it works with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ObfsError(Exception):
    """Raised when an obfuscation plugin rejects the data it is given."""


@dataclass
class ServerInfo:
    """What a plugin knows about the server and the current connection."""

    host: str = ""
    port: int = 0
    param: str | None = None
    g_data: Any = None
    iv: bytes = b""
    recv_iv: bytes = b""
    key: bytes = b""
    head_len: int = 0
    tcp_mss: int = 0

    @property
    def iv_len(self) -> int:
        return len(self.iv)

    @property
    def recv_iv_len(self) -> int:
        return len(self.recv_iv)

    @property
    def key_len(self) -> int:
        return len(self.key)


class Obfs:
    """A plugin that wraps the stream; this base passes data through unchanged.

    Encoders return the bytes to send. Decoders return the decoded bytes
    and whether something must be sent back to the peer. Plugins raise
    ObfsError when the data cannot be accepted.
    """

    def __init__(self, server: ServerInfo | None = None) -> None:
        self.server = server if server is not None else ServerInfo()

    def client_encode(self, data: bytes) -> bytes:
        """Wrap data the client sends."""
        return bytes(data)

    def client_decode(self, data: bytes) -> tuple[bytes, bool]:
        """Unwrap data the client receives."""
        return bytes(data), False

    def server_encode(self, data: bytes) -> bytes:
        """Wrap data the server sends."""
        return bytes(data)

    def server_decode(self, data: bytes) -> tuple[bytes, bool]:
        """Unwrap data the server receives."""
        return bytes(data), False