"""The http_simple and http_post plugins: hide the stream behind an HTTP exchange."""

from __future__ import annotations

import logging
import random
import re
import time
from typing import Callable

from .obfs import Obfs, ObfsError, ServerInfo
from .obfsutil import xorshift128plus

log = logging.getLogger(__name__)

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 6.3; WOW64; rv:40.0) Gecko/20100101 Firefox/40.0",
    "Mozilla/5.0 (Windows NT 6.3; WOW64; rv:40.0) Gecko/20100101 Firefox/44.0",
    "Mozilla/5.0 (Windows NT 6.1) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/41.0.2228.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/535.11 (KHTML, like Gecko) "
    "Ubuntu/11.10 Chromium/27.0.1453.93 Chrome/27.0.1453.93 Safari/537.36",
    "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:35.0) Gecko/20100101 Firefox/35.0",
    "Mozilla/5.0 (compatible; WOW64; MSIE 10.0; Windows NT 6.2)",
    "Mozilla/5.0 (Windows; U; Windows NT 6.1; en-US) AppleWebKit/533.20.25 "
    "(KHTML, like Gecko) Version/5.0.4 Safari/533.20.27",
    "Mozilla/4.0 (compatible; MSIE 7.0; Windows NT 6.3; Trident/7.0; .NET4.0E; .NET4.0C)",
    "Mozilla/5.0 (Windows NT 6.3; Trident/7.0; rv:11.0) like Gecko",
    "Mozilla/5.0 (Linux; Android 4.4; Nexus 5 Build/BuildID) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Version/4.0 Chrome/30.0.0.0 Mobile Safari/537.36",
    "Mozilla/5.0 (iPad; CPU OS 5_0 like Mac OS X) AppleWebKit/534.46 "
    "(KHTML, like Gecko) Version/5.1 Mobile/9A334 Safari/7534.48.3",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 5_0 like Mac OS X) AppleWebKit/534.46 "
    "(KHTML, like Gecko) Version/5.1 Mobile/9A334 Safari/7534.48.3",
)

_useragent_index: int | None = None

_BOUNDARY_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_HOSTS_LIMIT = 1023
_HOST_LIMIT = 1023
_MAX_REQUEST = 65536
_HEADER_END = b"\r\n\r\n"
_STRTOL16 = re.compile(rb"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


def _user_agent() -> str:
    """Return the user agent this process presents, picking it on first use."""
    global _useragent_index
    if _useragent_index is None:
        _useragent_index = xorshift128plus() % len(_USER_AGENTS)
    return _USER_AGENTS[_useragent_index]


def encode_head(data: bytes) -> str:
    """Percent-encode every byte of *data* with lower-case hex digits."""
    return "".join(f"%{byte:02x}" for byte in data)


def parse_host_param(param: str) -> tuple[list[str], str | None]:
    """Split a plugin parameter into host names and an optional custom header.

    Hosts are separated by commas; a ``#`` starts the custom header text, in
    which ``\\n`` and real newlines become CRLF and other backslashes are
    dropped. The header is None when there is no ``#``.
    """
    text = param[:_HOSTS_LIMIT]
    head, sep, rest = text.partition("#")
    hosts = head.split(",")
    if not sep:
        return hosts, None

    body: list[str] = []
    escaped = False
    for char in rest:
        if char == "\\":
            escaped = True
            continue
        if char == "\n":
            body.append("\r\n")
            continue
        if escaped:
            body.append("\r\n" if char == "n" else char)
            escaped = False
        else:
            body.append(char)
    return hosts, "".join(body)


def _strtol16(token: bytes) -> int:
    match = _STRTOL16.match(token)
    sign, digits = match.group(1), match.group(2)
    value = int(digits, 16) if digits else 0
    if sign == b"-":
        value = -value
    return value & 0xFF


def get_data_from_http_header(data: bytes) -> bytes:
    """Decode the percent-encoded bytes in the first line of a request."""
    text = bytes(data).split(b"\0", 1)[0].lstrip(b"\r\n")
    if not text:
        return b""
    line = re.split(rb"[\r\n]", text, maxsplit=1)[0]
    tokens = [token for token in line.split(b"%") if token]
    return bytes(_strtol16(token[:2]) for token in tokens[1:])


def get_host_from_http_header(data: bytes) -> str | None:
    """Return the host named by the ``Host:`` header, without its port.

    Returns None when there is no such header or the name is empty.
    """
    text = bytes(data).split(b"\0", 1)[0]
    start = text.find(b"Host: ")
    if start < 0:
        return None
    start += 6
    port_mark = text.find(b":", start)
    if port_mark >= 0:
        stop = port_mark
    else:
        stop = text.find(b"\r\n", start)
        if stop < 0:
            return None
    if stop - start <= 0:
        return None
    host = text[start:stop][:_HOST_LIMIT]
    return host.decode("utf-8", "surrogateescape")


def boundary(rng: random.Random | None = None) -> str:
    """Return a random 32-character multipart boundary."""
    source = rng if rng is not None else random
    return "".join(source.choice(_BOUNDARY_CHARS) for _ in range(32))


class HttpSimple(Obfs):
    """Disguise the first packet of each direction as an HTTP GET exchange."""

    def __init__(self, server: ServerInfo | None = None) -> None:
        super().__init__(server)
        self.has_sent_header = False
        self.has_recv_header = False
        self.host_matched = False
        self._recv_buffer = bytearray()
        _user_agent()

    def _encode_request(self, data: bytes, method: str,
                        extra_headers: Callable[[], str]) -> bytes:
        data = bytes(data)
        if self.has_sent_header:
            return data
        head_size = min(self.server.head_len + (xorshift128plus() & 0x3F), len(data))
        encoded = encode_head(data[:head_size])
        if self.server.param == "":
            self.server.param = None
        source = self.server.param if self.server.param is not None else self.server.host
        hosts, body = parse_host_param(source)
        host = hosts[xorshift128plus() % len(hosts)]
        hostport = host if self.server.port == 80 else f"{host}:{self.server.port}"

        if body is not None:
            header = (f"{method} /{encoded} HTTP/1.1\r\n"
                      f"Host: {hostport}\r\n"
                      f"{body}\r\n\r\n")
        else:
            header = (f"{method} /{encoded} HTTP/1.1\r\n"
                      f"Host: {hostport}\r\n"
                      f"User-Agent: {_user_agent()}\r\n"
                      "Accept: text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8\r\n"
                      "Accept-Language: en-US,en;q=0.8\r\n"
                      "Accept-Encoding: gzip, deflate\r\n"
                      f"{extra_headers()}"
                      "DNT: 1\r\n"
                      "Connection: keep-alive\r\n"
                      "\r\n")
        self.has_sent_header = True
        return header.encode("utf-8", "surrogateescape") + data[head_size:]

    def client_encode(self, data: bytes) -> bytes:
        """Wrap the first packet in a GET request; later packets pass through."""
        return self._encode_request(data, "GET", lambda: "")

    def client_decode(self, data: bytes) -> tuple[bytes, bool]:
        """Strip the response header; nothing is returned until it is complete."""
        data = bytes(data)
        if self.has_recv_header:
            return data, False
        end = data.split(b"\0", 1)[0].find(_HEADER_END)
        if end < 0:
            return b"", False
        self.has_recv_header = True
        return data[end + len(_HEADER_END):], False

    def server_encode(self, data: bytes) -> bytes:
        """Prefix the first packet with an HTTP 200 response header."""
        data = bytes(data)
        if self.has_sent_header:
            return data
        now = time.strftime("%a, %d %b %Y %H:%M:%S GMT", time.localtime())
        header = ("HTTP/1.1 200 OK\r\nConnection: keep-alive\r\n"
                  "Content-Encoding: gzip\r\nContent-Type: text/html\r\n"
                  f"Date: {now}\r\nServer: nginx\r\nVary: Accept-Encoding\r\n\r\n")
        self.has_sent_header = True
        return header.encode("ascii") + data

    def _give_up(self) -> None:
        self._recv_buffer.clear()
        self.has_sent_header = True
        self.has_recv_header = True

    def _reject(self, message: str) -> None:
        self._give_up()
        log.error("http_simple: %s", message)
        raise ObfsError(f"http_simple: {message}")

    def server_decode(self, data: bytes) -> tuple[bytes, bool]:
        """Collect the request, check its host and return the data it carries.

        Returns empty bytes while the request header is incomplete. Raises
        ObfsError for a request that is too short, too long, not a GET or
        POST, names an unknown host, or carries no data in its first line.
        """
        data = bytes(data)
        if self.has_recv_header:
            return data, False
        if data:
            self._recv_buffer += data
        buffer = bytes(self._recv_buffer)

        if len(buffer) > 10:
            if buffer.startswith((b"GET /", b"POST /")):
                if len(buffer) > _MAX_REQUEST:
                    self._reject("over size")
            else:
                self._reject("not match begin")
        else:
            log.error("http_simple: too short")
            self.has_sent_header = True
            self.has_recv_header = True
            raise ObfsError("http_simple: too short")

        end = buffer.split(b"\0", 1)[0].find(_HEADER_END)
        if end < 0:
            return b"", False

        head_data = get_data_from_http_header(buffer)
        param = self.server.param
        if param == "":
            self.server.param = None
        elif param is not None and not self.host_matched:
            host = get_host_from_http_header(buffer)
            hosts, _ = parse_host_param(param)
            if host in hosts:
                self.host_matched = True
            else:
                self._reject(f"not match host, host: {host}")

        if not head_data:
            raise ObfsError("http_simple: no data in request header")

        self.has_recv_header = True
        self._recv_buffer.clear()
        return head_data + buffer[end + len(_HEADER_END):], False


class HttpPost(HttpSimple):
    """Like http_simple, but the client sends a multipart POST request."""

    def client_encode(self, data: bytes) -> bytes:
        """Wrap the first packet in a POST request; later packets pass through."""
        return self._encode_request(
            data, "POST",
            lambda: f"Content-Type: multipart/form-data; boundary={boundary()}\r\n",
        )