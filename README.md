# ssrkit

Building blocks for an obfuscating proxy server, usable on their own.

## What is in it

- **HTTP obfuscation** (`ssrkit.http_simple`): `HttpSimple` wraps the first
  packet a client sends in an HTTP GET request and the first packet a server
  sends behind an HTTP 200 response header; `HttpPost` does the same with a
  multipart POST request. Later packets pass through unchanged. Decoders
  return a pair `(data, needs_send_back)`. `server_decode` collects the
  request until its header is complete, checks the `Host:` header against
  the comma-separated names in `ServerInfo.param` when one is set, and raises
  `ObfsError` for requests that are too short, over 64 KiB, not GET/POST or
  name an unknown host. A `#` in the parameter starts a custom header text
  used instead of the standard headers. Helpers: `encode_head`,
  `parse_host_param`, `get_data_from_http_header`,
  `get_host_from_http_header`, `boundary`.
- **Plugin lookup** (`ssrkit.registry`): `get_obfs_class(name)` and
  `create_obfs(name, server)` know `"http_simple"` and `"http_post"`;
  `"plain"`, `"origin"`, `None` and unknown names give `None`.
- **Plugin interface** (`ssrkit.obfs`): `Obfs` is a pass-through base class,
  `ServerInfo` holds host, port, parameter, head length and keys, and
  `ObfsError` is what plugins raise.
- **JSON** (`ssrkit.jsonparse`): `parse(data, settings)` builds a `JsonValue`
  tree (`ssrkit.jsonvalue`). `JsonSettings(enable_comments=True)` allows
  `//` and `/* */` comments; `max_memory` caps the size of the tree. A UTF-8
  byte-order mark is skipped. Errors raise `JsonParseError`
  (`ssrkit.jsonlex`) with `line` and `column`. Values convert with `int()`,
  `float()`, `str()`, `bool()`, `len()` or `to_python()`; indexing a missing
  member or index gives an empty value instead of raising.
- **Configuration data** (`ssrkit.config`): the `Config`, `Address`,
  `PortPassword` and `Mode` dataclasses, with `Config.add_remote` and
  `Config.add_port_password` enforcing the limits `MAX_REMOTE_NUM` and
  `MAX_PORT_NUM`.
- **Network helpers** (`ssrkit.netutils`): `SockAddr`, `get_sockaddr`,
  `get_sockaddr_len`, `sockaddr_cmp`, `sockaddr_cmp_addr`,
  `validate_hostname`, `bind_to_address`, `set_reuseport`.
- **Host rules** (`ssrkit.rule`): `Rule` wraps a regular expression searched
  in host names; `lookup_rule(rules, name)` returns the first match.
  Bad patterns raise `RuleError`.
- **DNS** (`ssrkit.resolv`): `Resolver(nameservers, ipv6first)` queries A
  and AAAA records asynchronously and `await resolver.resolve(name, port)`
  returns the preferred `SockAddr` or `None`; `choose_address` applies the
  `ResolveMode` preference to a list of addresses.
- **Utilities**: `XorShift128Plus`, `xorshift128plus` and `get_head_size`
  (`ssrkit.obfsutil`), and a singly linked `LinkedList`
  (`ssrkit.linkedlist`).

## What it does not do

There is no proxy server, client or command-line program here, no reading
of a configuration file into `Config`, and no encryption or protocol
plugins; only the HTTP obfuscation plugins are provided.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from ssrkit.obfs import ServerInfo
from ssrkit.registry import create_obfs

client = create_obfs("http_simple", ServerInfo(host="example.com", port=80))
server = create_obfs("http_simple", ServerInfo(host="example.com", port=80))

wire = client.client_encode(b"\x01\x02\x03payload")
data, send_back = server.server_decode(wire)
assert data == b"\x01\x02\x03payload"
```

```python
from ssrkit.jsonparse import JsonSettings, parse

value = parse(b'{"server_port": 8388, // port\n "method": "aes-256-cfb"}',
              JsonSettings(enable_comments=True))
print(int(value["server_port"]), str(value["method"]))
```