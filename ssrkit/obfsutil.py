"""Small helpers shared by the obfuscation plugins."""

from __future__ import annotations

import time

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1


def get_head_size(data: bytes | None, default_size: int) -> int:
    """Return the size of the address header at the start of *data*.

    The low three bits of the first byte give the address type: IPv4 (1),
    IPv6 (4) or a length-prefixed host name (3). Any other type, or data
    shorter than two bytes, gives *default_size*.
    """
    if data is None or len(data) < 2:
        return default_size
    head_type = data[0] & 0x7
    if head_type == 1:
        return 7
    if head_type == 4:
        return 19
    if head_type == 3:
        return 4 + data[1]
    return default_size


class XorShift128Plus:
    """The xorshift128+ pseudo-random generator over 64-bit words."""

    __slots__ = ("state0", "state1")

    def __init__(self, state0: int, state1: int) -> None:
        self.state0 = state0 & _MASK64
        self.state1 = state1 & _MASK64

    @classmethod
    def from_seed(cls, seed: int) -> "XorShift128Plus":
        """Build a generator from a 32-bit seed."""
        seed &= _MASK32
        return cls(seed | 0x100000000, (seed << 32) | 0x1)

    def next(self) -> int:
        """Advance the generator and return the next 64-bit value."""
        x = self.state0
        y = self.state1
        self.state0 = y
        x ^= (x << 23) & _MASK64
        x ^= x >> 17
        x ^= y ^ (y >> 26)
        self.state1 = x
        return (x + y) & _MASK64

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()


_shared = XorShift128Plus(0x10000000, 0xFFFFFFFF)
_seeded = False


def init_shift128plus() -> None:
    """Seed the shared generator from the clock, once per process."""
    global _shared, _seeded
    if not _seeded:
        _seeded = True
        _shared = XorShift128Plus.from_seed(int(time.time()))


def xorshift128plus() -> int:
    """Return the next value of the shared generator."""
    return _shared.next()