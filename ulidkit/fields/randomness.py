"""
80-bit randomness field and random-byte sources.

A random source is any zero-argument callable returning bytes. Sources that
return fewer than 10 bytes are topped up from the default source.
"""

import random
import secrets
import threading

from ulidkit.codec.base32 import RANDOMNESS_LAYOUT
from ulidkit.internal.logging import get_logger

SIZE = RANDOMNESS_LAYOUT.byte_count
ENCODED_SIZE = RANDOMNESS_LAYOUT.char_count

_HI_SIZE = 2
_LO_MASK = (1 << 64) - 1
_HI_MASK = (1 << 16) - 1


def default_source():
    """10 bytes from the OS CSPRNG."""
    return secrets.token_bytes(SIZE)


class SeededRandomSource:
    """Reproducible source; one generator per instance, guarded by a lock."""

    __slots__ = ("seed", "_random", "_lock")

    def __init__(self, seed=None):
        self.seed = seed
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            return self._random.getrandbits(SIZE * 8).to_bytes(SIZE, "big")

    def __repr__(self):
        return f"SeededRandomSource(seed={self.seed!r})"


def draw(random_source=None):
    """Exactly SIZE bytes from ``random_source``, topped up from the default source."""
    if random_source is None:
        return default_source()
    data = bytes(random_source())
    if len(data) >= SIZE:
        return data[:SIZE]
    get_logger().debug("Random source short, topping up", got=len(data), needed=SIZE)
    return data + default_source()[: SIZE - len(data)]


class RandomField:
    """View over 10 bytes of randomness, read as a big-endian (hi16, lo64) pair."""

    __slots__ = ("_view",)

    def __init__(self, view=None):
        if view is None:
            view = memoryview(bytearray(SIZE))
        if len(view) != SIZE:
            raise ValueError(f"randomness field needs {SIZE} bytes, got {len(view)}")
        self._view = view

    def create(self, random_source=None):
        self._view[:] = draw(random_source)
        return self

    def add(self, n):
        """Add ``n`` with 80-bit wraparound; False when the value wrapped past 2**80 - 1."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"increment must be int, got {type(n).__name__}")
        if not 0 <= n <= _LO_MASK:
            raise ValueError(f"increment {n} outside unsigned 64-bit range")
        hi = int.from_bytes(self._view[:_HI_SIZE], "big")
        lo = int.from_bytes(self._view[_HI_SIZE:], "big")
        total = lo + n
        new_lo = total & _LO_MASK
        new_hi = (hi + (total >> 64)) & _HI_MASK
        self._view[:_HI_SIZE] = new_hi.to_bytes(_HI_SIZE, "big")
        self._view[_HI_SIZE:] = new_lo.to_bytes(SIZE - _HI_SIZE, "big")
        return new_hi >= hi

    def is_zero(self):
        return not any(self._view)

    def to_int(self):
        return int.from_bytes(self._view, "big")

    def encode(self):
        return RANDOMNESS_LAYOUT.encode(self._view)

    def decode(self, text):
        self._view[:] = RANDOMNESS_LAYOUT.decode(text)
        return self

    def __bytes__(self):
        return bytes(self._view)

    def __repr__(self):
        return f"RandomField({bytes(self._view).hex()})"
