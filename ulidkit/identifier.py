"""
ULID - Universally Unique Lexicographically Sortable Identifier.

16 bytes: [0..5] big-endian millisecond timestamp, [6..15] randomness.
Text form: 26 Crockford base32 symbols that sort like the bytes.
"""

import functools
import uuid

from ulidkit.codec.base32 import BINARY_LENGTH, decode_identifier, encode_identifier, is_well_formed
from ulidkit.fields import timestamp as _timestamp
from ulidkit.fields.randomness import RandomField
from ulidkit.fields.timestamp import TimestampField
from ulidkit.internal.logging import get_logger
from ulidkit.utils.timestamp import now_millis

_SPLIT = _timestamp.SIZE


@functools.total_ordering
class Identifier:
    __slots__ = ("_bytes",)

    # Mutable (decode, increment), so not hashable; key on bytes(identifier).
    __hash__ = None

    def __init__(self, data=None):
        if data is None:
            self._bytes = bytearray(BINARY_LENGTH)
            return
        if len(data) != BINARY_LENGTH:
            raise ValueError(f"identifier needs {BINARY_LENGTH} bytes, got {len(data)}")
        self._bytes = bytearray(data)

    @classmethod
    def create(cls, when=None, random_source=None, is_utc=False):
        """New identifier for ``when`` (now, int ms or datetime) with fresh randomness.

        ``is_utc`` only matters for naive datetimes: False reads them as local time.
        The timestamp is range-checked before any randomness is drawn.
        """
        millis = now_millis() if when is None else _timestamp.to_millis(when, is_utc)
        ident = cls()
        ident.timestamp.create(millis)
        ident.randomness.create(random_source)
        return ident

    @classmethod
    def parse(cls, text):
        """Decode ``text`` or raise a DecodeError subclass."""
        return cls(decode_identifier(text))

    @classmethod
    def from_bytes(cls, data):
        return cls(data)

    @classmethod
    def from_int(cls, value):
        if not 0 <= value < 1 << (BINARY_LENGTH * 8):
            raise ValueError("value outside the 128-bit range")
        return cls(value.to_bytes(BINARY_LENGTH, "big"))

    @classmethod
    def from_uuid(cls, value):
        return cls(value.bytes)

    @property
    def timestamp(self):
        return TimestampField(memoryview(self._bytes)[:_SPLIT])

    @property
    def randomness(self):
        return RandomField(memoryview(self._bytes)[_SPLIT:])

    def encode(self):
        return encode_identifier(self._bytes)

    def decode(self, text):
        """Overwrite from a 26-symbol string. Returns False, unchanged, on any bad input."""
        if not is_well_formed(text):
            get_logger().debug("Identifier decode rejected", text=text)
            return False
        self._bytes[:] = decode_identifier(text)
        return True

    def to_timestamp(self):
        return self.timestamp.to_timestamp()

    def to_datetime(self, is_utc=False):
        return self.timestamp.to_datetime(is_utc)

    def increment(self, n=1):
        """Add ``n`` to the randomness; False when it wrapped around."""
        return self.randomness.add(n)

    def is_zero(self):
        return not any(self._bytes)

    def copy(self):
        return type(self)(self._bytes)

    def to_uuid(self):
        return uuid.UUID(bytes=bytes(self._bytes))

    def __bytes__(self):
        return bytes(self._bytes)

    def __int__(self):
        return int.from_bytes(self._bytes, "big")

    def __str__(self):
        return self.encode()

    def __repr__(self):
        return f"Identifier({self.encode()!r})"

    def __eq__(self, other):
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other):
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._bytes < other._bytes


def new(random_source=None):
    return Identifier.create(random_source=random_source)


def new_str(random_source=None):
    return Identifier.create(random_source=random_source).encode()


def parse(text):
    return Identifier.parse(text)


def is_valid(text):
    """True when ``text`` decodes as an identifier."""
    return Identifier().decode(text)


__all__ = ["Identifier", "new", "new_str", "parse", "is_valid"]
