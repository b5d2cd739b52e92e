"""48-bit millisecond timestamp field."""

from datetime import datetime

from ulidkit.codec.base32 import TIMESTAMP_LAYOUT
from ulidkit.core.errors import TimestampRangeError
from ulidkit.utils.timestamp import datetime_to_millis, millis_to_datetime

SIZE = TIMESTAMP_LAYOUT.byte_count
ENCODED_SIZE = TIMESTAMP_LAYOUT.char_count
MAX_TIMESTAMP = (1 << 48) - 1


def check_millis(value):
    """Validate an epoch-millisecond count; returns it unchanged."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"timestamp must be int milliseconds, got {type(value).__name__}")
    if not 0 <= value <= MAX_TIMESTAMP:
        raise TimestampRangeError(f"timestamp {value} outside 0..{MAX_TIMESTAMP} ms", value=value)
    return value


def to_millis(value, is_utc=True):
    """Epoch milliseconds for an int or datetime, range-checked."""
    if isinstance(value, datetime):
        value = datetime_to_millis(value, is_utc)
    return check_millis(value)


class TimestampField:
    """View over 6 big-endian bytes holding milliseconds since the Unix epoch."""

    __slots__ = ("_view",)

    def __init__(self, view=None):
        if view is None:
            view = memoryview(bytearray(SIZE))
        if len(view) != SIZE:
            raise ValueError(f"timestamp field needs {SIZE} bytes, got {len(view)}")
        self._view = view

    def create(self, value, is_utc=True):
        """Store an int millisecond count or a datetime. Nothing is written on error."""
        self._view[:] = to_millis(value, is_utc).to_bytes(SIZE, "big")
        return self

    def create_from_millis(self, millis):
        return self.create(check_millis(millis))

    def create_from_datetime(self, dt, is_utc=True):
        if not isinstance(dt, datetime):
            raise TypeError(f"expected datetime, got {type(dt).__name__}")
        return self.create(dt, is_utc)

    def to_timestamp(self):
        return int.from_bytes(self._view, "big")

    def to_datetime(self, is_utc=True):
        millis = self.to_timestamp()
        try:
            return millis_to_datetime(millis, is_utc)
        except (OverflowError, OSError) as exc:
            raise TimestampRangeError(
                f"timestamp {millis} ms is not representable as a datetime", value=millis, cause=exc
            ) from exc

    def encode(self):
        return TIMESTAMP_LAYOUT.encode(self._view)

    def decode(self, text):
        self._view[:] = TIMESTAMP_LAYOUT.decode(text)
        return self

    def __bytes__(self):
        return bytes(self._view)

    def __repr__(self):
        return f"TimestampField({self.to_timestamp()})"
