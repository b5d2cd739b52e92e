"""ulidkit - ULID generation and Crockford base32 coding."""

from ulidkit.codec.base32 import ALPHABET, decode_identifier, encode_identifier
from ulidkit.core.errors import (
    DecodeError,
    InvalidLengthError,
    InvalidSymbolError,
    RandomnessExhaustedError,
    TimestampOverflowError,
    TimestampRangeError,
    UlidError,
)
from ulidkit.fields.randomness import RandomField, SeededRandomSource, default_source
from ulidkit.fields.timestamp import MAX_TIMESTAMP, TimestampField
from ulidkit.identifier import Identifier, is_valid, new, new_str, parse
from ulidkit.monotonic import MonotonicGenerator

__version__ = "1.0.0"

__all__ = [
    "ALPHABET",
    "MAX_TIMESTAMP",
    "DecodeError",
    "Identifier",
    "InvalidLengthError",
    "InvalidSymbolError",
    "MonotonicGenerator",
    "RandomField",
    "RandomnessExhaustedError",
    "SeededRandomSource",
    "TimestampField",
    "TimestampOverflowError",
    "TimestampRangeError",
    "UlidError",
    "decode_identifier",
    "default_source",
    "encode_identifier",
    "is_valid",
    "new",
    "new_str",
    "parse",
]
