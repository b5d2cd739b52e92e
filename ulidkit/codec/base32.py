"""
Crockford base32 codec for ULID fields.

Bit layout (MSB-first bit stream, 5 bits per symbol):

     01AN4Z07BY      79KA1307SR9X4MV3
    |----------|    |----------------|
     Timestamp         Randomness
     6 bytes           10 bytes
     10 symbols        16 symbols
     48 bits + 2 pad   80 bits

Both directions are driven by one table per field (``BitLayout``): for every
byte, the symbols that overlap it and the shift that moves each symbol's
5-bit value into place.
"""

from ulidkit.core.errors import InvalidLengthError, InvalidSymbolError, TimestampOverflowError

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"  # no I, L, O, U
INVALID = 0xFF
BITS_PER_SYMBOL = 5


def _build_decode_table():
    table = bytearray([INVALID] * 256)
    for value, symbol in enumerate(ALPHABET):
        table[ord(symbol)] = value
        table[ord(symbol.lower())] = value
    return bytes(table)


DECODE_TABLE = _build_decode_table()


def symbol_value(char):
    """5-bit value of ``char``, or INVALID."""
    code = ord(char)
    if code > 0xFF:
        return INVALID
    return DECODE_TABLE[code]


def _shift(value, bits):
    return value << bits if bits >= 0 else value >> -bits


class BitLayout:
    """Symbol/byte overlap table for a fixed-width field."""

    __slots__ = ("byte_count", "char_count", "pad_bits", "byte_groups", "char_groups")

    def __init__(self, byte_count, char_count):
        pad_bits = char_count * BITS_PER_SYMBOL - byte_count * 8
        if not 0 <= pad_bits < BITS_PER_SYMBOL:
            raise ValueError(f"{char_count} symbols cannot hold {byte_count} bytes")
        self.byte_count = byte_count
        self.char_count = char_count
        self.pad_bits = pad_bits

        # byte_groups[i]: ((symbol index, left shift into byte i), ...)
        byte_groups = []
        char_groups = [[] for _ in range(char_count)]
        for i in range(byte_count):
            byte_start = pad_bits + 8 * i
            byte_end = byte_start + 8
            group = []
            for j in range(char_count):
                char_start = BITS_PER_SYMBOL * j
                char_end = char_start + BITS_PER_SYMBOL
                if char_start < byte_end and char_end > byte_start:
                    shift = byte_end - char_end
                    group.append((j, shift))
                    char_groups[j].append((i, -shift))
            byte_groups.append(tuple(group))
        self.byte_groups = tuple(byte_groups)
        self.char_groups = tuple(tuple(group) for group in char_groups)

    @property
    def max_leading_value(self):
        return (1 << (BITS_PER_SYMBOL - self.pad_bits)) - 1

    def encode(self, data):
        if len(data) != self.byte_count:
            raise ValueError(f"expected {self.byte_count} bytes, got {len(data)}")
        chars = []
        for group in self.char_groups:
            value = 0
            for i, shift in group:
                value |= _shift(data[i], shift)
            chars.append(ALPHABET[value & 0x1F])
        return "".join(chars)

    def validate(self, text):
        """Symbol values of ``text``; raises DecodeError subclasses."""
        if len(text) != self.char_count:
            raise InvalidLengthError(
                f"expected {self.char_count} characters, got {len(text)}",
                expected=self.char_count,
                actual=len(text),
            )
        values = []
        for position, char in enumerate(text):
            value = symbol_value(char)
            if value == INVALID:
                raise InvalidSymbolError(
                    f"invalid base32 symbol {char!r} at position {position}",
                    symbol=char,
                    position=position,
                    text=text,
                )
            values.append(value)
        if values[0] > self.max_leading_value:
            raise TimestampOverflowError(
                f"leading symbol {text[0]!r} exceeds {ALPHABET[self.max_leading_value]!r}",
                text=text,
            )
        return values

    def decode_values(self, values):
        out = bytearray(self.byte_count)
        for i, group in enumerate(self.byte_groups):
            byte = 0
            for j, shift in group:
                byte |= _shift(values[j], shift)
            out[i] = byte & 0xFF
        return bytes(out)

    def decode(self, text):
        return self.decode_values(self.validate(text))


TIMESTAMP_LAYOUT = BitLayout(6, 10)
RANDOMNESS_LAYOUT = BitLayout(10, 16)

ENCODED_LENGTH = TIMESTAMP_LAYOUT.char_count + RANDOMNESS_LAYOUT.char_count
BINARY_LENGTH = TIMESTAMP_LAYOUT.byte_count + RANDOMNESS_LAYOUT.byte_count


def encode_identifier(data):
    """16 bytes -> 26 symbols."""
    if len(data) != BINARY_LENGTH:
        raise ValueError(f"expected {BINARY_LENGTH} bytes, got {len(data)}")
    split = TIMESTAMP_LAYOUT.byte_count
    return TIMESTAMP_LAYOUT.encode(data[:split]) + RANDOMNESS_LAYOUT.encode(data[split:])


def is_well_formed(text):
    """True when decode_identifier(text) would succeed; raises nothing."""
    if not isinstance(text, str) or len(text) != ENCODED_LENGTH:
        return False
    for char in text:
        if symbol_value(char) == INVALID:
            return False
    return symbol_value(text[0]) <= TIMESTAMP_LAYOUT.max_leading_value


def decode_identifier(text):
    """26 symbols -> 16 bytes. Every symbol is checked before any byte is built."""
    if len(text) != ENCODED_LENGTH:
        raise InvalidLengthError(
            f"expected {ENCODED_LENGTH} characters, got {len(text)}",
            expected=ENCODED_LENGTH,
            actual=len(text),
        )
    split = TIMESTAMP_LAYOUT.char_count
    timestamp_values = TIMESTAMP_LAYOUT.validate(text[:split])
    try:
        randomness_values = RANDOMNESS_LAYOUT.validate(text[split:])
    except InvalidSymbolError as exc:
        raise InvalidSymbolError(
            f"invalid base32 symbol {exc.symbol!r} at position {exc.position + split}",
            symbol=exc.symbol,
            position=exc.position + split,
            text=text,
        ) from exc
    return TIMESTAMP_LAYOUT.decode_values(timestamp_values) + RANDOMNESS_LAYOUT.decode_values(randomness_values)
