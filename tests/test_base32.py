"""Unit tests for the base32 codec."""

import random

import pytest

from ulidkit.codec.base32 import (
    ALPHABET,
    DECODE_TABLE,
    INVALID,
    RANDOMNESS_LAYOUT,
    TIMESTAMP_LAYOUT,
    BitLayout,
    decode_identifier,
    encode_identifier,
    is_well_formed,
    symbol_value,
)
from ulidkit.core.errors import (
    DecodeError,
    InvalidLengthError,
    InvalidSymbolError,
    TimestampOverflowError,
)

from conftest import REFERENCE_ULID, int_encode


class TestAlphabet:
    """Tests for the alphabet and decode table."""

    def test_alphabet_excludes_confusables(self):
        """I, L, O and U are not symbols."""
        assert len(ALPHABET) == 32
        for char in "ILOU":
            assert char not in ALPHABET

    def test_alphabet_is_sorted(self):
        """Symbol order matches ASCII order, so strings sort like values."""
        assert list(ALPHABET) == sorted(ALPHABET)

    def test_decode_table_size(self):
        """Decode table covers every byte value."""
        assert len(DECODE_TABLE) == 256

    def test_decode_table_inverts_alphabet(self):
        """Every symbol maps back to its index."""
        for value, char in enumerate(ALPHABET):
            assert DECODE_TABLE[ord(char)] == value

    def test_lowercase_accepted(self):
        """Lowercase letters decode like uppercase."""
        assert symbol_value("z") == symbol_value("Z") == 31
        assert symbol_value("a") == 10

    def test_confusables_invalid(self):
        """I, L, O, U in either case are invalid."""
        for char in "ILOUilou":
            assert symbol_value(char) == INVALID

    def test_non_ascii_invalid(self):
        """Characters beyond the table are invalid."""
        assert symbol_value("é") == INVALID
        assert symbol_value("Ā") == INVALID

    def test_invalid_count(self):
        """32 symbols plus the 22 lowercase letters are valid."""
        valid = [code for code in range(256) if DECODE_TABLE[code] != INVALID]
        assert len(valid) == 32 + 22


class TestBitLayout:
    """Tests for the bit-group tables."""

    def test_timestamp_padding(self):
        """10 symbols hold 48 bits with 2 pad bits."""
        assert TIMESTAMP_LAYOUT.pad_bits == 2
        assert TIMESTAMP_LAYOUT.max_leading_value == 7

    def test_randomness_padding(self):
        """16 symbols hold 80 bits exactly."""
        assert RANDOMNESS_LAYOUT.pad_bits == 0
        assert RANDOMNESS_LAYOUT.max_leading_value == 31

    def test_timestamp_groups(self):
        """Byte shifts match the reference per-byte formulas."""
        groups = TIMESTAMP_LAYOUT.byte_groups
        assert groups[0] == ((0, 5), (1, 0))
        assert groups[1] == ((2, 3), (3, -2))
        assert groups[2] == ((3, 6), (4, 1), (5, -4))
        assert groups[3] == ((5, 4), (6, -1))
        assert groups[4] == ((6, 7), (7, 2), (8, -3))
        assert groups[5] == ((8, 5), (9, 0))

    def test_randomness_groups(self):
        """Randomness starts on a symbol boundary."""
        groups = RANDOMNESS_LAYOUT.byte_groups
        assert groups[0] == ((0, 3), (1, -2))
        assert groups[1] == ((1, 6), (2, 1), (3, -4))
        assert groups[4] == ((6, 5), (7, 0))
        assert groups[5] == ((8, 3), (9, -2))
        assert groups[9] == ((14, 5), (15, 0))

    def test_char_groups_mirror_byte_groups(self):
        """Encode table is the decode table read the other way round."""
        for layout in (TIMESTAMP_LAYOUT, RANDOMNESS_LAYOUT):
            pairs = {(i, j, s) for i, group in enumerate(layout.byte_groups) for j, s in group}
            mirrored = {(i, j, -s) for j, group in enumerate(layout.char_groups) for i, s in group}
            assert pairs == mirrored

    def test_impossible_layout(self):
        """Symbol count must fit the byte count."""
        with pytest.raises(ValueError):
            BitLayout(6, 9)
        with pytest.raises(ValueError):
            BitLayout(6, 11)


class TestEncode:
    """Tests for field and identifier encoding."""

    def test_timestamp_matches_integer_encoding(self):
        """Layout encoding agrees with whole-integer base32."""
        rng = random.Random(7)
        for _ in range(200):
            data = rng.getrandbits(48).to_bytes(6, "big")
            assert TIMESTAMP_LAYOUT.encode(data) == int_encode(data)

    def test_randomness_matches_integer_encoding(self):
        """Layout encoding agrees with whole-integer base32."""
        rng = random.Random(11)
        for _ in range(200):
            data = rng.getrandbits(80).to_bytes(10, "big")
            assert RANDOMNESS_LAYOUT.encode(data) == int_encode(data)

    def test_identifier_matches_integer_encoding(self):
        """26 symbols equal the 128-bit value in base32."""
        rng = random.Random(13)
        for _ in range(200):
            data = rng.getrandbits(128).to_bytes(16, "big")
            assert encode_identifier(data) == int_encode(data)

    def test_extremes(self):
        """All-zero and all-one identifiers."""
        assert encode_identifier(bytes(16)) == "0" * 26
        assert encode_identifier(b"\xff" * 16) == "7" + "Z" * 25

    def test_single_low_bit(self):
        """The lowest bit lands in the last symbol."""
        assert RANDOMNESS_LAYOUT.encode(bytes(9) + b"\x01") == "0" * 15 + "1"
        assert RANDOMNESS_LAYOUT.encode(bytes(9) + b"\x20") == "0" * 14 + "10"

    def test_wrong_length(self):
        """Encoders reject the wrong byte count."""
        with pytest.raises(ValueError):
            TIMESTAMP_LAYOUT.encode(bytes(5))
        with pytest.raises(ValueError):
            encode_identifier(bytes(15))


class TestDecode:
    """Tests for field and identifier decoding."""

    def test_reference_string(self):
        """Known string survives decode and re-encode."""
        assert encode_identifier(decode_identifier(REFERENCE_ULID)) == REFERENCE_ULID

    def test_random_values_round_trip(self):
        """Bytes survive encode and decode."""
        rng = random.Random(17)
        for _ in range(100):
            data = rng.getrandbits(128).to_bytes(16, "big")
            assert decode_identifier(encode_identifier(data)) == data

    def test_lowercase(self):
        """Lowercase input decodes to the same bytes."""
        assert decode_identifier(REFERENCE_ULID.lower()) == decode_identifier(REFERENCE_ULID)

    def test_wrong_length(self):
        """Length errors carry expected and actual sizes."""
        with pytest.raises(InvalidLengthError) as exc_info:
            decode_identifier(REFERENCE_ULID[:-1])
        assert exc_info.value.expected == 26
        assert exc_info.value.actual == 25

    def test_invalid_symbol_in_timestamp(self):
        """Invalid symbol position is reported."""
        with pytest.raises(InvalidSymbolError) as exc_info:
            decode_identifier("0I" + REFERENCE_ULID[2:])
        assert exc_info.value.position == 1
        assert exc_info.value.symbol == "I"

    def test_invalid_symbol_in_randomness(self):
        """Position is reported relative to the whole identifier."""
        with pytest.raises(InvalidSymbolError) as exc_info:
            decode_identifier(REFERENCE_ULID[:25] + "U")
        assert exc_info.value.position == 25
        assert exc_info.value.symbol == "U"

    def test_leading_symbol_overflow(self):
        """Leading symbol above 7 would exceed 128 bits."""
        with pytest.raises(TimestampOverflowError):
            decode_identifier("8" + "0" * 25)

    def test_errors_are_value_errors(self):
        """Decode errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode_identifier("not-a-ulid")
        assert issubclass(InvalidSymbolError, DecodeError)

    def test_randomness_field_decode(self):
        """Randomness decodes alone with any leading symbol."""
        assert RANDOMNESS_LAYOUT.decode("Z" * 16) == b"\xff" * 10

    def test_random_strings_round_trip(self):
        """Any well-formed string re-encodes to itself."""
        rng = random.Random(19)
        for _ in range(2000):
            text = ALPHABET[rng.randrange(8)] + "".join(rng.choice(ALPHABET) for _ in range(25))
            assert encode_identifier(decode_identifier(text)) == text


class TestWellFormed:
    """Tests for the non-raising pre-check."""

    def test_accepts_decodable(self):
        """Strings that decode are well formed."""
        assert is_well_formed(REFERENCE_ULID)
        assert is_well_formed(REFERENCE_ULID.lower())
        assert is_well_formed("7" + "Z" * 25)

    def test_rejects_undecodable(self):
        """Wrong length, bad symbols and overflow are rejected."""
        assert not is_well_formed(REFERENCE_ULID[:-1])
        assert not is_well_formed(REFERENCE_ULID[:25] + "U")
        assert not is_well_formed("8" + "0" * 25)
        assert not is_well_formed("0" * 25 + "é")

    def test_rejects_non_strings(self):
        """Non-str input is not well formed."""
        assert not is_well_formed(None)
        assert not is_well_formed(REFERENCE_ULID.encode())
