"""Tests for the base64 VLQ codec."""
import pytest

from conftest import decode_vlq_values
from covreport.core.errors import MappingFormatError, VlqDecodeError
from covreport.core.vlq import (
    CharCursor,
    decode_vlq,
    encode_vlq,
    encode_vlq_values,
)


class TestDecodeVlq:
    """Known encodings from the source-map base64 VLQ scheme."""

    @pytest.mark.parametrize("encoded, value", [
        ("A", 0),
        ("C", 1),
        ("D", -1),
        ("E", 2),
        ("F", -2),
        ("e", 15),
        ("f", -15),
        ("gB", 16),
        ("hB", -16),
        ("oB", 20),
        ("2H", 123),
        ("ggggQ", 1 << 23),
    ])
    def test_known_values(self, encoded, value):
        assert decode_vlq(CharCursor(encoded)) == value

    def test_cursor_advances_past_consumed_digits(self):
        cursor = CharCursor("gBCD")
        assert decode_vlq(cursor) == 16
        assert cursor.position == 2
        assert decode_vlq(cursor) == 1
        assert decode_vlq(cursor) == -1
        assert not cursor.has_next()

    def test_five_zeros(self):
        assert decode_vlq_values("AAAAA", 5) == [0, 0, 0, 0, 0]

    def test_trailing_characters_left_on_cursor(self):
        cursor = CharCursor("CEXYZ")
        decode_vlq(cursor)
        decode_vlq(cursor)
        assert cursor.remaining() == "XYZ"

    def test_dangling_continuation_raises(self):
        # 'g' = 32: continuation bit set, nothing follows
        with pytest.raises(VlqDecodeError, match="unexpected end"):
            decode_vlq(CharCursor("g"))

    def test_empty_input_raises(self):
        with pytest.raises(VlqDecodeError):
            decode_vlq(CharCursor(""))

    def test_too_few_values_raises(self):
        with pytest.raises(VlqDecodeError):
            decode_vlq_values("AAAA", 5)

    @pytest.mark.parametrize("bad", ["*", "=", " ", "-", "é"])
    def test_foreign_character_raises(self, bad):
        with pytest.raises(VlqDecodeError, match="invalid base64 VLQ character"):
            decode_vlq(CharCursor(bad))

    def test_decode_error_is_mapping_format_error(self):
        with pytest.raises(MappingFormatError):
            decode_vlq(CharCursor("!"))


class TestEncodeVlq:
    """encode_vlq() is the inverse of decode_vlq()."""

    def test_known_encodings(self):
        assert encode_vlq(0) == "A"
        assert encode_vlq(1) == "C"
        assert encode_vlq(-1) == "D"
        assert encode_vlq(16) == "gB"
        assert encode_vlq(123) == "2H"

    def test_round_trip_range(self):
        values = list(range(-1100, 1100)) + [2**31 - 1, -(2**31 - 1), 2**40]
        encoded = encode_vlq_values(values)
        assert decode_vlq_values(encoded, len(values)) == values
