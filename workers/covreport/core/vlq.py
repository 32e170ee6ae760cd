"""
Base64 VLQ codec — the integer encoding used by source maps and by the
instrumentation mapping file.

Each base64 digit carries 6 bits: the high bit (32) says another digit
follows, the low 5 bits are a slice of the value, least-significant slice
first.  Once assembled, the lowest bit of the value is the sign.

    decode: "A" -> 0, "C" -> 1, "D" -> -1, "gB" -> 16
"""
from __future__ import annotations

from typing import Iterable

from covreport.core.errors import VlqDecodeError

# ── Constants ────────────────────────────────────────────────────────────────

BASE64_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)

VLQ_BASE_SHIFT = 5
VLQ_BASE = 1 << VLQ_BASE_SHIFT          # 32
VLQ_BASE_MASK = VLQ_BASE - 1            # 0b11111
VLQ_CONTINUATION_BIT = VLQ_BASE         # 0b100000

_DIGIT_OF = {ch: i for i, ch in enumerate(BASE64_ALPHABET)}


# ── Cursor ───────────────────────────────────────────────────────────────────

class CharCursor:
    """
    Forward-only position in a fixed string.

    The cursor is shared across successive ``decode_vlq`` calls so that
    one data line can be read as five consecutive integers.
    """

    __slots__ = ("content", "position")

    def __init__(self, content: str):
        self.content = content
        self.position = 0

    def has_next(self) -> bool:
        return self.position < len(self.content)

    def next(self) -> str:
        if not self.has_next():
            raise VlqDecodeError(
                f"unexpected end of VLQ data at offset {self.position} "
                f"in {self.content!r}"
            )
        ch = self.content[self.position]
        self.position += 1
        return ch

    def remaining(self) -> str:
        return self.content[self.position:]


# ── Decode ───────────────────────────────────────────────────────────────────

def _from_base64(ch: str, cursor: CharCursor) -> int:
    try:
        return _DIGIT_OF[ch]
    except KeyError:
        raise VlqDecodeError(
            f"invalid base64 VLQ character {ch!r} at offset "
            f"{cursor.position - 1} in {cursor.content!r}"
        ) from None


def decode_vlq(cursor: CharCursor) -> int:
    """
    Read one signed integer from *cursor*, advancing it past every digit
    consumed.

    Raises
    ------
    VlqDecodeError
        If the cursor runs out while a continuation bit is set, or a
        character outside the base64 alphabet is met.
    """
    result = 0
    shift = 0
    while True:
        digit = _from_base64(cursor.next(), cursor)
        result += (digit & VLQ_BASE_MASK) << shift
        shift += VLQ_BASE_SHIFT
        if not digit & VLQ_CONTINUATION_BIT:
            break

    negate = result & 1
    result >>= 1
    return -result if negate else result


# ── Encode ───────────────────────────────────────────────────────────────────

def encode_vlq(value: int) -> str:
    """Encode *value* as a base64 VLQ string (inverse of ``decode_vlq``)."""
    vlq = ((-value) << 1) + 1 if value < 0 else value << 1

    digits = []
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq > 0:
            digit |= VLQ_CONTINUATION_BIT
        digits.append(BASE64_ALPHABET[digit])
        if vlq == 0:
            break
    return "".join(digits)


def encode_vlq_values(values: Iterable[int]) -> str:
    """Concatenate the VLQ encodings of *values*."""
    return "".join(encode_vlq(v) for v in values)
