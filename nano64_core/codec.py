"""
nano64_core/codec.py - Fixed-width integer and hex codecs.

Unsigned 64-bit integers travel as 8-byte big-endian sequences, so that
byte-lexicographic order equals numeric order. Hex is always emitted in
uppercase without separators; the parser is lenient about case, an
optional 0x prefix and a single interior dash.

SignedInt64 tags integers in signed-storage form so that the unsigned
paths here and in nano64.py can refuse them.

All functions are pure and stateless.
"""

from __future__ import annotations

import re

from .errors import FormatError, LengthError, RangeError, ValidationError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

UINT64_BYTES = 8
MASK64 = (1 << 64) - 1

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


# ---------------------------------------------------------------------------
# Integer <-> bytes
# ---------------------------------------------------------------------------

class SignedInt64(int):
    """An integer in signed-storage form (unsigned value minus 2^63).

    Signed and unsigned Nano64 values are both plain 64-bit integers, so
    nothing in the numbers themselves tells them apart. Tagging the signed
    form with this subclass lets the unsigned constructors refuse it
    instead of silently decoding a wrong timestamp. Instances still behave
    as ordinary ints for database drivers and arithmetic.
    """

    MIN = -(1 << 63)
    MAX = (1 << 63) - 1

    def __new__(cls, value: int) -> "SignedInt64":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("signed value must be an integer")
        if value < cls.MIN or value > cls.MAX:
            raise RangeError("value is out of the signed 64-bit range")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"SignedInt64({int(self)})"


def reject_signed(value: int) -> None:
    """Refuse signed-storage values on unsigned decode paths."""
    if isinstance(value, SignedInt64):
        raise ValidationError(
            "signed-storage value passed to an unsigned decode path; "
            "use SignedNano64.to_id() instead"
        )


def bytes_to_uint(data: bytes) -> int:
    """Read an 8-byte big-endian sequence as an unsigned 64-bit integer."""
    if len(data) != UINT64_BYTES:
        raise LengthError(UINT64_BYTES, len(data))
    return int.from_bytes(data, byteorder="big", signed=False)


def uint_to_bytes(value: int) -> bytes:
    """Write an unsigned 64-bit integer as 8 bytes, most significant first."""
    reject_signed(value)
    if value < 0 or value > MASK64:
        raise RangeError("value is out of the unsigned 64-bit range")
    return value.to_bytes(UINT64_BYTES, byteorder="big", signed=False)


# ---------------------------------------------------------------------------
# Hex <-> bytes
# ---------------------------------------------------------------------------

def normalize_hex(text: str) -> str:
    """Strip an optional 0x/0X prefix and at most one dash separator."""
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    return text.replace("-", "", 1)


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex string into bytes.

    Raises:
        FormatError: On odd length or non-hexadecimal characters.
    """
    clean = normalize_hex(text)
    if len(clean) % 2 != 0:
        raise FormatError("hex string must have an even number of characters")
    # bytes.fromhex tolerates whitespace, so validate strictly first
    if not _HEX_RE.fullmatch(clean):
        raise FormatError("hex string contains non-hexadecimal characters")
    return bytes.fromhex(clean)


def bytes_to_hex(data: bytes) -> str:
    """Encode bytes as an uppercase hex string."""
    return data.hex().upper()
