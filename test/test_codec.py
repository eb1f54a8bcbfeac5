"""
test/test_codec.py - Tests for nano64_core.codec

Run:  pytest test/test_codec.py -v
  or: python test/test_codec.py
"""

import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nano64_core.codec import (
    MASK64,
    SignedInt64,
    bytes_to_hex,
    bytes_to_uint,
    hex_to_bytes,
    normalize_hex,
    uint_to_bytes,
)
from nano64_core.errors import FormatError, LengthError, RangeError, ValidationError


# ==================================================================
# Hex
# ==================================================================

def test_hex_roundtrip():
    """Bytes encode to uppercase hex and decode back."""
    b = bytes([0, 1, 2, 0xAA, 0xFF])
    h = bytes_to_hex(b)
    assert h == "000102AAFF"
    assert hex_to_bytes(h) == b
    assert hex_to_bytes(h.lower()) == b
    assert bytes_to_hex(b"") == ""
    print("  PASS: test_hex_roundtrip")


def test_hex_prefix_and_separator():
    """0x / 0X prefix and one interior dash are accepted."""
    assert hex_to_bytes("0x0a0B") == b"\x0a\x0b"
    assert hex_to_bytes("0X0A0B") == b"\x0a\x0b"
    assert hex_to_bytes("AB-CD") == b"\xab\xcd"
    assert hex_to_bytes("0xAB-CD") == b"\xab\xcd"
    assert normalize_hex("0x0011-22") == "001122"
    print("  PASS: test_hex_prefix_and_separator")


def test_hex_rejects_bad_input():
    """Odd length, non-hex characters, whitespace and extra dashes fail."""
    for bad in ["GG", "0x123", "ABC", "AB-CD-EF", " AB", "AB CD", "zz00"]:
        try:
            hex_to_bytes(bad)
            assert False, f"Should reject {bad!r}"
        except FormatError:
            pass
    print("  PASS: test_hex_rejects_bad_input")


# ==================================================================
# Unsigned 64-bit <-> bytes
# ==================================================================

def test_uint_roundtrip():
    """Edge values survive uint -> bytes -> uint."""
    for v in [0, 1, MASK64, (1 << 63) - 1, 1 << 63, 0x0123456789ABCDEF]:
        b = uint_to_bytes(v)
        assert len(b) == 8
        assert bytes_to_uint(b) == v
    assert uint_to_bytes(1) == b"\x00" * 7 + b"\x01"
    assert uint_to_bytes(MASK64) == b"\xff" * 8
    print("  PASS: test_uint_roundtrip")


def test_byte_order_matches_numeric_order():
    """Big-endian bytes compare like the integers they encode."""
    values = [0, 1, 255, 256, 1 << 32, (1 << 63) - 1, 1 << 63, MASK64 - 1, MASK64]
    encoded = [uint_to_bytes(v) for v in values]
    assert encoded == sorted(encoded)
    print("  PASS: test_byte_order_matches_numeric_order")


def test_uint_rejects_out_of_range():
    for bad in [-1, MASK64 + 1]:
        try:
            uint_to_bytes(bad)
            assert False, f"Should reject {bad}"
        except RangeError:
            pass
    print("  PASS: test_uint_rejects_out_of_range")


def test_bytes_length_enforced():
    for bad in [b"", b"\x00" * 7, b"\x00" * 9]:
        try:
            bytes_to_uint(bad)
            assert False, f"Should reject {len(bad)} bytes"
        except LengthError as err:
            assert err.expected == 8
            assert err.actual == len(bad)
    print("  PASS: test_bytes_length_enforced")


def test_length_error_is_format_error():
    assert issubclass(LengthError, FormatError)
    assert issubclass(RangeError, ValidationError)
    assert issubclass(FormatError, ValueError)
    print("  PASS: test_length_error_is_format_error")


# ==================================================================
# SignedInt64 tag
# ==================================================================

def test_signed_int_rejected_by_unsigned_path():
    """A signed-storage value cannot be encoded as unsigned bytes."""
    try:
        uint_to_bytes(SignedInt64(5))
        assert False, "Should reject SignedInt64"
    except ValidationError:
        pass
    print("  PASS: test_signed_int_rejected_by_unsigned_path")


def test_signed_int_bounds():
    assert SignedInt64(-(1 << 63)) == -(1 << 63)
    assert SignedInt64((1 << 63) - 1) == (1 << 63) - 1
    assert SignedInt64(7) + 1 == 8
    for bad in [1 << 63, -(1 << 63) - 1]:
        try:
            SignedInt64(bad)
            assert False, f"Should reject {bad}"
        except RangeError:
            pass
    try:
        SignedInt64(1.0)
        assert False, "Should reject float"
    except ValidationError:
        pass
    print("  PASS: test_signed_int_bounds")


# ==================================================================
# Runner
# ==================================================================

def run_all():
    print("=" * 60)
    print("Nano64 Codec Tests")
    print("=" * 60)

    test_hex_roundtrip()
    test_hex_prefix_and_separator()
    test_hex_rejects_bad_input()
    test_uint_roundtrip()
    test_byte_order_matches_numeric_order()
    test_uint_rejects_out_of_range()
    test_bytes_length_enforced()
    test_length_error_is_format_error()
    test_signed_int_rejected_by_unsigned_path()
    test_signed_int_bounds()

    print("\nALL TESTS PASSED")


if __name__ == "__main__":
    run_all()
