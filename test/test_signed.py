"""
test/test_signed.py - Tests for nano64_core.signed

Run:  python test/test_signed.py
"""

import os
import random
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nano64_core import (
    MASK64,
    Nano64,
    RangeError,
    SIGN_BIT,
    SignedInt64,
    SignedNano64,
    ValidationError,
    from_signed,
    range_u64,
    to_signed,
)


EDGE_VALUES = [0, 1, SIGN_BIT - 1, SIGN_BIT, SIGN_BIT + 1, MASK64 - 1, MASK64]


# ---------------------------------------------------------------------------
# Bijection
# ---------------------------------------------------------------------------

def test_roundtrip_edges():
    for v in EDGE_VALUES:
        s = SignedNano64.from_id(Nano64(v))
        assert isinstance(s, SignedInt64)
        assert SignedInt64.MIN <= s <= SignedInt64.MAX
        assert SignedNano64.to_id(s).value == v
    print("  PASS: test_roundtrip_edges")


def test_known_mapping():
    assert SignedNano64.from_id(Nano64(0)) == -(1 << 63)
    assert SignedNano64.from_id(Nano64(SIGN_BIT)) == 0
    assert SignedNano64.from_id(Nano64(MASK64)) == (1 << 63) - 1
    assert SignedNano64.to_id(0).value == SIGN_BIT
    print("  PASS: test_known_mapping")


def test_order_preserved():
    r = random.Random(42)
    values = EDGE_VALUES + [r.getrandbits(64) for _ in range(500)]
    values.sort()
    signed = [SignedNano64.from_id(Nano64(v)) for v in values]
    assert signed == sorted(signed)
    for a, b in zip(values, values[1:]):
        if a < b:
            assert to_signed(Nano64(a)) < to_signed(Nano64(b))
    print("  PASS: test_order_preserved")


def test_aliases():
    n = Nano64.generate(123456)
    assert to_signed(n) == SignedNano64.from_id(n)
    assert from_signed(to_signed(n)) == n
    print("  PASS: test_aliases")


# ---------------------------------------------------------------------------
# Timestamp shortcut and ranges
# ---------------------------------------------------------------------------

def test_get_timestamp_from_signed():
    for ts in [0, 1, 1_700_000_000_000, (1 << 44) - 1]:
        n = Nano64.generate(ts)
        s = SignedNano64.from_id(n)
        assert SignedNano64.get_timestamp(s) == ts
        assert SignedNano64.get_timestamp(int(s)) == ts
    print("  PASS: test_get_timestamp_from_signed")


def test_signed_range_matches_unsigned_range():
    s, e = 1729000000000, 1731000000000
    low, high = SignedNano64.time_range_to_ints(s, e)
    ulow, uhigh = range_u64(s, e)
    assert low == ulow - SIGN_BIT
    assert high == uhigh - SIGN_BIT
    assert isinstance(low, SignedInt64) and isinstance(high, SignedInt64)
    inside = SignedNano64.from_id(Nano64.generate(s + 1))
    before = SignedNano64.from_id(Nano64.generate(s - 1))
    after = SignedNano64.from_id(Nano64.generate(e + 1))
    assert low <= inside <= high
    assert before < low
    assert after > high
    print("  PASS: test_signed_range_matches_unsigned_range")


# ---------------------------------------------------------------------------
# Misuse
# ---------------------------------------------------------------------------

def test_signed_value_refused_by_unsigned_constructor():
    s = SignedNano64.from_id(Nano64.generate(1_700_000_000_000))
    for ctor in (Nano64, Nano64.from_int):
        try:
            ctor(s)
            assert False, "Should refuse signed-storage value"
        except ValidationError:
            pass
    print("  PASS: test_signed_value_refused_by_unsigned_constructor")


def test_to_id_rejects_out_of_signed_range():
    for bad in [1 << 63, -(1 << 63) - 1]:
        try:
            SignedNano64.to_id(bad)
            assert False, f"Should reject {bad}"
        except RangeError:
            pass
    print("  PASS: test_to_id_rejects_out_of_signed_range")


if __name__ == "__main__":
    print("=" * 60)
    print("Nano64 Signed Storage Tests")
    print("=" * 60)
    test_roundtrip_edges()
    test_known_mapping()
    test_order_preserved()
    test_aliases()
    test_get_timestamp_from_signed()
    test_signed_range_matches_unsigned_range()
    test_signed_value_refused_by_unsigned_constructor()
    test_to_id_rejects_out_of_signed_range()
    print("\nALL TESTS PASSED")
