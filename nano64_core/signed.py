"""
nano64_core/signed.py - Signed 64-bit storage for Nano64 IDs.

Many storage engines only offer signed 64-bit integer columns
(PostgreSQL BIGINT, SQLite INTEGER). Shifting the unsigned value down by
2^63 maps [0, 2^64 - 1] onto [-2^63, 2^63 - 1] while preserving order:

    a < b (unsigned)  <=>  a - 2^63 < b - 2^63 (signed)

so range bounds stay valid after the same shift.

WARNING: a signed-form value must never be fed to an unsigned decode
path (Nano64(), Nano64.from_int(), uint_to_bytes()). Doing so silently
corrupts both the timestamp and the ordering. Values produced here are
SignedInt64 instances, which those paths refuse.
"""

from __future__ import annotations

from typing import Tuple

from .codec import SignedInt64
from .nano64 import RANDOM_BITS, TIMESTAMP_MASK, Nano64
from .ranges import range_u64

SIGN_BIT = 1 << 63


def _as_signed(value: int) -> SignedInt64:
    return value if isinstance(value, SignedInt64) else SignedInt64(value)


class SignedNano64:
    """Conversions between Nano64 and order-preserving signed integers."""

    SIGN_BIT = SIGN_BIT

    @staticmethod
    def from_id(nano_id: Nano64) -> SignedInt64:
        """Signed-storage form of an ID (value - 2^63)."""
        return SignedInt64(nano_id.value - SIGN_BIT)

    @staticmethod
    def to_id(signed_value: int) -> Nano64:
        """Rebuild an ID from a value read out of a signed column."""
        signed_value = _as_signed(signed_value)
        return Nano64.from_int(int(signed_value) + SIGN_BIT)

    @staticmethod
    def time_range_to_ints(
        ts_start: int, ts_end: int
    ) -> Tuple[SignedInt64, SignedInt64]:
        """Inclusive signed bounds for a signed-integer-column query."""
        low, high = range_u64(ts_start, ts_end)
        return SignedInt64(low - SIGN_BIT), SignedInt64(high - SIGN_BIT)

    @staticmethod
    def get_timestamp(signed_value: int) -> int:
        """Timestamp straight from a signed value, no Nano64 built."""
        unsigned = int(_as_signed(signed_value)) + SIGN_BIT
        return (unsigned >> RANDOM_BITS) & TIMESTAMP_MASK


# Module-level aliases
to_signed = SignedNano64.from_id
from_signed = SignedNano64.to_id
