"""
nano64_core/nano64.py - The Nano64 identifier.

A 64-bit, time-sortable identifier:

    | 44-bit field              | 20-bit field |
    |---------------------------|--------------|
    | UNIX epoch (milliseconds) | random       |

    Layout: [63..20] timestamp (ms), [19..0] random

The timestamp field covers ~557 years from 1970-01-01 (up to ~2527).
The 20 random bits give 1,048,576 combinations per millisecond; collision
probability reaches ~1% after ~145 IDs generated within the same ms.

Canonical form is an unsigned 64-bit integer. Wire form is 8 bytes
big-endian. Display form is a 17-character dashed hex string
("0018B9E080D-54321"); the 16-character plain hex form round-trips too.
Numeric order, byte order and plain-hex order all agree, which is what
makes the type useful as a database key.
"""

from __future__ import annotations

import functools
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from .codec import (
    MASK64,
    bytes_to_uint,
    hex_to_bytes,
    normalize_hex,
    reject_signed,
    uint_to_bytes,
)
from .entropy import RNG, Clock, default_rng, secure_random_bytes, system_clock
from .errors import FormatError, RangeError, ValidationError

if TYPE_CHECKING:
    from .crypto import AeadCipher, EncryptedNano64Factory
    from .monotonic import MonotonicGenerator


# ---------------------------------------------------------------------------
# Bit layout
# ---------------------------------------------------------------------------

TIMESTAMP_BITS = 44
RANDOM_BITS = 20

TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1
RANDOM_MASK = (1 << RANDOM_BITS) - 1
MAX_TIMESTAMP = TIMESTAMP_MASK

# ceil(44 / 4) hex digits carry the timestamp field
_HEX_SPLIT = 11
_HEX_DIGITS = 16

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _require_int(value: object, name: str) -> int:
    # bool is an int subclass; a True timestamp is always a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return value


def check_timestamp(timestamp: object) -> int:
    """Validate an epoch-millisecond timestamp for the 44-bit field."""
    ts = _require_int(timestamp, "timestamp")
    if ts < 0:
        raise RangeError("timestamp cannot be negative")
    if ts > MAX_TIMESTAMP:
        raise RangeError(f"timestamp exceeds {TIMESTAMP_BITS}-bit range")
    return ts


def draw_random(rng: RNG) -> int:
    """Draw the 20-bit random field, refusing draws wider than the field."""
    rand = rng(RANDOM_BITS)
    if isinstance(rand, bool) or not isinstance(rand, int):
        raise ValidationError("RNG must return an integer")
    if rand < 0 or rand > RANDOM_MASK:
        raise ValidationError(
            f"RNG returned {rand}, outside the {RANDOM_BITS}-bit random field"
        )
    return rand


def pack(timestamp: int, rand: int) -> int:
    """Pack already-validated fields into the unsigned 64-bit value."""
    return (timestamp << RANDOM_BITS) | rand


# ---------------------------------------------------------------------------
# Identifier
# ---------------------------------------------------------------------------

@functools.total_ordering
class Nano64:
    """A 64-bit time-sortable identifier. Immutable.

    Prefer the factory methods (generate, from_hex, from_bytes, from_int)
    over calling the constructor directly.

    Args:
        value: Unsigned 64-bit integer. Values outside [0, 2^64 - 1] and
               values tagged as signed-storage (SignedInt64) are refused.
    """

    __slots__ = ("_u",)

    def __init__(self, value: int) -> None:
        reject_signed(value)
        value = _require_int(value, "Nano64 value")
        if value < 0 or value > MASK64:
            raise RangeError("Nano64 value is out of the unsigned 64-bit range")
        object.__setattr__(self, "_u", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Nano64 is immutable")

    def __reduce__(self):
        return (Nano64, (self._u,))

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def value(self) -> int:
        """The underlying unsigned 64-bit integer."""
        return self._u

    @property
    def timestamp(self) -> int:
        """Embedded UNIX epoch milliseconds."""
        return (self._u >> RANDOM_BITS) & TIMESTAMP_MASK

    @property
    def random(self) -> int:
        """The 20-bit random field."""
        return self._u & RANDOM_MASK

    def get_timestamp(self) -> int:
        return self.timestamp

    def to_date(self) -> datetime:
        """Timestamp as an aware UTC datetime (millisecond precision)."""
        return _EPOCH + timedelta(milliseconds=self.timestamp)

    # ------------------------------------------------------------------
    # Encodings
    # ------------------------------------------------------------------

    def to_hex(self) -> str:
        """17-character display form: TTTTTTTTTTT-RRRRR."""
        full = self.to_plain_hex()
        return f"{full[:_HEX_SPLIT]}-{full[_HEX_SPLIT:]}"

    def to_plain_hex(self) -> str:
        """16-character uppercase hex, no separator."""
        return f"{self._u:016X}"

    def to_bytes(self) -> bytes:
        """8-byte big-endian encoding."""
        return uint_to_bytes(self._u)

    @classmethod
    def from_hex(cls, text: str) -> "Nano64":
        """Parse the 16-char or 17-char dashed form, any case, optional 0x."""
        clean = normalize_hex(text)
        if len(clean) != _HEX_DIGITS:
            raise FormatError(
                "hex string must contain exactly 16 hexadecimal characters"
            )
        return cls(bytes_to_uint(hex_to_bytes(clean)))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Nano64":
        """Decode an 8-byte big-endian sequence."""
        return cls(bytes_to_uint(data))

    @classmethod
    def from_int(cls, value: int) -> "Nano64":
        """Build from any integer, masking it to the unsigned 64-bit range.

        Use only where the source is known-bounded (arithmetic results);
        prefer the validating constructor for external input.
        """
        reject_signed(value)
        return cls(_require_int(value, "value") & MASK64)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    @staticmethod
    def compare(a: "Nano64", b: "Nano64") -> int:
        """Return -1 if a < b, 0 if a == b, 1 if a > b (unsigned order)."""
        if a._u < b._u:
            return -1
        if a._u > b._u:
            return 1
        return 0

    def equals(self, other: "Nano64") -> bool:
        return self._u == other._u

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nano64):
            return NotImplemented
        return self._u == other._u

    def __lt__(self, other: "Nano64") -> bool:
        if not isinstance(other, Nano64):
            return NotImplemented
        return self._u < other._u

    def __hash__(self) -> int:
        return hash(self._u)

    def __int__(self) -> int:
        return self._u

    def __repr__(self) -> str:
        return f"Nano64('{self.to_hex()}')"

    def __str__(self) -> str:
        return self.to_hex()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    @classmethod
    def generate(
        cls,
        timestamp: Optional[int] = None,
        rng: RNG = default_rng,
    ) -> "Nano64":
        """Generate a new ID from a timestamp and the RNG.

        Args:
            timestamp: UNIX epoch milliseconds. Defaults to the system clock.
            rng: Random source. Defaults to a cryptographically secure one.

        Raises:
            RangeError: If the timestamp is negative or exceeds 44 bits.
        """
        ts = check_timestamp(system_clock() if timestamp is None else timestamp)
        return cls(pack(ts, draw_random(rng)))

    @staticmethod
    def monotonic_factory(
        last_timestamp: int = -1, last_random: int = -1
    ) -> "MonotonicGenerator":
        """Create an independent monotonic generator with its own state."""
        from .monotonic import MonotonicGenerator

        return MonotonicGenerator(last_timestamp, last_random)

    @classmethod
    def generate_monotonic(
        cls,
        timestamp: Optional[int] = None,
        rng: RNG = default_rng,
    ) -> "Nano64":
        """Generate from the process-wide monotonic generator.

        Thread-safe. Every ID returned by this call is strictly greater
        than every earlier one in this process.
        """
        from .monotonic import default_generator

        return default_generator().next(timestamp, rng)

    # ------------------------------------------------------------------
    # Range queries and encryption
    # ------------------------------------------------------------------

    @staticmethod
    def time_range_to_bytes(ts_start: int, ts_end: int) -> Tuple[bytes, bytes]:
        """Inclusive 8-byte bounds for IDs with timestamps in [start, end]."""
        from .ranges import range_to_bytes

        return range_to_bytes(ts_start, ts_end)

    @staticmethod
    def encrypted_factory(
        key: bytes,
        clock: Clock = system_clock,
        cipher: Optional["AeadCipher"] = None,
        random_bytes: Callable[[int], bytes] = secure_random_bytes,
    ) -> "EncryptedNano64Factory":
        """Bind an AES-GCM key (16, 24 or 32 bytes) for encrypted IDs."""
        from .crypto import EncryptedNano64Factory

        return EncryptedNano64Factory(
            key, clock=clock, cipher=cipher, random_bytes=random_bytes
        )
