"""
nano64_core/ranges.py - Range-query bounds for Nano64 keys.

For an inclusive millisecond interval [start, end] the smallest
possible ID has random bits all zero at `start`, and the largest has
random bits all one at `end`:

    low  = start << 20
    high = (end << 20) | 0xFFFFF

Every ID with a timestamp inside the interval lies in [low, high], and
no ID outside it does. The bounds are exposed as 8-byte big-endian
values for BLOB/BINARY columns, and (via signed.py) as signed integers
for BIGINT/INTEGER columns:

    SELECT * FROM events WHERE id BETWEEN ? AND ?
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, StrictInt, model_validator
from pydantic import ValidationError as PydanticValidationError

from .codec import uint_to_bytes
from .errors import Nano64Error, RangeError, ValidationError
from .nano64 import MAX_TIMESTAMP, RANDOM_BITS, RANDOM_MASK, TIMESTAMP_BITS


class TimeRange(BaseModel):
    """An inclusive millisecond interval, validated for the 44-bit field."""

    model_config = ConfigDict(frozen=True)

    ts_start: StrictInt
    ts_end: StrictInt

    @model_validator(mode="after")
    def validate_bounds(self) -> "TimeRange":
        if self.ts_start < 0 or self.ts_end < 0:
            raise RangeError("timestamps must be non-negative")
        if self.ts_start > self.ts_end:
            raise RangeError("start must not exceed end")
        if self.ts_start > MAX_TIMESTAMP or self.ts_end > MAX_TIMESTAMP:
            raise RangeError(f"timestamp exceeds {TIMESTAMP_BITS}-bit range")
        return self

    @property
    def low(self) -> int:
        """Smallest ID value at ts_start (random field zero)."""
        return self.ts_start << RANDOM_BITS

    @property
    def high(self) -> int:
        """Largest ID value at ts_end (random field all ones)."""
        return (self.ts_end << RANDOM_BITS) | RANDOM_MASK


def time_range(ts_start: int, ts_end: int) -> TimeRange:
    """Build a TimeRange, surfacing failures as Nano64 errors."""
    try:
        return TimeRange(ts_start=ts_start, ts_end=ts_end)
    except PydanticValidationError as err:
        # Validators raise our own errors; pydantic wraps them in ctx.
        for detail in err.errors():
            cause = detail.get("ctx", {}).get("error")
            if isinstance(cause, Nano64Error):
                raise cause from None
        raise ValidationError(
            f"invalid time range: {err.errors()[0]['msg']}"
        ) from err


def range_u64(ts_start: int, ts_end: int) -> Tuple[int, int]:
    """Inclusive unsigned bounds (low, high) for [ts_start, ts_end]."""
    bounds = time_range(ts_start, ts_end)
    return bounds.low, bounds.high


def range_to_bytes(ts_start: int, ts_end: int) -> Tuple[bytes, bytes]:
    """Inclusive 8-byte big-endian bounds for a binary-column query."""
    low, high = range_u64(ts_start, ts_end)
    return uint_to_bytes(low), uint_to_bytes(high)
