"""
nano64_core/monotonic.py - Monotonic Nano64 generation.

A small state machine over two integers, (last_timestamp, last_random),
both -1 until the first ID is emitted.

On every next(ts):
    t = max(ts, last_timestamp)          clock regression is clamped
    t == last_timestamp:
        r = (last_random + 1) & RANDOM_MASK
        r == 0   -> emit (t + 1, 0)      random field overflowed
        else     -> emit (t, r)
    t >  last_timestamp:
        emit (t, rng(20))

Each ID is strictly greater than every earlier ID from the same
instance, whatever timestamps the caller supplies. The RNG is only
consulted when the millisecond advances.

The overflow path deliberately resets the random field to exactly 0
rather than drawing fresh entropy for the advanced millisecond.

Guarantees hold within one instance only; there is no coordination
across processes or machines.
"""

from __future__ import annotations

import threading
from typing import Optional, Tuple

from .entropy import RNG, default_rng, system_clock
from .errors import RangeError
from .log import get_logger
from .nano64 import (
    MAX_TIMESTAMP,
    RANDOM_MASK,
    Nano64,
    _require_int,
    check_timestamp,
    draw_random,
    pack,
)

logger = get_logger(__name__)


class MonotonicGenerator:
    """Stateful generator producing strictly increasing Nano64 IDs.

    Independent instances never interfere with each other. Each instance
    serializes next() behind its own lock, so one generator may be shared
    between threads.

    Args:
        last_timestamp: Starting timestamp state (-1 = nothing emitted).
        last_random:    Starting random-field state (-1 = nothing emitted).
    """

    def __init__(self, last_timestamp: int = -1, last_random: int = -1) -> None:
        last_timestamp = _require_int(last_timestamp, "last_timestamp")
        last_random = _require_int(last_random, "last_random")
        if last_timestamp < -1 or last_timestamp > MAX_TIMESTAMP:
            raise RangeError("last_timestamp must be -1 or a valid timestamp")
        if last_random < -1 or last_random > RANDOM_MASK:
            raise RangeError("last_random must be -1 or a valid random field")
        self._last_timestamp = last_timestamp
        self._last_random = last_random
        self._lock = threading.Lock()

    @property
    def state(self) -> Tuple[int, int]:
        """(last_timestamp, last_random) as of the last emitted ID."""
        with self._lock:
            return self._last_timestamp, self._last_random

    def next(
        self,
        timestamp: Optional[int] = None,
        rng: RNG = default_rng,
    ) -> Nano64:
        """Generate the next ID in this generator's sequence.

        Args:
            timestamp: UNIX epoch milliseconds. Defaults to the system clock.
            rng: Random source, used only when the timestamp advances.

        Raises:
            RangeError: If the timestamp is negative or exceeds 44 bits, or
                        if an overflow would advance past the last
                        representable millisecond. State is unchanged.
        """
        ts = check_timestamp(system_clock() if timestamp is None else timestamp)

        with self._lock:
            t = max(ts, self._last_timestamp)
            if t > ts:
                logger.debug(
                    "clock regression clamped",
                    requested=ts,
                    clamped_to=t,
                )

            if t == self._last_timestamp:
                rand = (self._last_random + 1) & RANDOM_MASK
                if rand == 0:
                    advanced = t + 1
                    if advanced > MAX_TIMESTAMP:
                        logger.warning("timestamp space exhausted", millisecond=t)
                        raise RangeError(
                            "random field overflow at the last representable "
                            "millisecond"
                        )
                    logger.debug(
                        "random field overflow, advancing timestamp",
                        millisecond=t,
                        advanced_to=advanced,
                    )
                    self._last_timestamp = advanced
                    self._last_random = 0
                    return Nano64(pack(advanced, 0))
            else:
                rand = draw_random(rng)

            self._last_timestamp = t
            self._last_random = rand
            return Nano64(pack(t, rand))

    def __repr__(self) -> str:
        ts, rand = self.state
        return f"MonotonicGenerator(last_timestamp={ts}, last_random={rand})"


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

# The one piece of module-level mutable state. Guarded by the generator's
# own lock; creation is guarded by _default_lock.
_default: Optional[MonotonicGenerator] = None
_default_lock = threading.Lock()


def default_generator() -> MonotonicGenerator:
    """Return the process-wide monotonic generator, creating it once."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = MonotonicGenerator()
    return _default


def reset_default_generator() -> None:
    """Replace the process-wide generator with a fresh one (for tests)."""
    global _default
    with _default_lock:
        _default = MonotonicGenerator()
