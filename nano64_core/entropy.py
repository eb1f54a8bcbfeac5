"""
nano64_core/entropy.py - Entropy and clock capabilities.

Generators never reach for ambient globals directly; they take an RNG
and (where relevant) a clock as arguments. That keeps the monotonic
overflow and clock-regression paths deterministic under test.

    RNG:   (bits: int in [1, 32]) -> int with `bits` low-order random bits
    Clock: () -> int milliseconds since the UNIX epoch
"""

from __future__ import annotations

import os
import random
import secrets
import time
from typing import Callable

from .errors import CapabilityError, RangeError


RNG = Callable[[int], int]
Clock = Callable[[], int]

MIN_RNG_BITS = 1
MAX_RNG_BITS = 32


def _check_bits(bits: int) -> None:
    if bits < MIN_RNG_BITS or bits > MAX_RNG_BITS:
        raise RangeError(
            f"RNG bits must be between {MIN_RNG_BITS} and {MAX_RNG_BITS}"
        )


# ---------------------------------------------------------------------------
# Random sources
# ---------------------------------------------------------------------------

def default_rng(bits: int) -> int:
    """Cryptographically secure RNG backed by the `secrets` module."""
    _check_bits(bits)
    try:
        return secrets.randbits(bits)
    except NotImplementedError as err:
        raise CapabilityError("no secure randomness source available") from err


def very_unsafe_rng(bits: int) -> int:
    """Non-secure RNG backed by `random`.

    The output is predictable. Use only for tests, demos and benchmarks,
    never for identifiers that leave the process.
    """
    _check_bits(bits)
    return random.getrandbits(bits)


def secure_random_bytes(length: int) -> bytes:
    """Return `length` bytes from the operating system CSPRNG."""
    try:
        return os.urandom(length)
    except NotImplementedError as err:
        raise CapabilityError("no secure randomness source available") from err


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

def system_clock() -> int:
    """Current UNIX epoch milliseconds, integer arithmetic only."""
    return time.time_ns() // 1_000_000
