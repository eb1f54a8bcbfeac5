"""
nano64_core/errors.py - Error taxonomy for Nano64.

All failures are local and synchronous. Validation runs before any
state is touched, so a raised error never leaves a generator half-updated.

    Nano64Error
    ├── ValidationError      out-of-domain input
    │   └── RangeError       integer outside its allowed range
    ├── FormatError          malformed textual / binary encoding
    │   └── LengthError      wrong byte or payload length
    ├── AuthenticationError  AEAD tag did not verify
    └── CapabilityError      platform capability missing
"""


class Nano64Error(Exception):
    """Base exception for all Nano64 errors."""


class ValidationError(Nano64Error, ValueError):
    """Input lies outside the identifier domain."""


class RangeError(ValidationError):
    """An integer (timestamp, bit count, raw value) is out of range."""


class FormatError(Nano64Error, ValueError):
    """A hex string, byte sequence or payload is malformed."""


class LengthError(FormatError):
    """A byte sequence or payload has the wrong length."""

    def __init__(self, expected: int, actual: int, what: str = "input") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} must be exactly {expected} bytes, got {actual}"
        )


class AuthenticationError(Nano64Error):
    """Encrypted payload failed tag verification (tampered or corrupted)."""


class CapabilityError(Nano64Error, RuntimeError):
    """A required platform capability (e.g. secure randomness) is unavailable."""
