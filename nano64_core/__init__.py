"""
Nano64 Core - compact 64-bit time-sortable identifiers.

    [63..20] timestamp (44 bits, epoch ms)  [19..0] random (20 bits)

Stateless and monotonic generation, hex/byte codecs, range-query bounds
for binary and signed-integer columns, and AES-GCM encrypted IDs.
"""

__version__ = "0.1.0"

from .errors import (
    Nano64Error,
    ValidationError,
    RangeError,
    FormatError,
    LengthError,
    AuthenticationError,
    CapabilityError,
)
from .codec import (
    MASK64,
    SignedInt64,
    bytes_to_uint,
    uint_to_bytes,
    hex_to_bytes,
    bytes_to_hex,
)
from .entropy import (
    RNG,
    Clock,
    default_rng,
    very_unsafe_rng,
    secure_random_bytes,
    system_clock,
)
from .nano64 import (
    Nano64,
    TIMESTAMP_BITS,
    RANDOM_BITS,
    TIMESTAMP_MASK,
    RANDOM_MASK,
    MAX_TIMESTAMP,
)
from .monotonic import MonotonicGenerator, default_generator
from .ranges import TimeRange, range_u64, range_to_bytes
from .signed import SignedNano64, SIGN_BIT, to_signed, from_signed
from .crypto import (
    AeadCipher,
    AesGcmCipher,
    EncryptedNano64,
    EncryptedNano64Factory,
    encrypted_factory,
    generate_aes_key,
    IV_LENGTH,
    PAYLOAD_LENGTH,
)
from .config import Nano64Settings
from .log import configure_logging, get_logger
