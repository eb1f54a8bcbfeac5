"""
nano64_core/crypto.py - Encrypted Nano64 IDs (AES-GCM).

Uses the Python `cryptography` library exclusively. No custom crypto.

A plain Nano64 exposes its creation time to anyone who sees it. The
encrypted form hides it behind AES-GCM:

    payload = IV (12 bytes) || ciphertext (8 bytes) || GCM tag (16 bytes)
            = 36 bytes, 72 hex characters

A fresh random IV is drawn for every encryption. It is never derived
from the ID, otherwise equal timestamps would produce recognisable
ciphertext patterns. Any bit flip anywhere in the payload fails tag
verification and raises AuthenticationError.

The key is owned by the caller. This module never logs, stores or
derives from it.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .codec import UINT64_BYTES, bytes_to_hex, hex_to_bytes
from .entropy import RNG, Clock, default_rng, secure_random_bytes, system_clock
from .errors import AuthenticationError, FormatError, LengthError, ValidationError
from .log import get_logger
from .nano64 import Nano64

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

IV_LENGTH = 12
TAG_LENGTH = 16
CIPHERTEXT_LENGTH = UINT64_BYTES + TAG_LENGTH
PAYLOAD_LENGTH = IV_LENGTH + CIPHERTEXT_LENGTH

AES_KEY_BITS = (128, 192, 256)


# ---------------------------------------------------------------------------
# AEAD capability
# ---------------------------------------------------------------------------

class AeadCipher(Protocol):
    """Authenticated encryption without associated data.

    encrypt returns ciphertext || tag. decrypt raises AuthenticationError
    when the tag does not verify and must not return partial plaintext.
    """

    def encrypt(self, key: Any, iv: bytes, plaintext: bytes) -> bytes:
        ...

    def decrypt(self, key: Any, iv: bytes, data: bytes) -> bytes:
        ...


class AesGcmCipher:
    """AES-GCM with a 128-bit tag, backed by `cryptography`."""

    def encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        return AESGCM(key).encrypt(iv, plaintext, None)

    def decrypt(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        try:
            return AESGCM(key).decrypt(iv, data, None)
        except InvalidTag as err:
            raise AuthenticationError(
                "encrypted payload failed authentication"
            ) from err


def generate_aes_key(bits: int = 256) -> bytes:
    """Generate a random AES key of 128, 192 or 256 bits."""
    if bits not in AES_KEY_BITS:
        raise ValidationError(f"AES key size must be one of {AES_KEY_BITS}")
    return AESGCM.generate_key(bit_length=bits)


# ---------------------------------------------------------------------------
# Encrypted ID
# ---------------------------------------------------------------------------

class EncryptedNano64:
    """A Nano64 together with its encrypted payload.

    Args:
        id:      The decrypted ID.
        payload: The 36-byte IV || ciphertext || tag payload.
        key:     The key used (shared, caller-owned).
    """

    __slots__ = ("id", "_payload", "key")

    def __init__(self, id: Nano64, payload: bytes, key: Any) -> None:
        self.id = id
        self._payload = bytes(payload)
        self.key = key

    def to_encrypted_hex(self) -> str:
        """The payload as 72 uppercase hex characters."""
        return bytes_to_hex(self._payload)

    def to_encrypted_bytes(self) -> bytes:
        """The 36-byte payload."""
        return bytes(self._payload)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncryptedNano64):
            return NotImplemented
        return self.id == other.id and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self.id, self._payload))

    def __repr__(self) -> str:
        # never include the key
        return f"EncryptedNano64(payload='{self.to_encrypted_hex()}')"


class EncryptedNano64Factory:
    """Encrypts and decrypts Nano64 IDs under one bound key.

    Args:
        key:          AES key (16, 24 or 32 bytes) for the default cipher,
                      or whatever key object a custom cipher expects.
        clock:        Millisecond clock for generate_encrypted().
        cipher:       AEAD capability. Defaults to AesGcmCipher.
        random_bytes: Secure byte source for IVs.
    """

    def __init__(
        self,
        key: Any,
        clock: Clock = system_clock,
        cipher: Optional[AeadCipher] = None,
        random_bytes=secure_random_bytes,
    ) -> None:
        if cipher is None:
            if not isinstance(key, (bytes, bytearray)) or len(key) * 8 not in AES_KEY_BITS:
                raise ValidationError("AES-GCM key must be 16, 24 or 32 bytes")
            key = bytes(key)
            cipher = AesGcmCipher()
        self._key = key
        self._clock = clock
        self._cipher = cipher
        self._random_bytes = random_bytes
        logger.debug("encrypted factory bound", cipher=type(cipher).__name__)

    @property
    def key(self) -> Any:
        return self._key

    def _random_iv(self) -> bytes:
        iv = self._random_bytes(IV_LENGTH)
        if len(iv) != IV_LENGTH:
            raise LengthError(IV_LENGTH, len(iv), "IV")
        return iv

    # ------------------------------------------------------------------
    # Encrypt
    # ------------------------------------------------------------------

    def encrypt(self, nano_id: Nano64) -> EncryptedNano64:
        """Encrypt an existing ID under a fresh IV."""
        iv = self._random_iv()
        sealed = self._cipher.encrypt(self._key, iv, nano_id.to_bytes())
        if len(sealed) != CIPHERTEXT_LENGTH:
            raise LengthError(CIPHERTEXT_LENGTH, len(sealed), "ciphertext and tag")
        return EncryptedNano64(nano_id, iv + sealed, self._key)

    def generate_encrypted(
        self,
        timestamp: Optional[int] = None,
        rng: RNG = default_rng,
    ) -> EncryptedNano64:
        """Generate a new ID and encrypt it in one step."""
        ts = self._clock() if timestamp is None else timestamp
        return self.encrypt(Nano64.generate(ts, rng))

    # ------------------------------------------------------------------
    # Decrypt
    # ------------------------------------------------------------------

    def from_encrypted_bytes(self, payload: bytes) -> EncryptedNano64:
        """Decrypt a 36-byte payload.

        Raises:
            LengthError: Payload is not exactly 36 bytes.
            AuthenticationError: Tag verification failed (tampering or
                                 corruption).
            FormatError: Decrypted plaintext is not 8 bytes.
        """
        payload = bytes(payload)
        if len(payload) != PAYLOAD_LENGTH:
            raise LengthError(PAYLOAD_LENGTH, len(payload), "encrypted payload")

        iv = payload[:IV_LENGTH]
        sealed = payload[IV_LENGTH:]
        try:
            plaintext = self._cipher.decrypt(self._key, iv, sealed)
        except AuthenticationError:
            logger.warning(
                "encrypted payload rejected", payload_length=len(payload)
            )
            raise

        if len(plaintext) != UINT64_BYTES:
            raise FormatError("decryption yielded invalid data length")
        return EncryptedNano64(Nano64.from_bytes(plaintext), payload, self._key)

    def from_encrypted_hex(self, text: str) -> EncryptedNano64:
        """Decrypt a 72-character hex payload."""
        return self.from_encrypted_bytes(hex_to_bytes(text))

    def __repr__(self) -> str:
        return f"EncryptedNano64Factory(cipher={type(self._cipher).__name__})"


def encrypted_factory(
    key: Any,
    clock: Clock = system_clock,
    cipher: Optional[AeadCipher] = None,
    random_bytes: Callable[[int], bytes] = secure_random_bytes,
) -> EncryptedNano64Factory:
    """Bind a key; see EncryptedNano64Factory."""
    return EncryptedNano64Factory(
        key, clock=clock, cipher=cipher, random_bytes=random_bytes
    )
