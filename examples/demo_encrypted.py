#!/usr/bin/env python3
"""
Nano64 Encrypted ID Demo

Shows why the encrypted form exists: a plain Nano64 leaks its creation
time, the 36-byte AES-GCM payload does not, and any tampering with the
payload is caught.

Flow:
  1. Generate a key and bind an encrypted factory
  2. Encrypt an ID twice: different payloads, same ID (fresh IVs)
  3. Decrypt the hex payload back to the ID
  4. Flip one bit, decode again -> AuthenticationError

Run:
    python examples/demo_encrypted.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nano64_core import (
    AuthenticationError,
    Nano64,
    Nano64Settings,
    encrypted_factory,
    generate_aes_key,
)


def main():
    settings = Nano64Settings()
    settings.apply_logging()

    print("=" * 72)
    print("  Nano64 Encrypted ID Demo")
    print("=" * 72)

    key = generate_aes_key(settings.aes_key_bits)
    factory = encrypted_factory(key)

    nano_id = Nano64.generate()
    first = factory.encrypt(nano_id)
    second = factory.encrypt(nano_id)

    print(f"\n  Plain ID:     {nano_id.to_hex()}  ({nano_id.to_date().isoformat()})")
    print(f"  Encrypted #1: {first.to_encrypted_hex()}")
    print(f"  Encrypted #2: {second.to_encrypted_hex()}")

    decoded = factory.from_encrypted_hex(first.to_encrypted_hex())
    print(f"\n  Decrypted:    {decoded.id.to_hex()}")
    print(f"  Round trip:   {'OK' if decoded.id == nano_id else 'MISMATCH'}")

    tampered = bytearray(first.to_encrypted_bytes())
    tampered[20] ^= 0x01
    try:
        factory.from_encrypted_bytes(bytes(tampered))
        print("\n  Tampered payload: ACCEPTED (unexpected)")
    except AuthenticationError as err:
        print(f"\n  Tampered payload: rejected ({err})")
    print()


if __name__ == "__main__":
    main()
