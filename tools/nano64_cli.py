#!/usr/bin/env python3
"""
Nano64 CLI - Generate and inspect Nano64 identifiers.

Usage:
    python -m tools.nano64_cli generate [--count N] [--timestamp MS] [--monotonic]
    python -m tools.nano64_cli inspect <hex>
    python -m tools.nano64_cli range <start_ms> <end_ms> [--signed]
    python -m tools.nano64_cli signed <hex>
    python -m tools.nano64_cli unsigned <signed_int>

Commands:
    generate  - Print new IDs (dashed hex)
    inspect   - Decode an ID into its fields and encodings
    range     - Inclusive query bounds for a millisecond interval
    signed    - Signed-storage integer for an ID
    unsigned  - ID for a signed-storage integer

Logging follows NANO64_LOG_LEVEL / NANO64_JSON_LOGS.
"""

import argparse
import os
import sys
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nano64_core import (
    Nano64,
    Nano64Error,
    Nano64Settings,
    SignedNano64,
    bytes_to_hex,
    default_generator,
)


# ============================================================
# Commands
# ============================================================

def cmd_generate(count: int, timestamp: Optional[int], monotonic: bool) -> None:
    """Print `count` fresh IDs."""
    generator = default_generator()
    for _ in range(count):
        if monotonic:
            nano_id = generator.next(timestamp)
        else:
            nano_id = Nano64.generate(timestamp)
        print(nano_id.to_hex())


def cmd_inspect(text: str) -> None:
    """Render one ID field by field."""
    nano_id = Nano64.from_hex(text)
    print(f"  ID:        {nano_id.to_hex()}")
    print(f"  Plain hex: {nano_id.to_plain_hex()}")
    print(f"  Unsigned:  {nano_id.value}")
    print(f"  Signed:    {int(SignedNano64.from_id(nano_id))}")
    print(f"  Timestamp: {nano_id.timestamp}")
    print(f"  Date:      {nano_id.to_date().isoformat()}")
    print(f"  Random:    0x{nano_id.random:05X}")


def cmd_range(ts_start: int, ts_end: int, signed: bool) -> None:
    """Print BETWEEN bounds for a binary or signed-integer column."""
    if signed:
        low, high = SignedNano64.time_range_to_ints(ts_start, ts_end)
        print(f"  low:  {int(low)}")
        print(f"  high: {int(high)}")
    else:
        low, high = Nano64.time_range_to_bytes(ts_start, ts_end)
        print(f"  low:  {bytes_to_hex(low)}")
        print(f"  high: {bytes_to_hex(high)}")


def cmd_signed(text: str) -> None:
    print(int(SignedNano64.from_id(Nano64.from_hex(text))))


def cmd_unsigned(value: int) -> None:
    print(SignedNano64.to_id(value).to_hex())


# ============================================================
# Main
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Nano64 CLI - generate and inspect 64-bit time-sortable IDs",
        prog="python -m tools.nano64_cli",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate new IDs")
    gen.add_argument("--count", "-n", type=int, default=1, help="How many IDs")
    gen.add_argument("--timestamp", "-t", type=int, default=None,
                     help="Epoch milliseconds (default: now)")
    gen.add_argument("--monotonic", "-m", action="store_true",
                     help="Strictly increasing output")

    insp = sub.add_parser("inspect", help="Decode an ID")
    insp.add_argument("id", help="16-char or dashed 17-char hex")

    rng = sub.add_parser("range", help="Query bounds for [start, end]")
    rng.add_argument("start", type=int, help="Start epoch ms (inclusive)")
    rng.add_argument("end", type=int, help="End epoch ms (inclusive)")
    rng.add_argument("--signed", "-s", action="store_true",
                     help="Signed 64-bit integer bounds")

    sgn = sub.add_parser("signed", help="ID to signed-storage integer")
    sgn.add_argument("id", help="16-char or dashed 17-char hex")

    uns = sub.add_parser("unsigned", help="Signed-storage integer to ID")
    uns.add_argument("value", type=int, help="Signed 64-bit integer")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Nano64Settings()
    except PydanticValidationError as err:
        print(f"  ERROR: invalid NANO64_* settings: {err.errors()[0]['msg']}")
        return 1
    settings.apply_logging()

    try:
        if args.command == "generate":
            cmd_generate(args.count, args.timestamp, args.monotonic)
        elif args.command == "inspect":
            cmd_inspect(args.id)
        elif args.command == "range":
            cmd_range(args.start, args.end, args.signed)
        elif args.command == "signed":
            cmd_signed(args.id)
        elif args.command == "unsigned":
            cmd_unsigned(args.value)
    except Nano64Error as err:
        print(f"  ERROR: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
