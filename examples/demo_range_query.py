#!/usr/bin/env python3
"""
Nano64 Range Query Demo

Stores monotonic Nano64 IDs in SQLite twice, once as an 8-byte BLOB key
and once as a signed INTEGER key, then pulls one day back out of each
table with a plain BETWEEN query.

Flow:
  1. Generate 1000 IDs per millisecond at five timestamps
  2. Insert into `events_blob` (BLOB) and `events_int` (INTEGER)
  3. Query a single millisecond and a multi-timestamp span
  4. Show that both column types return the same rows

Run:
    python examples/demo_range_query.py
"""

import os
import sqlite3
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nano64_core import MonotonicGenerator, Nano64, Nano64Settings, SignedNano64


ROWS_PER_MS = 1000
BASE_TIMESTAMPS = [
    100,              # 1970-01-01
    1729000000000,
    1730000000000,
    1731000000000,
    17580000000000,   # 2527-02-01
]


# ============================================================
# Setup
# ============================================================

def build_database() -> sqlite3.Connection:
    """Create both tables and fill them from one monotonic generator."""
    conn = sqlite3.connect(":memory:")
    conn.executescript("""
        CREATE TABLE events_blob (id BLOB PRIMARY KEY, ts INTEGER NOT NULL);
        CREATE TABLE events_int (id INTEGER PRIMARY KEY, ts INTEGER NOT NULL);
    """)

    generator = MonotonicGenerator()
    ids = [
        generator.next(ts)
        for ts in BASE_TIMESTAMPS
        for _ in range(ROWS_PER_MS)
    ]
    conn.executemany(
        "INSERT INTO events_blob (id, ts) VALUES (?, ?)",
        [(i.to_bytes(), i.timestamp) for i in ids],
    )
    conn.executemany(
        "INSERT INTO events_int (id, ts) VALUES (?, ?)",
        [(int(SignedNano64.from_id(i)), i.timestamp) for i in ids],
    )
    conn.commit()
    return conn


# ============================================================
# Queries
# ============================================================

def query_blob(conn: sqlite3.Connection, start: int, end: int) -> list:
    low, high = Nano64.time_range_to_bytes(start, end)
    return conn.execute(
        "SELECT id, ts FROM events_blob WHERE id BETWEEN ? AND ? ORDER BY id",
        (low, high),
    ).fetchall()


def query_int(conn: sqlite3.Connection, start: int, end: int) -> list:
    low, high = SignedNano64.time_range_to_ints(start, end)
    return conn.execute(
        "SELECT id, ts FROM events_int WHERE id BETWEEN ? AND ? ORDER BY id",
        (int(low), int(high)),
    ).fetchall()


def main():
    Nano64Settings().apply_logging()

    print("=" * 72)
    print("  Nano64 Range Query Demo")
    print("=" * 72)

    conn = build_database()
    total = conn.execute("SELECT count(*) FROM events_blob").fetchone()[0]
    print(f"\n  Inserted {total} rows per table")

    spans = [
        ("single ms", BASE_TIMESTAMPS[2], BASE_TIMESTAMPS[2]),
        ("three timestamps", BASE_TIMESTAMPS[2], BASE_TIMESTAMPS[4]),
        ("empty ms", 1800000000000, 1800000000000),
    ]
    for label, start, end in spans:
        blob_rows = query_blob(conn, start, end)
        int_rows = query_int(conn, start, end)
        same = [
            Nano64.from_bytes(b[0]) for b in blob_rows
        ] == [SignedNano64.to_id(r[0]) for r in int_rows]
        print(f"\n  [{label}] {start} .. {end}")
        print(f"    BLOB rows:    {len(blob_rows)}")
        print(f"    INTEGER rows: {len(int_rows)}")
        print(f"    Same IDs:     {'yes' if same else 'NO'}")
        if blob_rows:
            first = Nano64.from_bytes(blob_rows[0][0])
            last = Nano64.from_bytes(blob_rows[-1][0])
            print(f"    First / last: {first.to_hex()} / {last.to_hex()}")

    conn.close()
    print()


if __name__ == "__main__":
    main()
