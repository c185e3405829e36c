#!/usr/bin/env python3
"""
Add a pet or adopter through the configured store (JSON files or DATABASE_URL).

Usage:
  python scripts/add_record.py pets name=Mochi type=cat health=vaccinated,neutered
  python scripts/add_record.py adopters firstName=Ana lastName=Lima email=ana@example.com
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the shelter package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shelter.domain import KINDS, extract_fields, missing_required
from shelter.repositories import get_store


def parse_pairs(pairs: list[str]) -> dict:
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise SystemExit(f"Invalid field '{pair}' (use key=value)")
        values[key.strip()] = value
    return values


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a shelter record")
    ap.add_argument("kind", choices=sorted(KINDS), help="Record kind")
    ap.add_argument("fields", nargs="*", help="key=value pairs (list fields take comma-separated values)")
    args = ap.parse_args()

    kind = KINDS[args.kind]
    fields = extract_fields(kind, parse_pairs(args.fields))
    missing = missing_required(kind, fields)
    if missing:
        raise SystemExit(kind.required_message)

    record = get_store(kind.name).add(fields)
    print(f"OK: {kind.singular} added")
    print(f"  id: {record['id']}")
    print(f"  name: {kind.display_name(record)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
