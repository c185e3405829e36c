"""
Create the ``records`` table used by the SQL record stores.

Usage:
  python -m shelter.db.create_tables [--database-url sqlite:///shelter.db]
"""
from __future__ import annotations

import argparse
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine, resolve_url
from . import models  # noqa: F401  # registers RecordRow on Base.metadata


def create_all(database_url: Optional[str] = None) -> list[str]:
    """Create missing tables and return the names known to the metadata."""
    Base.metadata.create_all(bind=get_engine(database_url))
    return sorted(Base.metadata.tables)


def main() -> None:
    ap = argparse.ArgumentParser(description="Create the shelter record tables")
    ap.add_argument("--database-url", help="SQLAlchemy URL (default: DATABASE_URL)")
    args = ap.parse_args()
    try:
        url = resolve_url(args.database_url)
        tables = create_all(url)
    except (RuntimeError, SQLAlchemyError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print(f"OK: {', '.join(tables)} ready")


if __name__ == "__main__":
    main()
