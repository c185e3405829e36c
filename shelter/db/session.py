"""
Engines and unit-of-work scopes for the optional SQL record backend.

Engines are built per database URL, so an app created with explicit Settings
and one reading the environment can point at different databases.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shelter.core.config import get_settings

Base = declarative_base()

_lock = threading.Lock()
_engines: dict[str, Engine] = {}
_makers: dict[str, sessionmaker] = {}


def resolve_url(database_url: Optional[str] = None) -> str:
    url = (database_url or get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return url


def _session_factory(url: str) -> sessionmaker:
    with _lock:
        maker = _makers.get(url)
        if maker is None:
            engine = create_engine(url, future=True, pool_pre_ping=True)
            maker = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
            _engines[url] = engine
            _makers[url] = maker
        return maker


def get_engine(database_url: Optional[str] = None) -> Engine:
    url = resolve_url(database_url)
    _session_factory(url)
    return _engines[url]


def dispose_engines() -> None:
    """Close every cached engine (tests swap DATABASE_URL between cases)."""
    with _lock:
        for engine in _engines.values():
            engine.dispose()
        _engines.clear()
        _makers.clear()


@contextmanager
def session_scope(database_url: Optional[str] = None) -> Iterator[Session]:
    """One unit of work: commits when the block succeeds, rolls back otherwise."""
    session: Session = _session_factory(resolve_url(database_url))()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
