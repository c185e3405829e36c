"""SQL backend for the record stores: declarative base, engines, unit-of-work scope."""

from .session import Base, dispose_engines, get_engine, session_scope

__all__ = ["Base", "dispose_engines", "get_engine", "session_scope"]
