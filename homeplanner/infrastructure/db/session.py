"""
Engine and sessions

One engine per process, built from Settings on first use. Requests get a
session through get_db; scripts use session_scope directly.
"""
from contextlib import contextmanager
from typing import Iterator

import psycopg
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from homeplanner.config import get_settings


class Base(DeclarativeBase):
    """Every planner table registers on Base.metadata (see models.py)"""


_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(
            settings.get_sqlalchemy_url(),
            pool_pre_ping=True,
            echo=settings.LOG_LEVEL.upper() == "DEBUG",
        )
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False)
    return _session_factory


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Session that is rolled back if the block raises, and always closed

    Use cases commit themselves; this only guarantees nothing half-done
    survives an error.

    Usage:
        with session_scope() as db:
            seed_reference_data(db)
    """
    db = get_session_factory()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request"""
    with session_scope() as db:
        yield db


def check_db_connection() -> None:
    """
    Readiness check: raw psycopg round trip, independent of the pool

    Raises:
        psycopg.OperationalError: database is unreachable
    """
    with psycopg.connect(get_settings().get_db_dsn(), connect_timeout=3) as conn:
        conn.execute("SELECT 1").fetchone()
