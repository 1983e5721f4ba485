"""Tests for session handling"""
import pytest
from sqlalchemy.orm import sessionmaker

from homeplanner.infrastructure.db import session as db_session_module
from homeplanner.infrastructure.db.session import session_scope, get_db
from homeplanner.infrastructure.db.models import User


@pytest.fixture
def bound_factory(db_engine, monkeypatch):
    """Point the process-wide session factory at the test engine"""
    monkeypatch.setattr(db_session_module, "_session_factory", sessionmaker(bind=db_engine, autoflush=False))


def _user(email):
    return User(name="Anna", email=email, password_hash="x")


def test_session_scope_rolls_back_on_error(bound_factory):
    with pytest.raises(RuntimeError):
        with session_scope() as db:
            db.add(_user("anna@example.com"))
            db.flush()
            raise RuntimeError("boom")

    with session_scope() as db:
        assert db.query(User).count() == 0


def test_session_scope_keeps_committed_work(bound_factory):
    with session_scope() as db:
        db.add(_user("anna@example.com"))
        db.commit()

    with session_scope() as db:
        assert db.query(User.email).scalar() == "anna@example.com"


def test_get_db_yields_session_and_closes_it(bound_factory):
    dependency = get_db()
    db = next(dependency)
    db.add(_user("anna@example.com"))
    db.commit()
    dependency.close()

    with session_scope() as other:
        assert other.query(User).count() == 1
