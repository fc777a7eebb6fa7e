from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import Session

from seriesmeta.database import session_scope, transaction


def test_session_scope_yields_real_session():
    with session_scope() as db:
        assert isinstance(db, Session)


def test_session_scope_closes_on_error(monkeypatch):
    db = MagicMock()
    monkeypatch.setattr("seriesmeta.database.SessionLocal", lambda: db)

    with pytest.raises(KeyError):
        with session_scope():
            raise KeyError("missing")

    db.close.assert_called_once()


def test_session_scope_propagates_session_factory_failure(monkeypatch):
    def broken_factory():
        raise RuntimeError("database unavailable")

    monkeypatch.setattr("seriesmeta.database.SessionLocal", broken_factory)

    # The factory error comes through as is, not as an UnboundLocalError from cleanup
    with pytest.raises(RuntimeError, match="database unavailable"):
        with session_scope():
            pass


def test_transaction_commits_on_success():
    db = MagicMock()

    with transaction(db) as session:
        session.execute("noop")

    db.commit.assert_called_once()
    db.rollback.assert_not_called()


def test_transaction_rolls_back_and_reraises():
    db = MagicMock()

    with pytest.raises(ValueError):
        with transaction(db):
            raise ValueError("boom")

    db.rollback.assert_called_once()
    db.commit.assert_not_called()
