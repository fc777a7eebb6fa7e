from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from seriesmeta.config import settings

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.is_sqlite else {}
)

if settings.is_sqlite and settings.sqlite_wal:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session and always close it, whatever happens inside the block."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a block of statements as one unit of work.
    Commits on normal exit, rolls back and re-raises on any error.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
