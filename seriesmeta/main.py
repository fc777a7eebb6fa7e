import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy.engine import Engine, URL

import seriesmeta.models  # noqa: F401  registers every table on Base.metadata
from seriesmeta.database import Base, engine, session_scope
from seriesmeta.logging import configure_logging
from seriesmeta.services.series_metadata import SeriesMetadataStore


def _ensure_sqlite_dir(url: URL):
    if url.get_backend_name() != "sqlite":
        return
    database = url.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def startup(bind: Optional[Engine] = None, log_level: Optional[str] = None):
    """
    Process start hook for callers embedding the store.
    Configures logging, makes sure the SQLite directory exists and creates missing tables.
    """
    bind = bind or engine
    logger = configure_logging(log_level)

    _ensure_sqlite_dir(bind.url)
    Base.metadata.create_all(bind=bind)

    logger.info(f"Series metadata store ready (PID:{os.getpid()}, database: {bind.url.render_as_string(hide_password=True)})")
    return logger


@contextmanager
def store_scope() -> Iterator[SeriesMetadataStore]:
    """A store on its own session, closed when the block exits."""
    with session_scope() as db:
        yield SeriesMetadataStore(db)
