"""
Eitango – Database initialisation & session management
=======================================================
Builds SQLite engines and session factories. Nothing here is a process-wide
singleton: callers construct an engine and pass sessions explicitly.
"""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from core.config import settings
from db.models import Base


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

def default_database_url() -> str:
    """Return the SQLite URL inside the configured data directory."""
    data_dir = Path(settings.DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / settings.DB_FILE}"


# ---------------------------------------------------------------------------
# Engine / session factories
# ---------------------------------------------------------------------------

def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key enforcement for every SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str | None = None, *, echo: bool = False) -> Engine:
    """Create an engine for *url* (defaults to the on-disk database)."""
    url = url or default_database_url()
    engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables if they do not exist yet."""
    Base.metadata.create_all(bind=engine)


def open_session(url: str | None = None) -> Session:
    """Create the schema (if needed) and return a session on *url*."""
    engine = make_engine(url)
    init_db(engine)
    return make_session_factory(engine)()
