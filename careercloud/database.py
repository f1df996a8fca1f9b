"""
Database schema and connection management.

One declarative Base shared by every entity module, plus engine and
session factories. SQLite is the default store; any SQLAlchemy URL works.
"""

from pathlib import Path
from typing import Union

from sqlalchemy import Column, DateTime, create_engine, event, func
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool

Base = declarative_base()

TIME_STAMP_COLUMN = "Time_Stamp"


def time_stamp_column() -> Column:
    """
    Store-populated time stamp.

    Set by the store on insert and refreshed on every update. It is
    carried for display only; nothing compares it before writing.
    """
    return Column(
        TIME_STAMP_COLUMN,
        DateTime,
        nullable=True,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # The store, not the application, enforces relations.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_sqlite_dir(url: str) -> None:
    u = make_url(url)
    if u.get_backend_name() == "sqlite" and u.database and u.database != ":memory:":
        Path(u.database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(url: str, pooled: bool = True) -> Engine:
    """
    Build an engine for a connection string.

    Args:
        url: SQLAlchemy database URL
        pooled: False gives a NullPool engine, so each connect() opens a
            fresh store connection and close() really closes it

    Returns:
        SQLAlchemy Engine
    """
    _ensure_sqlite_dir(url)
    kwargs = {}
    if make_url(url).get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
    if not pooled:
        kwargs["poolclass"] = NullPool
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_database(target: Union[str, Engine]) -> Engine:
    """
    Initialize database and create tables.

    Args:
        target: Database URL or an existing engine

    Returns:
        The engine the schema was created on
    """
    from . import pocos  # noqa: F401  (registers every table on Base.metadata)

    engine = create_db_engine(target) if isinstance(target, str) else target
    Base.metadata.create_all(engine)
    return engine


def get_session(target: Union[str, Engine]) -> Session:
    """
    Get database session.

    Args:
        target: Database URL or an existing engine

    Returns:
        SQLAlchemy session
    """
    engine = create_db_engine(target) if isinstance(target, str) else target
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    return SessionLocal()
