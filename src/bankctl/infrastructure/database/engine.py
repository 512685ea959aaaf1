"""Database engine setup for SQLite with WAL mode.

SQLite is the persistence layer: WAL mode for concurrent reads, foreign
keys for row references, and ``BEGIN IMMEDIATE`` for every transaction so
that a store's check-then-act sequence holds the write lock from its
first read.  The DB is stored at ``{data_root}/{filename}``.

SQLAlchemy Core (not ORM) is used: the stores issue explicit statements
inside one ``engine.begin()`` block per operation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from bankctl.infrastructure.database.schema import metadata

DEFAULT_DB_FILENAME = "bankctl.db"


def create_db_engine(db_path: Path, *, busy_timeout: float = 5.0, echo: bool = False) -> Engine:
    """Create a SQLite engine with WAL mode, foreign keys and immediate transactions."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=echo,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Hand transaction control to SQLAlchemy; see _begin_immediate.
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def is_unique_violation(exc: IntegrityError) -> bool:
    """Whether *exc* was raised by a UNIQUE constraint rather than NOT NULL or a foreign key."""
    return "UNIQUE constraint failed" in str(exc.orig)


def init_database(
    data_root: Path,
    *,
    filename: str = DEFAULT_DB_FILENAME,
    busy_timeout: float = 5.0,
    echo: bool = False,
) -> Engine:
    """Initialize the bankctl database at ``{data_root}/{filename}``.

    Creates *data_root* if needed and all tables from
    :data:`schema.metadata`.  Running it against an existing database
    changes nothing.

    Returns the engine ready for use.
    """
    data_root.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(data_root / filename, busy_timeout=busy_timeout, echo=echo)
    metadata.create_all(engine)
    return engine
