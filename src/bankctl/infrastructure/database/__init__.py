"""SQLite database engine and schema via SQLAlchemy Core."""

from bankctl.infrastructure.database.engine import create_db_engine, init_database
from bankctl.infrastructure.database.schema import accounts, metadata, transactions, users

__all__ = [
    "accounts",
    "create_db_engine",
    "init_database",
    "metadata",
    "transactions",
    "users",
]
