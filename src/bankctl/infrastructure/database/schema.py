"""SQLAlchemy Core table definitions for the bankctl database.

Every table keys rows by an integer ``id`` that never leaves the
infrastructure layer, next to a unique external UUID that callers use.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Uuid, nullable=False, unique=True),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("birthdate", Date, nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("created", DateTime, nullable=False),
    Column("last_updated", DateTime, nullable=False),
    UniqueConstraint("first_name", "last_name", "birthdate"),
)

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Uuid, nullable=False, unique=True),
    Column("name", Text, nullable=False),
    Column("balance", Float, nullable=False),
    Column("dispo", Float, nullable=False),
    Column("limit", Float, nullable=False),
    Column("created", DateTime, nullable=False),
    Column("last_updated", DateTime, nullable=False),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=True),  # NULL once detached
    UniqueConstraint("name", "user_id"),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("transaction_id", Uuid, nullable=False, unique=True),
    Column("origin_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("target_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("amount", Float, nullable=False),
    Column("created", DateTime, nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_accounts_user", accounts.c.user_id)
Index("ix_transactions_origin", transactions.c.origin_id)
Index("ix_transactions_target", transactions.c.target_id)
