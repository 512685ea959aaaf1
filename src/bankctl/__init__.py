"""bankctl — users, accounts and transactions over a consistent store."""

__version__ = "0.1.0"
