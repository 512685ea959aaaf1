"""Config sections as they appear in ``bankctl.toml``.

Every field has a default, so the file lists only what differs::

    [database]
    filename = "ledger.db"

    [security]
    pbkdf2_iterations = 600000
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """``[database]``: where the SQLite file lives and how to open it."""

    model_config = {"frozen": True}

    filename: str = "bankctl.db"
    # Seconds a connection waits for another writer's lock before failing.
    busy_timeout: float = Field(default=5.0, gt=0)
    echo: bool = False


class SecurityConfig(BaseModel):
    """``[security]``: password hashing cost."""

    model_config = {"frozen": True}

    pbkdf2_iterations: int = Field(default=210_000, ge=1)
