"""Locate ``bankctl.toml``.

Lookup order: the ``BANKCTL_CONFIG`` environment variable, then the
starting directory and each of its parents.  An explicit ``--config``
never reaches this module.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bankctl.toml"
CONFIG_ENV_VAR = "BANKCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    A ``BANKCTL_CONFIG`` pointing at a missing file yields None rather
    than falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
