"""Render a ServiceResult for the terminal.

``--json`` prints the whole result as indented JSON.  Otherwise a status
line is followed by the payload, one field per line; lists of records
(account lists, transaction items) get one line per record.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bankctl.services.result import ServiceResult


def _scalar(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, dict):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _record(entry: Any) -> str:
    if isinstance(entry, dict):
        return ", ".join(f"{key}={_scalar(value)}" for key, value in entry.items())
    return _scalar(entry)


def _field_lines(key: str, value: Any) -> list[str]:
    if isinstance(value, list):
        if not value:
            return [f"  {key}: (none)"]
        return [f"  {key}:", *(f"    - {_record(entry)}" for entry in value)]
    return [f"  {key}: {_scalar(value)}"]


def format_result(result: ServiceResult, *, json_output: bool = False, quiet: bool = False) -> str:
    """Format *result* as JSON or as human-readable text.

    Args:
        result: The service result to format.
        json_output: Return ``result`` serialized as JSON.
        quiet: Print only the status line on success.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    if result.ok:
        lines = [f"OK: {result.op}"]
        if not quiet:
            for key, value in result.data.items():
                lines.extend(_field_lines(key, value))
        return "\n".join(lines)

    assert result.error is not None
    return f"ERROR: {result.op} - [{result.error.code}] {result.error.message}"
