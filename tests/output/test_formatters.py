"""Tests for format_result."""

import json

from bankctl.output.formatters import format_result
from bankctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="USER_NOT_FOUND", message=msg),
    )


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        data = json.loads(format_result(_ok("create_user", user_id="u-1"), json_output=True))
        assert data["ok"] is True
        assert data["op"] == "create_user"
        assert data["data"]["user_id"] == "u-1"

    def test_json_error(self) -> None:
        data = json.loads(format_result(_err(msg="gone"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["code"] == "USER_NOT_FOUND"
        assert data["error"]["message"] == "gone"


class TestFormatResultHuman:
    def test_success_lists_data(self) -> None:
        output = format_result(_ok("create_account", name="Checking", balance=0.0))
        assert output.splitlines() == [
            "OK: create_account",
            "  name: Checking",
            "  balance: 0.0",
        ]

    def test_records_one_per_line(self) -> None:
        output = format_result(_ok("list_transactions", items=[{"amount": 1.0}, {"amount": 2.0}]))
        assert output.splitlines()[1:] == ["  items:", "    - amount=1.0", "    - amount=2.0"]

    def test_empty_list_and_none(self) -> None:
        output = format_result(_ok("delete_account", items=[], user_id=None))
        assert "  items: (none)" in output
        assert "  user_id: -" in output

    def test_quiet_hides_data(self) -> None:
        assert format_result(_ok("create_user", user_id="u-1"), quiet=True) == "OK: create_user"

    def test_error(self) -> None:
        output = format_result(_err("get_user", "User missing"))
        assert output == "ERROR: get_user - [USER_NOT_FOUND] User missing"

