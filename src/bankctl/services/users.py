"""UserService — create, inspect and delete users.

Pipeline for creation: MAP → VALIDATE → PERSIST → RESPOND.  Mapping
failures become ``MAPPING_ERROR``, password rule violations
``PASSWORD_ERROR``, and persistence errors ``DATABASE_ERROR``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from bankctl.domain.models import User
from bankctl.domain.parsing import InvalidInputError, parse_birthdate, parse_uuid
from bankctl.domain.types import ErrorCode, FailureKind
from bankctl.infrastructure.repositories import UserStore
from bankctl.services._helpers import describe_validation, validation_fields
from bankctl.services.base import BaseService
from bankctl.services.contracts import user_payload
from bankctl.services.result import ServiceResult

if TYPE_CHECKING:
    from bankctl.infrastructure.bank import Bank
    from bankctl.services.contracts import UserDto

log = structlog.get_logger(__name__)


class UserService(BaseService):
    """Handles the user lifecycle."""

    def __init__(self, bank: Bank) -> None:
        super().__init__(bank)
        self._users = UserStore(bank)

    def create_user(self, dto: UserDto) -> ServiceResult:
        """Map *dto* to a validated User and persist it."""
        op = "create_user"
        log.info("user.create.start", first_name=dto.first_name, last_name=dto.last_name)

        try:
            user = _to_user(dto)
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))
        except ValidationError as exc:
            code = (
                ErrorCode.PASSWORD_ERROR
                if "password" in validation_fields(exc)
                else ErrorCode.MAPPING_ERROR
            )
            return self._fail(op, code, describe_validation(exc))

        try:
            outcome = self._users.save(user)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if not outcome.ok:
            return self._refused(op, outcome)

        log.info("user.create.done", user_id=str(user.user_id))
        return ServiceResult(ok=True, op=op, data={"user_id": str(user.user_id)})

    def get_user(self, user_id: str | None) -> ServiceResult:
        """Fetch a user together with the accounts it owns."""
        op = "get_user"
        try:
            resolved = parse_uuid(user_id, "userId")
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))

        try:
            user = self._users.find_by_user_id(resolved)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if user is None:
            return self._fail(
                op, ErrorCode.USER_NOT_FOUND, f"User with userId '{user_id}' not found."
            )

        return ServiceResult(ok=True, op=op, data=user_payload(user))

    def delete_user(self, user_id: str | None) -> ServiceResult:
        """Remove a user; its accounts are detached, not deleted."""
        op = "delete_user"
        log.info("user.delete.start", user_id=user_id)
        try:
            resolved = parse_uuid(user_id, "userId")
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))

        try:
            user = self._users.find_by_user_id(resolved)
            if user is None:
                return self._fail(
                    op, ErrorCode.USER_NOT_FOUND, f"User with userId '{user_id}' not found."
                )
            outcome = self._users.delete(user)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if not outcome.ok:
            # Deleted concurrently between lookup and delete.
            return self._refused(op, outcome, {FailureKind.NOT_FOUND: ErrorCode.USER_NOT_FOUND})

        log.info("user.delete.done", user_id=str(resolved), detached=len(user.accounts))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "user_id": str(resolved),
                "detached_accounts": [str(a.account_id) for a in user.accounts],
            },
        )


def _to_user(dto: UserDto) -> User:
    """Map a UserDto onto a User, generating a user_id unless one is given."""
    fields: dict[str, Any] = {
        "first_name": dto.first_name,
        "last_name": dto.last_name,
        "birthdate": parse_birthdate(dto.birth_date),
        "password": dto.password,
    }
    if dto.user_id is not None:
        fields["user_id"] = parse_uuid(dto.user_id, "userId")
    return User(**fields)
