"""Error taxonomies shared by the store and service layers."""

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    """Domain conditions a store reports instead of raising."""

    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"


class ErrorCode(StrEnum):
    """Codes carried by a failed ServiceResult."""

    DATABASE_ERROR = "DATABASE_ERROR"
    MAPPING_ERROR = "MAPPING_ERROR"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PASSWORD_ERROR = "PASSWORD_ERROR"
    ACCOUNT_ALREADY_EXIST = "ACCOUNT_ALREADY_EXIST"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    DUPLICATE = "DUPLICATE"
