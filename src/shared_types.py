"""Shared enums for namesync."""

from enum import StrEnum


class MessageKind(StrEnum):
    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"


class ConfirmOutcome(StrEnum):
    NOT_LOGGED_IN = "not_logged_in"
    NOT_PENDING = "not_pending"
    USAGE = "usage"
    INVALID_PASSWORD = "invalid_password"
    NAME_TAKEN = "name_taken"
    STORE_FAILED = "store_failed"
    RENAMED = "renamed"
