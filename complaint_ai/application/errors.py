"""Application-level error types.

``FailureReason`` classifies why the analyzer produced no result.
``CallableError`` is the typed error surfaced to callers of the re-analysis
endpoint; the trigger path never raises it.
"""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate-limited"
    AUTHENTICATION = "authentication"
    BAD_REQUEST = "bad-request"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty-response"
    UNPARSABLE_RESPONSE = "unparsable-response"
    INCOMPLETE_RESPONSE = "incomplete-response"


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    INTERNAL = "internal"
    RESOURCE_EXHAUSTED = "resource-exhausted"


class CallableError(Exception):
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"CallableError({self.code.value!r}, {self.message!r})"
