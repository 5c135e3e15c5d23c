"""Error taxonomy.

A single exception type carries a machine-readable code and a
``recoverable`` flag. Recoverable errors are transient transport problems;
the sync coordinator logs and swallows them. Non-recoverable errors are
configuration mistakes and propagate to the caller.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    API_UNAVAILABLE = "API_UNAVAILABLE"  # network failure or timeout
    API_ERROR = "API_ERROR"  # non-2xx response
    INVALID_RESPONSE = "INVALID_RESPONSE"  # payload does not match the expected shape
    LANGUAGE_NOT_AVAILABLE = "LANGUAGE_NOT_AVAILABLE"


class LingoError(Exception):
    def __init__(self, code: ErrorCode, message: str, recoverable: bool) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return (
            f"LingoError(code={self.code!s}, message={self.message!r}, "
            f"recoverable={self.recoverable})"
        )
