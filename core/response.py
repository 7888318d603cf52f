# core/response.py

"""
Structured results for gradebook operations that talk to the outside world (the store, reports, the CLI).

Pure engine functions never return a `Response`; they degrade silently instead. Everything that can
fail for reasons outside the caller's control (a missing document, an unknown student id, a corrupt
file) reports through a `Response` so that the CLI can display the failure without a traceback.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"

    # === Validation Failures ===
    # required field is missing from a stored document or argument
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # stored document could not be parsed
    INVALID_INPUT = "INVALID_INPUT"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # the value is valid in isolation, but clashes with the gradebook (e.g. duplicate student id)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard result object for store, report, and gradebook lookup operations.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style status code.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(success=True, detail=detail, status_code=status_code, data=data)

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "success": self._success,
            "error": self._error.value if isinstance(self._error, Enum) else self._error,
            "detail": self._detail,
            "status_code": self._status_code,
        }

    # === dunder methods ===

    def __str__(self) -> str:
        if self._success:
            return f"Success: {self._detail or ''}"

        error_str = (
            self._error.value if isinstance(self._error, Enum) else self._error or ""
        )
        return f"Error: {error_str} - {self._detail or ''}"
