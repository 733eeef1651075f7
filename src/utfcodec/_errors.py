"""Error taxonomy shared by every codec operation."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """
    Fixed enumeration of codec failures.

    Every value is negative so it can never be confused with a valid
    unit or codepoint count.
    """

    NO_ERROR = 0
    NULL_POINTER = -1
    INVALID_UTF8_CHARACTER = -2
    INVALID_UTF16_CHARACTER = -3
    STRING_ENDED_IN_CHARACTER = -4
    INVALID_CODEPOINT = -5
    SURROGATE_PAIR_INVERSION = -6
    INVALID_ALLOCATOR = -7
    NULL_ALLOCATOR = -8
    BAD_ALLOCATION = -9
    OVERFLOW = -10
    INVALID_PARAMETER = -11
    BUFFER_TOO_SMALL = -12


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NULL_POINTER: "Missing source or destination buffer",
    ErrorCode.INVALID_UTF8_CHARACTER: "Invalid UTF-8 character",
    ErrorCode.INVALID_UTF16_CHARACTER: "Invalid UTF-16 character",
    ErrorCode.STRING_ENDED_IN_CHARACTER: "String ended in character",
    ErrorCode.INVALID_CODEPOINT: "Invalid codepoint",
    ErrorCode.SURROGATE_PAIR_INVERSION: "Surrogate pair inversion",
    ErrorCode.INVALID_ALLOCATOR: "Invalid allocator",
    ErrorCode.NULL_ALLOCATOR: "No allocator given and default is disabled",
    ErrorCode.BAD_ALLOCATION: "Allocation failed",
    ErrorCode.OVERFLOW: "Integer overflow",
    ErrorCode.INVALID_PARAMETER: "Invalid parameter",
    ErrorCode.BUFFER_TOO_SMALL: "Buffer too small",
}


class CodecError(ValueError):
    """
    Raised when a conversion, count or allocation cannot complete.

    Carries the negative error code and, when the failure is tied to
    a location in the source, the index where it was detected.
    """

    def __init__(
        self, code: ErrorCode, pos: int | None = None, detail: str = ""
    ) -> None:
        if not isinstance(code, ErrorCode):
            raise TypeError("code must be an ErrorCode")
        if code is ErrorCode.NO_ERROR:
            raise ValueError("NO_ERROR is not a failure")

        self.code = code
        self.pos = pos
        self.detail = detail

        msg = _MESSAGES[code]
        if pos is not None:
            msg = f"{msg} at index {pos}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.code, self.pos, self.detail))


def call_status(func: Callable[..., int], *args: Any, **kwargs: Any) -> int:
    """Runs a codec operation and returns its count or negative error code."""
    try:
        return func(*args, **kwargs)
    except CodecError as exc:
        return int(exc.code)
