"""Terminator scans and the argument checks built on them."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import MutableSequence
from collections.abc import Sequence
from typing import TypeAlias

from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._errors import CodecError
from ._errors import ErrorCode

Units: TypeAlias = Sequence[int]
LengthProbe = Callable[[Units | None, CodecConfig], int]


def _terminated_length(source: Units | None, config: CodecConfig) -> int:
    if source is None:
        raise CodecError(ErrorCode.NULL_POINTER)

    # The end of the sequence counts as a terminator
    try:
        length = source.index(0)
    except ValueError:
        length = len(source)

    if length > config.max_count:
        raise CodecError(ErrorCode.OVERFLOW, pos=config.max_count)
    return length


def utf8_length(
    source: Units | None, config: CodecConfig = DEFAULT_CONFIG
) -> int:
    """Returns the number of bytes before the terminating zero."""
    return _terminated_length(source, config)


def utf16_length(
    source: Units | None, config: CodecConfig = DEFAULT_CONFIG
) -> int:
    """Returns the number of code units before the terminating zero."""
    return _terminated_length(source, config)


def codepoint_length(
    source: Units | None, config: CodecConfig = DEFAULT_CONFIG
) -> int:
    """Returns the number of codepoints before the terminating zero."""
    return _terminated_length(source, config)


def _check_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CodecError(ErrorCode.INVALID_PARAMETER, detail=repr(value))
    return value


def resolve_size(
    source: Units | None,
    size: int | None,
    probe: LengthProbe,
    config: CodecConfig,
) -> int:
    """
    Turns an optional scan bound into a concrete one.

    Without a bound the terminator decides; an explicit bound is clamped
    to the length of the sequence.
    """
    if source is None:
        raise CodecError(ErrorCode.NULL_POINTER)
    if size is None:
        return probe(source, config)
    return min(_check_count(size), len(source))


def check_destination(
    out: MutableSequence[int] | None, capacity: int | None
) -> int:
    """Validates a caller-owned buffer and returns its usable capacity."""
    if out is None:
        raise CodecError(ErrorCode.NULL_POINTER)
    if capacity is None:
        capacity = len(out) - 1
        if capacity < 0:
            raise CodecError(
                ErrorCode.INVALID_PARAMETER,
                detail="no room for the terminator",
            )
        return capacity

    capacity = _check_count(capacity)
    if len(out) < capacity + 1:
        raise CodecError(
            ErrorCode.INVALID_PARAMETER,
            detail=f"buffer holds {len(out)} elements, need {capacity + 1}",
        )
    return capacity
