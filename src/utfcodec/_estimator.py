"""Exact output sizes for encoding codepoint arrays."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._errors import CodecError
from ._errors import ErrorCode
from ._probe import Units
from ._probe import codepoint_length
from ._probe import resolve_size
from ._profile import ProfileContext

CODEPOINT_MAX: Final = 0x10FFFF
SURROGATE_MIN: Final = 0xD800
SURROGATE_MAX: Final = 0xDFFF


def check_codepoint(codepoint: int, pos: int) -> None:
    """Rejects values above 0x10FFFF, negatives and the surrogate band."""
    if codepoint < 0 or codepoint > CODEPOINT_MAX:
        raise CodecError(ErrorCode.INVALID_CODEPOINT, pos=pos)
    if SURROGATE_MIN <= codepoint <= SURROGATE_MAX:
        raise CodecError(ErrorCode.INVALID_CODEPOINT, pos=pos)


def utf8_width(codepoint: int) -> int:
    """Bytes needed for a valid, non-zero codepoint."""
    if codepoint <= 0x7F:
        return 1
    if codepoint <= 0x7FF:
        return 2
    if codepoint <= 0xFFFF:
        return 3
    return 4


def utf16_width(codepoint: int) -> int:
    """Code units needed for a valid, non-zero codepoint."""
    return 1 if codepoint <= 0xFFFF else 2


def _encoded_size(
    codepoints: Units | None,
    count: int | None,
    width: Callable[[int], int],
    name: str,
    config: CodecConfig,
) -> int:
    count = resolve_size(codepoints, count, codepoint_length, config)
    assert codepoints is not None

    total = 0
    with ProfileContext(name, count):
        for pos in range(count):
            codepoint = codepoints[pos]
            check_codepoint(codepoint, pos)
            if codepoint == 0:
                break
            needed = width(codepoint)
            if total > config.max_count - needed:
                raise CodecError(ErrorCode.OVERFLOW, pos=pos)
            total += needed
    return total


def utf8_size(
    codepoints: Units | None,
    count: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Computes how many bytes encoding ``codepoints`` as UTF-8 produces.

    The terminator is not included. Every codepoint up to the bound (or
    the first zero) is range-checked before it contributes.
    """
    return _encoded_size(codepoints, count, utf8_width, "utf8_size", config)


def utf16_size(
    codepoints: Units | None,
    count: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """Computes how many code units encoding as UTF-16 produces."""
    return _encoded_size(codepoints, count, utf16_width, "utf16_size", config)
