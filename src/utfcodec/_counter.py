"""Validating codepoint counters for UTF-8 and UTF-16 buffers."""

from __future__ import annotations

from typing import Final

from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._errors import CodecError
from ._errors import ErrorCode
from ._probe import Units
from ._probe import resolve_size
from ._probe import utf16_length
from ._probe import utf8_length
from ._profile import ProfileContext

HIGH_SURROGATE_MIN: Final = 0xD800
LOW_SURROGATE_MIN: Final = 0xDC00
SURROGATE_MAX: Final = 0xDFFF
UTF16_UNIT_MAX: Final = 0xFFFF


def _lead_entry(byte: int) -> tuple[int, int] | None:
    # (payload mask, continuation bytes); None for bytes that cannot lead
    if 0x01 <= byte <= 0x7F:
        return (0x7F, 0)
    if 0xC0 <= byte <= 0xDF:
        return (0x1F, 1)
    if 0xE0 <= byte <= 0xEF:
        return (0x0F, 2)
    if 0xF0 <= byte <= 0xF7:
        return (0x07, 3)
    return None


UTF8_LEADS: Final = tuple(_lead_entry(byte) for byte in range(0x100))


def utf8_lead(byte: int) -> tuple[int, int] | None:
    """Classifies a leading byte; ``None`` if it cannot start a sequence."""
    if 0 <= byte <= 0xFF:
        return UTF8_LEADS[byte]
    return None


def check_continuation(byte: int, pos: int, config: CodecConfig) -> None:
    """Rejects a byte that cannot continue a multi-byte sequence."""
    if byte == 0:
        raise CodecError(ErrorCode.STRING_ENDED_IN_CHARACTER, pos=pos)
    if not 0x80 <= byte <= config.continuation_max:
        raise CodecError(ErrorCode.INVALID_UTF8_CHARACTER, pos=pos)


def count_utf8_codepoints(
    source: Units | None,
    size: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Counts the codepoints encoded in a UTF-8 buffer without decoding them.

    Scanning stops at the first zero byte or after ``size`` bytes,
    whichever comes first.

    Raises:
        CodecError: on a malformed sequence, a sequence cut short by the
            bound or the terminator, or a count above ``config.max_count``
    """
    size = resolve_size(source, size, utf8_length, config)
    assert source is not None

    count = 0
    pos = 0
    with ProfileContext("count_utf8_codepoints", size):
        while pos < size:
            byte = source[pos]
            if byte == 0:
                return count

            lead = utf8_lead(byte)
            if lead is None:
                raise CodecError(ErrorCode.INVALID_UTF8_CHARACTER, pos=pos)
            if count == config.max_count:
                raise CodecError(ErrorCode.OVERFLOW, pos=pos)
            count += 1

            trailing = lead[1]
            if pos + trailing >= size:
                raise CodecError(ErrorCode.STRING_ENDED_IN_CHARACTER, pos=pos)
            for offset in range(1, trailing + 1):
                check_continuation(source[pos + offset], pos + offset, config)
            pos += trailing + 1

    return count


def count_utf16_codepoints(
    source: Units | None,
    size: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Counts the codepoints encoded in a UTF-16 buffer without decoding them.

    A surrogate pair counts once; every other non-zero unit counts once.
    """
    size = resolve_size(source, size, utf16_length, config)
    assert source is not None

    count = 0
    pos = 0
    with ProfileContext("count_utf16_codepoints", size):
        while pos < size:
            unit = source[pos]
            if HIGH_SURROGATE_MIN <= unit <= SURROGATE_MAX:
                if unit >= LOW_SURROGATE_MIN:
                    raise CodecError(
                        ErrorCode.SURROGATE_PAIR_INVERSION, pos=pos
                    )
                if pos == size - 1:
                    raise CodecError(
                        ErrorCode.STRING_ENDED_IN_CHARACTER, pos=pos
                    )
                pos += 1
                low = source[pos]
                if low == 0:
                    raise CodecError(
                        ErrorCode.STRING_ENDED_IN_CHARACTER, pos=pos
                    )
                if not LOW_SURROGATE_MIN <= low <= SURROGATE_MAX:
                    raise CodecError(ErrorCode.INVALID_UTF16_CHARACTER, pos=pos)
            elif unit == 0:
                return count
            elif not 0 < unit <= UTF16_UNIT_MAX:
                raise CodecError(ErrorCode.INVALID_UTF16_CHARACTER, pos=pos)

            if count == config.max_count:
                raise CodecError(ErrorCode.OVERFLOW, pos=pos)
            count += 1
            pos += 1

    return count
