"""Decoding passes from UTF-8 and UTF-16 into codepoint arrays."""

from __future__ import annotations

from collections.abc import MutableSequence

from ._alloc import CODEPOINT_UNIT
from ._alloc import Allocator
from ._alloc import fill_new_buffer
from ._alloc import resolve_allocator
from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._counter import HIGH_SURROGATE_MIN
from ._counter import LOW_SURROGATE_MIN
from ._counter import SURROGATE_MAX
from ._counter import UTF16_UNIT_MAX
from ._counter import check_continuation
from ._counter import count_utf16_codepoints
from ._counter import count_utf8_codepoints
from ._counter import utf8_lead
from ._errors import CodecError
from ._errors import ErrorCode
from ._estimator import check_codepoint
from ._probe import Units
from ._probe import check_destination
from ._probe import resolve_size
from ._probe import utf16_length
from ._probe import utf8_length
from ._profile import ProfileContext
from ._result import Conversion
from ._result import Form


def _terminate(
    source: Units,
    read: int,
    size: int,
    out: MutableSequence[int],
    written: int,
) -> int:
    # A terminator sitting right where capacity ran out still ends the source
    if read < size and source[read] == 0:
        read = size
    if read != size:
        raise CodecError(ErrorCode.BUFFER_TOO_SMALL, pos=read)
    out[written] = 0
    return written


def decode_utf8_into(
    source: Units | None,
    size: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Decodes UTF-8 into a caller-owned codepoint buffer.

    Args:
        source: UTF-8 bytes, zero-terminated or bounded by ``size``
        size: maximum number of bytes to read, ``None`` to stop at the zero
        out: destination with room for ``capacity + 1`` codepoints
        capacity: codepoints that may be written before the terminator,
            ``None`` to use ``len(out) - 1``
        config: limits and continuation range

    Returns:
        Number of codepoints written, excluding the terminator

    Raises:
        CodecError: ``BUFFER_TOO_SMALL`` if ``out`` fills up before the
            source is consumed, or the validation failure encountered
    """
    size = resolve_size(source, size, utf8_length, config)
    capacity = check_destination(out, capacity)
    assert source is not None and out is not None

    read = 0
    written = 0
    with ProfileContext("decode_utf8", size):
        while read < size and written < capacity:
            byte = source[read]
            if byte == 0:
                out[written] = 0
                return written

            lead = utf8_lead(byte)
            if lead is None:
                raise CodecError(ErrorCode.INVALID_UTF8_CHARACTER, pos=read)
            mask, trailing = lead
            if read + trailing >= size:
                raise CodecError(
                    ErrorCode.STRING_ENDED_IN_CHARACTER, pos=read
                )

            codepoint = byte & mask
            for offset in range(1, trailing + 1):
                continuation = source[read + offset]
                check_continuation(continuation, read + offset, config)
                codepoint = (codepoint << 6) | (continuation & 0x3F)
            if codepoint == 0:
                # Overlong NUL would smuggle a terminator into the output
                raise CodecError(ErrorCode.INVALID_UTF8_CHARACTER, pos=read)
            check_codepoint(codepoint, read)

            if written == config.max_count:
                raise CodecError(ErrorCode.OVERFLOW, pos=read)
            out[written] = codepoint
            written += 1
            read += trailing + 1

    return _terminate(source, read, size, out, written)


def decode_utf16_into(
    source: Units | None,
    size: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Decodes UTF-16 into a caller-owned codepoint buffer.

    Surrogate pairs combine as
    ``((high - 0xD800) << 10) + (low - 0xDC00) + 0x10000``.
    """
    size = resolve_size(source, size, utf16_length, config)
    capacity = check_destination(out, capacity)
    assert source is not None and out is not None

    read = 0
    written = 0
    with ProfileContext("decode_utf16", size):
        while read < size and written < capacity:
            start = read
            unit = source[read]
            read += 1
            if HIGH_SURROGATE_MIN <= unit <= SURROGATE_MAX:
                if unit >= LOW_SURROGATE_MIN:
                    raise CodecError(
                        ErrorCode.SURROGATE_PAIR_INVERSION, pos=start
                    )
                if read == size:
                    raise CodecError(
                        ErrorCode.STRING_ENDED_IN_CHARACTER, pos=start
                    )
                low = source[read]
                if low == 0:
                    raise CodecError(
                        ErrorCode.STRING_ENDED_IN_CHARACTER, pos=read
                    )
                if not LOW_SURROGATE_MIN <= low <= SURROGATE_MAX:
                    raise CodecError(
                        ErrorCode.INVALID_UTF16_CHARACTER, pos=read
                    )
                read += 1
                codepoint = (
                    ((unit - HIGH_SURROGATE_MIN) << 10)
                    + (low - LOW_SURROGATE_MIN)
                    + 0x10000
                )
            elif unit == 0:
                out[written] = 0
                return written
            elif not 0 < unit <= UTF16_UNIT_MAX:
                raise CodecError(ErrorCode.INVALID_UTF16_CHARACTER, pos=start)
            else:
                codepoint = unit

            if written == config.max_count:
                raise CodecError(ErrorCode.OVERFLOW, pos=start)
            out[written] = codepoint
            written += 1

    return _terminate(source, read, size, out, written)


def decode_utf8(
    source: Units | None,
    size: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Decodes UTF-8 into a freshly allocated codepoint buffer."""
    allocator = resolve_allocator(allocator, config)
    size = resolve_size(source, size, utf8_length, config)
    count = count_utf8_codepoints(source, size, config)

    written, buffer = fill_new_buffer(
        allocator,
        count,
        CODEPOINT_UNIT,
        lambda out, capacity: decode_utf8_into(
            source, size, out, capacity, config
        ),
        config,
    )
    return Conversion(written, buffer, Form.CODEPOINTS)


def decode_utf16(
    source: Units | None,
    size: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Decodes UTF-16 into a freshly allocated codepoint buffer."""
    allocator = resolve_allocator(allocator, config)
    size = resolve_size(source, size, utf16_length, config)
    count = count_utf16_codepoints(source, size, config)

    written, buffer = fill_new_buffer(
        allocator,
        count,
        CODEPOINT_UNIT,
        lambda out, capacity: decode_utf16_into(
            source, size, out, capacity, config
        ),
        config,
    )
    return Conversion(written, buffer, Form.CODEPOINTS)
