"""Encoding passes from codepoint arrays into UTF-8 and UTF-16."""

from __future__ import annotations

from collections.abc import MutableSequence

from ._alloc import UTF8_UNIT
from ._alloc import UTF16_UNIT
from ._alloc import Allocator
from ._alloc import fill_new_buffer
from ._alloc import resolve_allocator
from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._errors import CodecError
from ._errors import ErrorCode
from ._estimator import check_codepoint
from ._estimator import utf8_size
from ._estimator import utf8_width
from ._estimator import utf16_size
from ._probe import Units
from ._probe import check_destination
from ._probe import codepoint_length
from ._probe import resolve_size
from ._profile import ProfileContext
from ._result import Conversion
from ._result import Form


def _finish(
    codepoints: Units,
    read: int,
    count: int,
    out: MutableSequence[int],
    written: int,
) -> int:
    if read < count and codepoints[read] == 0:
        read = count
    if read != count:
        raise CodecError(ErrorCode.BUFFER_TOO_SMALL, pos=read)
    out[written] = 0
    return written


def encode_utf8_into(
    codepoints: Units | None,
    count: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Encodes codepoints as UTF-8 into a caller-owned byte buffer.

    A codepoint is only written when all of its bytes fit; otherwise the
    pass stops with ``BUFFER_TOO_SMALL`` and nothing of it is emitted.

    Returns:
        Number of bytes written, excluding the terminator
    """
    count = resolve_size(codepoints, count, codepoint_length, config)
    capacity = check_destination(out, capacity)
    assert codepoints is not None and out is not None

    read = 0
    written = 0
    with ProfileContext("encode_utf8", count):
        while read < count and written < capacity:
            codepoint = codepoints[read]
            check_codepoint(codepoint, read)
            if codepoint == 0:
                out[written] = 0
                return written

            width = utf8_width(codepoint)
            if written > capacity - width:
                raise CodecError(ErrorCode.BUFFER_TOO_SMALL, pos=read)

            if width == 1:
                out[written] = codepoint
            elif width == 2:
                out[written] = 0xC0 | (codepoint >> 6)
                out[written + 1] = 0x80 | (codepoint & 0x3F)
            elif width == 3:
                out[written] = 0xE0 | (codepoint >> 12)
                out[written + 1] = 0x80 | ((codepoint >> 6) & 0x3F)
                out[written + 2] = 0x80 | (codepoint & 0x3F)
            else:
                out[written] = 0xF0 | (codepoint >> 18)
                out[written + 1] = 0x80 | ((codepoint >> 12) & 0x3F)
                out[written + 2] = 0x80 | ((codepoint >> 6) & 0x3F)
                out[written + 3] = 0x80 | (codepoint & 0x3F)
            written += width
            read += 1

    return _finish(codepoints, read, count, out, written)


def encode_utf16_into(
    codepoints: Units | None,
    count: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """Encodes codepoints as UTF-16 into a caller-owned unit buffer."""
    count = resolve_size(codepoints, count, codepoint_length, config)
    capacity = check_destination(out, capacity)
    assert codepoints is not None and out is not None

    read = 0
    written = 0
    with ProfileContext("encode_utf16", count):
        while read < count and written < capacity:
            codepoint = codepoints[read]
            check_codepoint(codepoint, read)
            if codepoint == 0:
                out[written] = 0
                return written

            if codepoint <= 0xFFFF:
                out[written] = codepoint
                written += 1
            else:
                if written > capacity - 2:
                    raise CodecError(ErrorCode.BUFFER_TOO_SMALL, pos=read)
                offset = codepoint - 0x10000
                out[written] = 0xD800 + (offset >> 10)
                out[written + 1] = 0xDC00 + (offset & 0x3FF)
                written += 2
            read += 1

    return _finish(codepoints, read, count, out, written)


def encode_utf8(
    codepoints: Units | None,
    count: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Encodes codepoints as UTF-8 into a freshly allocated byte buffer."""
    allocator = resolve_allocator(allocator, config)
    count = resolve_size(codepoints, count, codepoint_length, config)
    needed = utf8_size(codepoints, count, config)

    written, buffer = fill_new_buffer(
        allocator,
        needed,
        UTF8_UNIT,
        lambda out, capacity: encode_utf8_into(
            codepoints, count, out, capacity, config
        ),
        config,
    )
    return Conversion(written, buffer, Form.UTF8)


def encode_utf16(
    codepoints: Units | None,
    count: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Encodes codepoints as UTF-16 into a freshly allocated unit buffer."""
    allocator = resolve_allocator(allocator, config)
    count = resolve_size(codepoints, count, codepoint_length, config)
    needed = utf16_size(codepoints, count, config)

    written, buffer = fill_new_buffer(
        allocator,
        needed,
        UTF16_UNIT,
        lambda out, capacity: encode_utf16_into(
            codepoints, count, out, capacity, config
        ),
        config,
    )
    return Conversion(written, buffer, Form.UTF16)
