"""
Validating converter between UTF-8, UTF-16 and raw codepoint arrays.

Every conversion works on one complete, zero-terminated (or explicitly
bounded) buffer and writes either into a caller-owned buffer or into one
obtained from an allocator strategy. Failures raise CodecError carrying a
fixed negative ErrorCode; call_status exposes the integer protocol.
"""

from collections.abc import MutableSequence
from collections.abc import Sequence
from typing import TypeAlias

from ._alloc import STANDARD_ALLOCATOR
from ._alloc import Allocator
from ._alloc import resolve_allocator
from ._config import DEFAULT_CONFIG
from ._config import MAX_COUNT
from ._config import CodecConfig
from ._counter import count_utf8_codepoints
from ._counter import count_utf16_codepoints
from ._decoder import decode_utf8
from ._decoder import decode_utf8_into
from ._decoder import decode_utf16
from ._decoder import decode_utf16_into
from ._encoder import encode_utf8
from ._encoder import encode_utf8_into
from ._encoder import encode_utf16
from ._encoder import encode_utf16_into
from ._errors import CodecError
from ._errors import ErrorCode
from ._errors import call_status
from ._estimator import utf8_size
from ._estimator import utf16_size
from ._probe import codepoint_length
from ._probe import utf8_length
from ._probe import utf16_length
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._result import Conversion
from ._result import Form
from ._transcode import utf8_to_utf16_into
from ._transcode import utf16_to_utf8_into
from ._transcode import utf8_to_utf16 as _utf8_to_utf16
from ._transcode import utf16_to_utf8 as _utf16_to_utf8

__version__ = "0.1.0"

__all__ = [
    "MAX_COUNT",
    "STANDARD_ALLOCATOR",
    "DEFAULT_CONFIG",
    "Allocator",
    "CodecConfig",
    "CodecError",
    "Conversion",
    "ErrorCode",
    "Form",
    "HotPathStats",
    "call_status",
    "clear_hot_path_stats",
    "codepoint_length",
    "codepoints_to_utf16",
    "codepoints_to_utf8",
    "count_utf16_codepoints",
    "count_utf8_codepoints",
    "decode_text",
    "decode_utf16",
    "decode_utf16_into",
    "decode_utf8",
    "decode_utf8_into",
    "encode_text",
    "encode_utf16",
    "encode_utf16_into",
    "encode_utf8",
    "encode_utf8_into",
    "get_hot_path_stats",
    "resolve_allocator",
    "utf16_length",
    "utf16_size",
    "utf16_to_codepoints",
    "utf16_to_utf8",
    "utf16_to_utf8_into",
    "utf8_length",
    "utf8_size",
    "utf8_to_codepoints",
    "utf8_to_utf16",
    "utf8_to_utf16_into",
]

Units: TypeAlias = Sequence[int]
Buffer: TypeAlias = MutableSequence[int]


def _require_buffer(
    buffer: Buffer | None, capacity: int | None, name: str
) -> None:
    if buffer is None and capacity is not None:
        raise CodecError(
            ErrorCode.INVALID_PARAMETER, detail=f"{name} given without buffer"
        )


def utf8_to_codepoints(
    source: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """
    Decodes UTF-8 into codepoints.

    Args:
        source: UTF-8 bytes ending with a zero byte or at ``size``
        size: explicit maximum number of bytes to read
        out: caller-owned destination; a buffer is allocated when omitted
        capacity: codepoints ``out`` may take before its terminator
        allocator: strategy used instead of the configured default
        config: limits, default allocator and continuation range
    """
    _require_buffer(out, capacity, "capacity")
    if out is not None:
        count = decode_utf8_into(source, size, out, capacity, config)
        return Conversion(count, out, Form.CODEPOINTS)
    return decode_utf8(source, size, allocator, config)


def utf16_to_codepoints(
    source: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Decodes UTF-16 code units into codepoints."""
    _require_buffer(out, capacity, "capacity")
    if out is not None:
        count = decode_utf16_into(source, size, out, capacity, config)
        return Conversion(count, out, Form.CODEPOINTS)
    return decode_utf16(source, size, allocator, config)


def codepoints_to_utf8(
    codepoints: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Encodes codepoints as UTF-8 bytes."""
    _require_buffer(out, capacity, "capacity")
    if out is not None:
        count = encode_utf8_into(codepoints, size, out, capacity, config)
        return Conversion(count, out, Form.UTF8)
    return encode_utf8(codepoints, size, allocator, config)


def codepoints_to_utf16(
    codepoints: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Encodes codepoints as UTF-16 code units."""
    _require_buffer(out, capacity, "capacity")
    if out is not None:
        count = encode_utf16_into(codepoints, size, out, capacity, config)
        return Conversion(count, out, Form.UTF16)
    return encode_utf16(codepoints, size, allocator, config)


def utf8_to_utf16(
    source: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    scratch: Buffer | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """
    Converts UTF-8 straight to UTF-16.

    ``scratch`` receives the intermediate codepoints; without it they go
    through a buffer taken from the allocator and released afterwards.
    """
    _require_buffer(out, capacity, "capacity")
    _require_buffer(scratch, scratch_capacity, "scratch_capacity")
    if out is not None:
        count = utf8_to_utf16_into(
            source,
            size,
            out,
            capacity,
            scratch,
            scratch_capacity,
            allocator,
            config,
        )
        return Conversion(count, out, Form.UTF16)
    return _utf8_to_utf16(
        source, size, scratch, scratch_capacity, allocator, config
    )


def utf16_to_utf8(
    source: Units | None,
    *,
    size: int | None = None,
    out: Buffer | None = None,
    capacity: int | None = None,
    scratch: Buffer | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Converts UTF-16 straight to UTF-8."""
    _require_buffer(out, capacity, "capacity")
    _require_buffer(scratch, scratch_capacity, "scratch_capacity")
    if out is not None:
        count = utf16_to_utf8_into(
            source,
            size,
            out,
            capacity,
            scratch,
            scratch_capacity,
            allocator,
            config,
        )
        return Conversion(count, out, Form.UTF8)
    return _utf16_to_utf8(
        source, size, scratch, scratch_capacity, allocator, config
    )


def encode_text(
    text: str,
    form: Form | str = Form.UTF8,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Encodes a Python string into UTF-8, UTF-16 or codepoints."""
    if not isinstance(text, str):
        raise TypeError(f"text must be str, not {type(text).__name__}")
    form = Form(form)

    codepoints = [ord(char) for char in text]
    if 0 in codepoints:
        raise CodecError(
            ErrorCode.INVALID_CODEPOINT,
            pos=codepoints.index(0),
            detail="NUL is reserved as terminator",
        )

    if form is Form.UTF8:
        return codepoints_to_utf8(codepoints, config=config)
    if form is Form.UTF16:
        return codepoints_to_utf16(codepoints, config=config)

    # Lone surrogates can live in a str; reject them like the encoders do
    utf16_size(codepoints, config=config)
    return Conversion(len(codepoints), [*codepoints, 0], Form.CODEPOINTS)


def decode_text(
    units: Units,
    form: Form | str = Form.UTF8,
    config: CodecConfig = DEFAULT_CONFIG,
) -> str:
    """Decodes UTF-8, UTF-16 or codepoint units into a Python string."""
    form = Form(form)
    if form is Form.UTF8:
        return utf8_to_codepoints(units, config=config).text()
    if form is Form.UTF16:
        return utf16_to_codepoints(units, config=config).text()

    # Validate through the encoder's range checks before rendering
    utf8_size(units, config=config)
    count = codepoint_length(units, config)
    return "".join(map(chr, units[:count]))
