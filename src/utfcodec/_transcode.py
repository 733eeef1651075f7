"""Direct UTF-8 <-> UTF-16 conversion through an intermediate codepoint buffer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import MutableSequence
from typing import TypeAlias

from ._alloc import Allocator
from ._alloc import release_buffer
from ._alloc import resolve_allocator
from ._config import DEFAULT_CONFIG
from ._config import CodecConfig
from ._decoder import decode_utf8
from ._decoder import decode_utf8_into
from ._decoder import decode_utf16
from ._decoder import decode_utf16_into
from ._encoder import encode_utf8
from ._encoder import encode_utf8_into
from ._encoder import encode_utf16
from ._encoder import encode_utf16_into
from ._probe import Units
from ._result import Conversion
from ._result import Form

logger = logging.getLogger(__name__)

Scratch: TypeAlias = MutableSequence[int]
Decode = Callable[[Units | None, int | None, Allocator, CodecConfig], Conversion]
DecodeInto = Callable[
    [Units | None, int | None, Scratch, int | None, CodecConfig], int
]
EncodeStage = Callable[[Scratch, int, Allocator | None], Conversion]


def _transcode(
    decode: Decode,
    decode_into: DecodeInto,
    encode_stage: EncodeStage,
    source: Units | None,
    size: int | None,
    scratch: Scratch | None,
    scratch_capacity: int | None,
    allocator: Allocator | None,
    config: CodecConfig,
) -> Conversion:
    if scratch is not None:
        count = decode_into(source, size, scratch, scratch_capacity, config)
        logger.debug("decoded %d codepoints into caller scratch", count)
        return encode_stage(scratch, count, allocator)

    # The intermediate buffer is ours: release it whatever the encoder does
    owner = resolve_allocator(allocator, config)
    intermediate = decode(source, size, owner, config)
    logger.debug("decoded %d codepoints into owned buffer", intermediate.count)
    try:
        return encode_stage(intermediate.buffer, intermediate.count, owner)
    finally:
        release_buffer(owner, intermediate.buffer)


def utf8_to_utf16_into(
    source: Units | None,
    size: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    scratch: Scratch | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """
    Converts UTF-8 into a caller-owned UTF-16 buffer.

    The intermediate codepoints go to ``scratch`` when given, otherwise to
    a buffer obtained from ``allocator`` and released before returning.

    Returns:
        Number of UTF-16 units written, excluding the terminator
    """

    def encode_stage(
        codepoints: Scratch, count: int, _owner: Allocator | None
    ) -> Conversion:
        written = encode_utf16_into(codepoints, count, out, capacity, config)
        assert out is not None
        return Conversion(written, out, Form.UTF16)

    return _transcode(
        decode_utf8,
        decode_utf8_into,
        encode_stage,
        source,
        size,
        scratch,
        scratch_capacity,
        allocator,
        config,
    ).count


def utf8_to_utf16(
    source: Units | None,
    size: int | None = None,
    scratch: Scratch | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Converts UTF-8 into a freshly allocated UTF-16 buffer."""

    def encode_stage(
        codepoints: Scratch, count: int, owner: Allocator | None
    ) -> Conversion:
        return encode_utf16(codepoints, count, owner or allocator, config)

    return _transcode(
        decode_utf8,
        decode_utf8_into,
        encode_stage,
        source,
        size,
        scratch,
        scratch_capacity,
        allocator,
        config,
    )


def utf16_to_utf8_into(
    source: Units | None,
    size: int | None,
    out: MutableSequence[int] | None,
    capacity: int | None = None,
    scratch: Scratch | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """Converts UTF-16 into a caller-owned UTF-8 buffer."""

    def encode_stage(
        codepoints: Scratch, count: int, _owner: Allocator | None
    ) -> Conversion:
        written = encode_utf8_into(codepoints, count, out, capacity, config)
        assert out is not None
        return Conversion(written, out, Form.UTF8)

    return _transcode(
        decode_utf16,
        decode_utf16_into,
        encode_stage,
        source,
        size,
        scratch,
        scratch_capacity,
        allocator,
        config,
    ).count


def utf16_to_utf8(
    source: Units | None,
    size: int | None = None,
    scratch: Scratch | None = None,
    scratch_capacity: int | None = None,
    allocator: Allocator | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Conversion:
    """Converts UTF-16 into a freshly allocated UTF-8 buffer."""

    def encode_stage(
        codepoints: Scratch, count: int, owner: Allocator | None
    ) -> Conversion:
        return encode_utf8(codepoints, count, owner or allocator, config)

    return _transcode(
        decode_utf16,
        decode_utf16_into,
        encode_stage,
        source,
        size,
        scratch,
        scratch_capacity,
        allocator,
        config,
    )
