"""Allocator strategies and the resolver that picks one per call."""

from __future__ import annotations

import logging
from array import array
from collections.abc import Callable
from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import TypeAlias

from ._errors import CodecError
from ._errors import ErrorCode

if TYPE_CHECKING:
    from ._config import CodecConfig

logger = logging.getLogger(__name__)

Buffer: TypeAlias = MutableSequence[int]
AllocateFunc = Callable[[int, int], Buffer | None]
FreeFunc = Callable[[Buffer], None]

# Element widths in bytes
UTF8_UNIT = 1
UTF16_UNIT = 2
CODEPOINT_UNIT = 4

_TYPECODES = {UTF16_UNIT: "H", CODEPOINT_UNIT: "I"}


@dataclass(frozen=True)
class Allocator:
    """
    Pair of functions used to obtain and release output buffers.

    ``allocate(count, itemsize)`` returns a zero-filled buffer of ``count``
    elements, each ``itemsize`` bytes wide, or ``None`` on failure.
    ``free(buffer)`` releases a buffer obtained from ``allocate``.
    Both members must be present for the strategy to be usable.
    """

    allocate: AllocateFunc | None
    free: FreeFunc | None

    @property
    def is_complete(self) -> bool:
        return callable(self.allocate) and callable(self.free)


def _standard_allocate(count: int, itemsize: int) -> Buffer:
    if itemsize == UTF8_UNIT:
        return bytearray(count)
    buffer = array(_TYPECODES[itemsize], [0]) * count
    if buffer.itemsize < itemsize:
        raise MemoryError(f"no array typecode holds {itemsize} bytes")
    return buffer


def _standard_free(buffer: Buffer) -> None:
    del buffer[:]


STANDARD_ALLOCATOR: Allocator = Allocator(_standard_allocate, _standard_free)


def resolve_allocator(
    allocator: Allocator | None, config: CodecConfig
) -> Allocator:
    """Returns the strategy to use, falling back to the configured default."""
    if allocator is None:
        allocator = config.default_allocator
        if allocator is None:
            raise CodecError(ErrorCode.NULL_ALLOCATOR)
    if not isinstance(allocator, Allocator) or not allocator.is_complete:
        raise CodecError(ErrorCode.INVALID_ALLOCATOR)
    return allocator


def allocate_buffer(
    allocator: Allocator, count: int, itemsize: int, config: CodecConfig
) -> Buffer:
    """
    Allocates ``count`` elements of ``itemsize`` bytes through ``allocator``.

    The total byte size must stay within ``config.max_count``. A strategy
    that fails, raises ``MemoryError`` or hands back a short buffer is
    reported as a bad allocation.
    """
    if count > config.max_count // itemsize:
        raise CodecError(
            ErrorCode.OVERFLOW, detail=f"{count} x {itemsize} bytes"
        )

    assert allocator.allocate is not None
    try:
        buffer = allocator.allocate(count, itemsize)
    except MemoryError as exc:
        raise CodecError(ErrorCode.BAD_ALLOCATION, detail=str(exc)) from exc

    if buffer is None:
        raise CodecError(ErrorCode.BAD_ALLOCATION)
    if len(buffer) < count:
        release_buffer(allocator, buffer)
        raise CodecError(
            ErrorCode.BAD_ALLOCATION,
            detail=f"got {len(buffer)} elements, need {count}",
        )

    logger.debug("allocated %d x %d-byte buffer", count, itemsize)
    return buffer


def release_buffer(allocator: Allocator, buffer: Buffer) -> None:
    """Hands ``buffer`` back to the strategy that produced it."""
    assert allocator.free is not None
    logger.debug("releasing %d-element buffer", len(buffer))
    allocator.free(buffer)


def fill_new_buffer(
    allocator: Allocator,
    capacity: int,
    itemsize: int,
    fill: Callable[[Buffer, int], int],
    config: CodecConfig,
) -> tuple[int, Buffer]:
    """
    Allocates room for ``capacity`` elements plus a terminator and fills it.

    Ownership of the buffer passes to the caller only if ``fill`` succeeds;
    otherwise it is released before the error propagates.
    """
    if capacity >= config.max_count:
        raise CodecError(ErrorCode.OVERFLOW, detail=f"capacity {capacity}")

    buffer = allocate_buffer(allocator, capacity + 1, itemsize, config)
    try:
        written = fill(buffer, capacity)
    except CodecError as exc:
        logger.debug("conversion failed with %s, releasing", exc.code.name)
        release_buffer(allocator, buffer)
        raise
    return written, buffer
