"""
Pytest configuration and shared fixtures for utfcodec tests.

Provides immutable test data fixtures whose expected encodings come from
Python's own codecs, plus an allocator that records every call.
"""

from collections.abc import MutableSequence
from dataclasses import dataclass
from dataclasses import field

import pytest

import utfcodec


def utf16_units(text: str) -> tuple[int, ...]:
    """Returns the UTF-16 code units Python produces for ``text``."""
    raw = text.encode("utf-16-le")
    return tuple(
        int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)
    )


@dataclass(frozen=True)
class CodecTestCase:
    """
    Immutable container for one text in all three representations.

    Sequences exclude the terminator.
    """

    description: str
    codepoints: tuple[int, ...]
    utf8: bytes
    utf16: tuple[int, ...]

    @classmethod
    def from_text(cls, description: str, text: str) -> "CodecTestCase":
        return cls(
            description=description,
            codepoints=tuple(ord(char) for char in text),
            utf8=text.encode("utf-8"),
            utf16=utf16_units(text),
        )


@dataclass(frozen=True)
class MalformedCase:
    """Input that must be rejected with a specific error code."""

    description: str
    units: tuple[int, ...] | bytes
    expected: utfcodec.ErrorCode
    size: int | None = None


@dataclass
class TrackingAllocator:
    """Allocator strategy that records what it hands out and takes back."""

    allocated: list[MutableSequence[int]] = field(default_factory=list)
    freed: list[MutableSequence[int]] = field(default_factory=list)

    def allocate(self, count: int, itemsize: int) -> MutableSequence[int]:
        assert utfcodec.STANDARD_ALLOCATOR.allocate is not None
        buffer = utfcodec.STANDARD_ALLOCATOR.allocate(count, itemsize)
        assert buffer is not None
        self.allocated.append(buffer)
        return buffer

    def free(self, buffer: MutableSequence[int]) -> None:
        self.freed.append(buffer)

    @property
    def strategy(self) -> utfcodec.Allocator:
        return utfcodec.Allocator(self.allocate, self.free)

    def was_freed(self, buffer: MutableSequence[int]) -> bool:
        return any(item is buffer for item in self.freed)


@pytest.fixture
def tracking_allocator() -> TrackingAllocator:
    """Provides a fresh recording allocator."""
    return TrackingAllocator()


@pytest.fixture
def valid_cases() -> list[CodecTestCase]:
    """
    Provides well-formed texts covering every encoded width.

    Includes each boundary of the UTF-8 length table and both edges of
    the surrogate band.
    """
    return [
        CodecTestCase.from_text("empty", ""),
        CodecTestCase.from_text("hello world", "Hello World !"),
        CodecTestCase.from_text("true utf8", "\u00c9\u0800\U00010000"),
        CodecTestCase.from_text("one byte max", "\x7f"),
        CodecTestCase.from_text("two byte edges", "\x80\u07ff"),
        CodecTestCase.from_text("three byte edges", "\u0800\uffff"),
        CodecTestCase.from_text("around surrogates", "\ud7ff\ue000"),
        CodecTestCase.from_text("four byte edges", "\U00010000\U0010ffff"),
        CodecTestCase.from_text("old 4-byte threshold", "\u1000\u1fff"),
        CodecTestCase.from_text(
            "mixed", "na\u00efve \u65e5\u672c \U0001f600!"
        ),
    ]


@pytest.fixture
def malformed_utf8_cases() -> list[MalformedCase]:
    """
    Provides UTF-8 inputs that both the counter and the decoder reject.
    """
    ended = utfcodec.ErrorCode.STRING_ENDED_IN_CHARACTER
    invalid = utfcodec.ErrorCode.INVALID_UTF8_CHARACTER
    return [
        MalformedCase("lead without continuation", b"\xc9", ended),
        MalformedCase("orphan continuation", b"\x80", invalid),
        MalformedCase("continuation range top", b"\xbf", invalid),
        MalformedCase("five byte lead", b"\xf8\x80\x80\x80\x80", invalid),
        MalformedCase("ff lead", b"\xff", invalid),
        MalformedCase("ascii as continuation", b"\xc3A", invalid),
        MalformedCase("lead as continuation", b"\xc3\xc0", invalid),
        MalformedCase("truncated three byte", b"\xe0\xa0", ended),
        MalformedCase("truncated four byte", b"A\xf0\x90\x80", ended),
        MalformedCase(
            "terminator inside sequence", b"\xe0\xa0\x00\x80", ended, size=4
        ),
        MalformedCase("bound inside sequence", b"\xc3\x89", ended, size=1),
        MalformedCase("value above byte range", (0x41, 0x1C3), invalid),
    ]


@pytest.fixture
def malformed_utf16_cases() -> list[MalformedCase]:
    """
    Provides UTF-16 inputs that both the counter and the decoder reject.
    """
    ended = utfcodec.ErrorCode.STRING_ENDED_IN_CHARACTER
    invalid = utfcodec.ErrorCode.INVALID_UTF16_CHARACTER
    inversion = utfcodec.ErrorCode.SURROGATE_PAIR_INVERSION
    return [
        MalformedCase("lone low surrogate", (0xDC00,), inversion),
        MalformedCase("inverted pair", (0xDC00, 0xD800), inversion),
        MalformedCase("lone high surrogate", (0x41, 0xD800), ended),
        MalformedCase("high then terminator", (0xD800, 0x0), ended, size=2),
        MalformedCase("high then ascii", (0xD800, 0x41), invalid),
        MalformedCase("two highs", (0xD800, 0xDBFF), invalid),
        MalformedCase("value above unit range", (0x10000,), invalid),
        MalformedCase("bound splits pair", (0xD800, 0xDC00), ended, size=1),
    ]
