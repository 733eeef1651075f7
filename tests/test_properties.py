"""
Property-based tests comparing the codec with Python's built-in codecs.
"""

from hypothesis import example
from hypothesis import given
from hypothesis import settings
from hypothesis import strategies as st

import utfcodec
from utfcodec import CodecError

from conftest import utf16_units

# Scalar values other than the NUL terminator
codepoints = st.one_of(
    st.integers(min_value=1, max_value=0xD7FF),
    st.integers(min_value=0xE000, max_value=0x10FFFF),
)
texts = st.lists(codepoints, max_size=64).map(
    lambda cps: "".join(map(chr, cps))
)


@given(texts)
@settings(max_examples=200)
def test_utf8_round_trip(text: str) -> None:
    """Encoding then decoding UTF-8 reproduces the codepoints."""
    cps = [ord(char) for char in text]
    encoded = utfcodec.encode_utf8(cps)
    assert bytes(encoded.units) == text.encode("utf-8")

    decoded = utfcodec.decode_utf8(encoded.buffer)
    assert decoded.units == cps


@given(texts)
@settings(max_examples=200)
def test_utf16_round_trip(text: str) -> None:
    """Encoding then decoding UTF-16 reproduces the codepoints."""
    cps = [ord(char) for char in text]
    encoded = utfcodec.encode_utf16(cps)
    assert tuple(encoded.units) == utf16_units(text)

    decoded = utfcodec.decode_utf16(encoded.buffer)
    assert decoded.units == cps


@given(texts)
def test_counts_and_sizes_agree(text: str) -> None:
    """Counters and estimators agree with the encoded lengths."""
    cps = [ord(char) for char in text]
    utf8 = text.encode("utf-8")
    utf16 = utf16_units(text)

    assert utfcodec.count_utf8_codepoints(utf8) == len(cps)
    assert utfcodec.count_utf16_codepoints(list(utf16)) == len(cps)
    assert utfcodec.utf8_size(cps) == len(utf8)
    assert utfcodec.utf16_size(cps) == len(utf16)


@given(texts)
def test_transcoding_matches_builtin(text: str) -> None:
    """Direct UTF-8 <-> UTF-16 conversion matches Python's codecs."""
    utf8 = text.encode("utf-8")
    utf16 = utf16_units(text)

    assert tuple(utfcodec.utf8_to_utf16(utf8).units) == utf16
    assert bytes(utfcodec.utf16_to_utf8(list(utf16)).units) == utf8


@given(st.lists(st.integers(min_value=1, max_value=0xFFFF), max_size=32))
@example([0xD800])
@example([0xDC00, 0xD800])
@example([0xD83D, 0xDE00])
def test_arbitrary_utf16_matches_strict_decode(units: list[int]) -> None:
    """
    Arbitrary code units either decode exactly like Python's strict
    UTF-16 decoder or are rejected by both.
    """
    raw = b"".join(unit.to_bytes(2, "little") for unit in units)
    try:
        expected = raw.decode("utf-16-le")
    except UnicodeDecodeError:
        expected = None

    try:
        decoded = utfcodec.decode_utf16(units)
    except CodecError:
        assert expected is None
    else:
        assert decoded.text() == expected


@given(st.binary(max_size=32))
@example(b"\xc3")
@example(b"\xe2\x82")
def test_utf8_count_agrees_with_decode(data: bytes) -> None:
    """
    Whenever decoding succeeds, the counter reports the decoded count.
    """
    try:
        decoded = utfcodec.decode_utf8(data)
    except CodecError as exc:
        assert exc.code < 0
        return
    assert utfcodec.count_utf8_codepoints(data) == decoded.count


@given(st.binary(max_size=32).filter(lambda b: 0 not in b))
def test_valid_builtin_utf8_is_accepted(data: bytes) -> None:
    """Input Python accepts as strict UTF-8 also decodes here."""
    try:
        expected = data.decode("utf-8")
    except UnicodeDecodeError:
        return
    assert utfcodec.decode_utf8(data).text() == expected
