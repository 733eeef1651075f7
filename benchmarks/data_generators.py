"""
Test data generators for transcoding benchmarks.

Creates text samples that stress different encoded widths:
- ASCII only (1 byte per codepoint)
- Latin and Cyrillic (mostly 2 bytes)
- CJK (3 bytes)
- Emoji (4 bytes, surrogate pairs in UTF-16)
- A random mix of all of the above
"""

import random

DATA_TYPES = ["ascii", "latin", "cjk", "emoji", "mixed"]

# Codepoint ranges sampled per data type
_RANGES: dict[str, list[tuple[int, int]]] = {
    "ascii": [(0x20, 0x7E)],
    "latin": [(0xC0, 0x17F), (0x410, 0x44F)],
    "cjk": [(0x4E00, 0x9FFF)],
    "emoji": [(0x1F300, 0x1F64F)],
}
_TEXT_LENGTH = 4096


def generate_text(data_type: str, length: int = _TEXT_LENGTH) -> str:
    """Generates a reproducible text sample of ``length`` codepoints."""
    if data_type == "mixed":
        ranges = [r for group in _RANGES.values() for r in group]
    elif data_type in _RANGES:
        ranges = _RANGES[data_type]
    else:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(data_type)
    return "".join(
        chr(rng.randint(*rng.choice(ranges))) for _ in range(length)
    )


def generate_codepoints(data_type: str) -> list[int]:
    """Generates a zero-terminated codepoint array."""
    return [ord(char) for char in generate_text(data_type)] + [0]


def generate_utf8(data_type: str) -> bytes:
    """Generates UTF-8 bytes."""
    return generate_text(data_type).encode("utf-8")


def generate_utf16(data_type: str) -> list[int]:
    """Generates UTF-16 code units."""
    raw = generate_text(data_type).encode("utf-16-le")
    return [
        int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)
    ]
