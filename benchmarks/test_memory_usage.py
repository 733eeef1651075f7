"""
Memory usage benchmarks for transcoding.

Measures peak memory consumption of the built-in codecs against the
utfcodec passes and their allocator-backed buffers.
"""

import tracemalloc
from typing import Any

import pytest

import utfcodec
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_codepoints
from benchmarks.data_generators import generate_text
from benchmarks.data_generators import generate_utf8


def measure_memory_usage(func: Any, *args: Any) -> tuple[Any, int]:
    """
    Measures peak memory usage during function execution.

    Returns:
        Tuple of (function_result, peak_memory_bytes)
    """
    tracemalloc.start()
    try:
        result = func(*args)
        current, peak = tracemalloc.get_traced_memory()
        return result, peak
    finally:
        tracemalloc.stop()


class TestMemoryUsage:
    """Memory usage benchmarks for transcoding."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_builtin_decode_memory(self, data_type: str) -> None:
        """Measures memory usage for bytes.decode."""
        data = generate_utf8(data_type)
        result, peak_memory = measure_memory_usage(data.decode, "utf-8")

        print(f"\nbuiltin decode {data_type}: {peak_memory:,} bytes")
        assert result

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_utfcodec_decode_memory(self, data_type: str) -> None:
        """Measures memory usage for decode_utf8."""
        data = generate_utf8(data_type)
        result, peak_memory = measure_memory_usage(utfcodec.decode_utf8, data)

        print(f"\nutfcodec decode {data_type}: {peak_memory:,} bytes")
        assert result.count > 0

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_utfcodec_encode_memory(self, data_type: str) -> None:
        """Measures memory usage for encode_utf8."""
        codepoints = generate_codepoints(data_type)
        result, peak_memory = measure_memory_usage(
            utfcodec.encode_utf8, codepoints
        )

        print(f"\nutfcodec encode {data_type}: {peak_memory:,} bytes")
        assert result.count > 0

    def test_memory_comparison_summary(self) -> None:
        """Generates a memory usage comparison for direct conversion."""
        results = {}

        for data_type in DATA_TYPES:
            data = generate_utf8(data_type)

            _, builtin_memory = measure_memory_usage(
                lambda: data.decode("utf-8").encode("utf-16-le")
            )
            _, owned_memory = measure_memory_usage(utfcodec.utf8_to_utf16, data)

            scratch = [0] * (len(generate_text(data_type)) + 1)
            _, scratch_memory = measure_memory_usage(
                lambda: utfcodec.utf8_to_utf16(data, scratch=scratch)
            )

            results[data_type] = {
                "builtin": builtin_memory,
                "owned": owned_memory,
                "scratch": scratch_memory,
            }

        print("\n" + "=" * 60)
        print("UTF-8 -> UTF-16 MEMORY USAGE (bytes)")
        print("=" * 60)
        print(f"{'Data Type':<12} {'builtin':<14} {'owned':<14} {'scratch':<14}")
        print("-" * 60)

        for data_type, measurements in results.items():
            print(
                f"{data_type:<12} {measurements['builtin']:<14,} "
                f"{measurements['owned']:<14,} {measurements['scratch']:<14,}"
            )

        print("=" * 60)
        assert len(results) == len(DATA_TYPES)
