"""
Benchmark suite for utfcodec transcoding performance.

Compares utfcodec against Python's built-in codecs:
- str.encode / bytes.decode for UTF-8
- str.encode / bytes.decode for UTF-16-LE

Measures conversion speed and memory usage across different scripts.
"""
