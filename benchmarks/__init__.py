"""
Benchmark suite for jsonext serialization performance.

Compares jsonext against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures encoding and decoding speed across different data shapes.
"""
