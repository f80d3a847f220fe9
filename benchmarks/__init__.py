"""Performance benchmarks for rltiles.

This package contains microbenchmarks for hot paths in the library,
including single-vector encoding, per-tiling fan-out and batch encoding.
"""
