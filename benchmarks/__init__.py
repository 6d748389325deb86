"""
Benchmarks package for Merkle trees.

ASV benchmarks for:
- Tree construction and incremental ``add`` (full rebuild per call)
- Inclusion path derivation for the flat and indexed variants
- Stand-alone path verification

All test data is generated deterministically from ``BENCHMARK_SEED``.
"""

from .benchmark_utils import BaseBenchmark, BenchmarkUtils
from .config import BenchmarkConfig

__all__ = ["BaseBenchmark", "BenchmarkConfig", "BenchmarkUtils"]
