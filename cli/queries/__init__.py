from __future__ import annotations

from .app import QueryCLIOptions, app, main, run_queries
from .baselines import BaselineComparison, run_baseline_comparisons
from .benchmark import QueryBenchmarkResult, _build_tree, benchmark_knn_latency

__all__ = [
    "BaselineComparison",
    "QueryBenchmarkResult",
    "_build_tree",
    "benchmark_knn_latency",
    "run_baseline_comparisons",
    "QueryCLIOptions",
    "app",
    "run_queries",
    "main",
]
