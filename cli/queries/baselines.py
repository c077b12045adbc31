from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List

import numpy as np

from vptreex.baseline import BruteForceKNN
from vptreex.core.metrics import MetricLike


@dataclass(frozen=True)
class BaselineComparison:
    name: str
    build_seconds: float
    elapsed_seconds: float
    latency_ms: float
    queries_per_second: float


def _run_bruteforce_baseline(
    points: np.ndarray, queries: np.ndarray, *, k: int, metric: MetricLike
) -> BaselineComparison:
    start_build = time.perf_counter()
    baseline = BruteForceKNN.from_items(list(points), metric)
    build_seconds = time.perf_counter() - start_build
    start = time.perf_counter()
    baseline.knn(queries, k=k)
    elapsed = time.perf_counter() - start
    qps = queries.shape[0] / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / queries.shape[0]) * 1e3 if queries.shape[0] else 0.0
    return BaselineComparison(
        name="bruteforce",
        build_seconds=build_seconds,
        elapsed_seconds=elapsed,
        latency_ms=latency,
        queries_per_second=qps,
    )


def run_baseline_comparisons(
    points: np.ndarray,
    queries: np.ndarray,
    *,
    k: int,
    mode: str,
    metric: MetricLike = None,
) -> List[BaselineComparison]:
    if mode == "none":
        return []
    if mode == "bruteforce":
        return [_run_bruteforce_baseline(points, queries, k=k, metric=metric)]
    raise ValueError(f"Unknown baseline mode '{mode}'.")


__all__ = ["BaselineComparison", "run_baseline_comparisons"]
