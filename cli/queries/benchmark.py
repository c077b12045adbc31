from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.random import default_rng

from vptreex.algo import build_tree
from vptreex.core.metrics import MetricLike
from vptreex.core.tree import VPTree
from vptreex.queries.knn import knn
from tests.utils.datasets import gaussian_points


@dataclass(frozen=True)
class QueryBenchmarkResult:
    elapsed_seconds: float
    queries: int
    k: int
    latency_ms: float
    queries_per_second: float
    build_seconds: float | None = None
    tree_depth: int | None = None


def _build_tree(
    *,
    dimension: int,
    tree_points: int,
    seed: int,
    metric: MetricLike = None,
    prebuilt_points: np.ndarray | None = None,
) -> Tuple[VPTree, np.ndarray, float]:
    if prebuilt_points is not None:
        points_np = np.asarray(prebuilt_points, dtype=np.float64)
    else:
        points_np = gaussian_points(default_rng(seed), tree_points, dimension)
    start = time.perf_counter()
    tree = build_tree(list(points_np), metric, seed=seed)
    build_seconds = time.perf_counter() - start
    return tree, points_np, build_seconds


def benchmark_knn_latency(
    *,
    dimension: int,
    tree_points: int,
    query_count: int,
    k: int,
    seed: int = 0,
    metric: MetricLike = None,
    prebuilt_points: np.ndarray | None = None,
    prebuilt_queries: np.ndarray | None = None,
) -> Tuple[VPTree, QueryBenchmarkResult]:
    tree, _, build_seconds = _build_tree(
        dimension=dimension,
        tree_points=tree_points,
        seed=seed,
        metric=metric,
        prebuilt_points=prebuilt_points,
    )
    if prebuilt_queries is not None:
        queries = np.asarray(prebuilt_queries, dtype=np.float64)
    else:
        queries = gaussian_points(default_rng(seed + 1), query_count, dimension)

    start = time.perf_counter()
    knn(tree, queries, k=k)
    elapsed = time.perf_counter() - start
    qps = queries.shape[0] / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / queries.shape[0]) * 1e3 if queries.shape[0] else 0.0
    return tree, QueryBenchmarkResult(
        elapsed_seconds=elapsed,
        queries=int(queries.shape[0]),
        k=k,
        latency_ms=latency,
        queries_per_second=qps,
        build_seconds=build_seconds,
        tree_depth=tree.depth,
    )


__all__ = ["QueryBenchmarkResult", "_build_tree", "benchmark_knn_latency"]
