from __future__ import annotations

from typing import Any, Callable, Iterable, List, MutableSequence, Tuple, TypeVar, Union

import numpy as np

from vptreex import config as vx_config
from vptreex.core.metrics import MetricLike, resolve_metric
from vptreex.core.tree import NO_CHILD, TreeBuildStats, VPTree
from vptreex.diagnostics import log_operation
from vptreex.logging import get_logger

LOGGER = get_logger("algo.build")

Item = TypeVar("Item")
SeedLike = Union[int, np.random.Generator, None]


def _resolve_rng(seed: SeedLike) -> Tuple[np.random.Generator, int | None]:
    if isinstance(seed, np.random.Generator):
        return seed, None
    if seed is None:
        seed = vx_config.runtime_config().seed
    return np.random.default_rng(seed), seed


def _partition(
    buffer: MutableSequence[Item],
    start: int,
    stop: int,
    vantage: Item,
    distance: Callable[[Any, Any], float],
) -> int:
    """Partition ``buffer[start:stop]`` around the midpoint element's distance.

    Elements no farther from ``vantage`` than the midpoint element end up in
    ``[start, store)``; the midpoint element itself lands on ``store`` and the
    strictly farther elements follow it. Returns ``store``.
    """

    median = (start + stop) // 2
    last = stop - 1
    buffer[median], buffer[last] = buffer[last], buffer[median]
    pivot_distance = distance(buffer[last], vantage)
    store = start
    for idx in range(start, last):
        if distance(buffer[idx], vantage) <= pivot_distance:
            buffer[idx], buffer[store] = buffer[store], buffer[idx]
            store += 1
    buffer[store], buffer[last] = buffer[last], buffer[store]
    return store


def build_tree(
    items: Iterable[Item],
    metric: MetricLike = None,
    *,
    seed: SeedLike = None,
) -> VPTree[Item]:
    """Build an immutable VP-tree over ``items``.

    Parameters
    ----------
    items:
        Collection to index. A ``list`` is partitioned in place and its order
        is meaningless afterwards; any other iterable is copied first.
    metric:
        Distance callable, registered metric name, or ``Metric``. ``None``
        selects the runtime metric (``VPTREEX_METRIC``).
    seed:
        Seed or ``numpy.random.Generator`` driving vantage-point selection.
        ``None`` falls back to ``VPTREEX_SEED`` and then to fresh entropy.
    """

    resolved = resolve_metric(metric)
    rng, seed_value = _resolve_rng(seed)
    with log_operation(LOGGER, "build_tree") as op_log:
        buffer: List[Item] = items if isinstance(items, list) else list(items)
        size = len(buffer)
        thresholds = np.zeros(size, dtype=np.float64)
        left = np.full(size, NO_CHILD, dtype=np.int64)
        right = np.full(size, NO_CHILD, dtype=np.int64)

        evaluations = 0
        base_distance = resolved.distance

        def distance(lhs: Any, rhs: Any) -> float:
            nonlocal evaluations
            evaluations += 1
            return base_distance(lhs, rhs)

        # Each pending range is (lower, upper, level); the node for a range
        # always lives at its lower bound once the vantage point is swapped in.
        pending: List[Tuple[int, int, int]] = [(0, size, 1)] if size else []
        depth = 0
        while pending:
            lower, upper, level = pending.pop()
            depth = max(depth, level)
            pivot = int(rng.integers(lower, upper))
            buffer[lower], buffer[pivot] = buffer[pivot], buffer[lower]
            vantage = buffer[lower]
            start = lower + 1
            if start >= upper:
                continue
            store = _partition(buffer, start, upper, vantage, distance)
            thresholds[lower] = distance(buffer[store], vantage)
            if store > start:
                left[lower] = start
                pending.append((start, store, level + 1))
            right[lower] = store
            pending.append((store, upper, level + 1))

        stats = TreeBuildStats(
            num_items=size,
            depth=depth,
            distance_evaluations=evaluations,
            seed=seed_value,
        )
        op_log.add_metadata(
            items=size,
            depth=depth,
            distance_evals=evaluations,
            metric=resolved.name,
        )
        if size == 0:
            return VPTree.empty(resolved)
        return VPTree.from_buffers(
            buffer,
            thresholds=thresholds,
            left=left,
            right=right,
            metric=resolved,
            root_index=0,
            stats=stats,
        )


def construct(
    metric: MetricLike,
    items: Iterable[Item],
    *,
    seed: SeedLike = None,
) -> VPTree[Item]:
    """Metric-first alias of :func:`build_tree`."""

    return build_tree(items, metric, seed=seed)


__all__ = ["build_tree", "construct"]
