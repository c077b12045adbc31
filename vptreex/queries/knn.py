from __future__ import annotations

import math
import operator
from typing import Any, Iterable, List, Tuple, TypeVar

import numpy as np

from vptreex import config as vx_config
from vptreex.core.topk import BoundedMaxHeap
from vptreex.core.tree import NO_CHILD, VPTree
from vptreex.diagnostics import log_operation
from vptreex.logging import get_logger

LOGGER = get_logger("queries.knn")

Item = TypeVar("Item")

_ROOT = 0
_LEFT = 1
_RIGHT = 2


def _validate_k(k: Any) -> int:
    if isinstance(k, bool):
        raise TypeError("k must be an integer, got bool.")
    try:
        return operator.index(k)
    except TypeError as exc:
        raise TypeError(f"k must be an integer, got {type(k).__name__}.") from exc


def _single_query_knn(
    tree: VPTree[Item],
    target: Any,
    k: int,
    *,
    near_first: bool,
) -> Tuple[List[Item], List[float], int]:
    """Branch-and-bound walk collecting the ``k`` nearest items to ``target``.

    ``tau`` and the candidate heap belong to this call alone. Pending visits
    carry the parent's distance and threshold so the pruning test runs when
    the visit is popped, against the radius as tightened by everything
    explored before it.
    """

    best: BoundedMaxHeap[Item] = BoundedMaxHeap(k)
    tau = math.inf
    distance = tree.metric.distance
    items = tree.items
    thresholds = tree.thresholds
    left = tree.left
    right = tree.right
    visited = 0

    pending: List[Tuple[int, float, float, int]] = [(tree.root_index, 0.0, 0.0, _ROOT)]
    while pending:
        node, parent_dist, parent_threshold, side = pending.pop()
        # Both tests are inclusive; ties may sit on either side of a threshold.
        if side == _LEFT and parent_dist - tau > parent_threshold:
            continue
        if side == _RIGHT and parent_dist + tau < parent_threshold:
            continue
        visited += 1

        item = items[node]
        dist = distance(item, target)
        if dist < tau:
            if best.is_full():
                best.pop_max()
            best.push(item, dist)
            if best.is_full():
                tau = best.max_distance()

        lo = int(left[node])
        hi = int(right[node])
        if lo == NO_CHILD and hi == NO_CHILD:
            continue
        threshold = float(thresholds[node])

        # Push the far side first so the near side is explored first.
        if near_first and dist >= threshold:
            order = ((lo, _LEFT), (hi, _RIGHT))
        else:
            order = ((hi, _RIGHT), (lo, _LEFT))
        for child, child_side in order:
            if child != NO_CHILD:
                pending.append((child, dist, threshold, child_side))

    found_items: List[Item] = []
    found_distances: List[float] = []
    for item, dist in best.drain():
        found_items.append(item)
        found_distances.append(float(dist))
    found_items.reverse()
    found_distances.reverse()
    return found_items, found_distances, visited


def search(tree: VPTree[Item], target: Any, k: int) -> Tuple[List[Item], List[float]]:
    """Return the ``k`` items nearest to ``target`` and their distances.

    Both lists are ordered by ascending distance and hold ``min(k, len(tree))``
    entries. ``k < 1`` and empty trees yield two empty lists.
    """

    k = _validate_k(k)
    if k < 1 or tree.is_empty():
        return [], []
    near_first = vx_config.runtime_config().near_first
    found_items, found_distances, _ = _single_query_knn(
        tree, target, k, near_first=near_first
    )
    return found_items, found_distances


def knn(
    tree: VPTree[Item],
    targets: Iterable[Any],
    *,
    k: int,
    return_distances: bool = False,
) -> List[List[Item]] | Tuple[List[List[Item]], np.ndarray]:
    """Batched :func:`search` over ``targets``.

    Returns one neighbour list per target and, when ``return_distances`` is
    set, a ``(queries, min(k, len(tree)))`` float64 array of distances.
    """

    k = _validate_k(k)
    with log_operation(LOGGER, "knn_query") as op_log:
        near_first = vx_config.runtime_config().near_first
        width = min(max(k, 0), tree.num_items)
        neighbours: List[List[Item]] = []
        rows: List[List[float]] = []
        visited_total = 0
        for target in targets:
            if width == 0:
                neighbours.append([])
                rows.append([])
                continue
            found_items, found_distances, visited = _single_query_knn(
                tree, target, k, near_first=near_first
            )
            neighbours.append(found_items)
            rows.append(found_distances)
            visited_total += visited

        op_log.add_metadata(
            queries=len(neighbours),
            k=k,
            items=tree.num_items,
            visited=visited_total,
        )
        if not return_distances:
            return neighbours
        distances = np.asarray(rows, dtype=np.float64).reshape(len(rows), width)
        return neighbours, distances


def nearest_neighbor(tree: VPTree[Item], target: Any) -> Tuple[Item, float] | None:
    found_items, found_distances = search(tree, target, 1)
    if not found_items:
        return None
    return found_items[0], found_distances[0]


__all__ = ["knn", "nearest_neighbor", "search"]
