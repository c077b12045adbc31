from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Tuple, TypeVar

from vptreex.core.metrics import Metric, MetricLike, resolve_metric
from vptreex.queries.knn import _validate_k

Item = TypeVar("Item")


@dataclass(frozen=True)
class BruteForceKNN(Generic[Item]):
    """Linear-scan k-NN over the same metric contract as :class:`VPTree`."""

    items: Tuple[Item, ...]
    metric: Metric

    @classmethod
    def from_items(cls, items: Iterable[Item], metric: MetricLike = None) -> "BruteForceKNN[Item]":
        return cls(items=tuple(items), metric=resolve_metric(metric))

    def __len__(self) -> int:
        return len(self.items)

    def search(self, target: Any, k: int) -> Tuple[List[Item], List[float]]:
        k = _validate_k(k)
        if k < 1 or not self.items:
            return [], []
        distance = self.metric.distance
        scored = (
            (distance(item, target), order, item)
            for order, item in enumerate(self.items)
        )
        best = heapq.nsmallest(k, scored, key=lambda entry: (entry[0], entry[1]))
        return [item for _, _, item in best], [float(dist) for dist, _, _ in best]

    def knn(self, targets: Iterable[Any], *, k: int) -> List[List[Item]]:
        return [self.search(target, k)[0] for target in targets]


__all__ = ["BruteForceKNN"]
