from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

import numpy as np

from vptreex.algo.build import SeedLike, build_tree
from vptreex.api.runtime import Runtime
from vptreex.core.metrics import Metric, MetricLike, get_metric, resolve_metric
from vptreex.core.tree import VPTree
from vptreex.queries.knn import knn as knn_query
from vptreex.queries.knn import search as search_query


@dataclass(frozen=True)
class VPT:
    """Thin façade around tree construction + query helpers."""

    runtime: Runtime = field(default_factory=Runtime)
    tree: VPTree | None = None
    metric: MetricLike = None

    def _resolve_metric(self) -> Metric:
        if self.metric is not None:
            return resolve_metric(self.metric)
        return get_metric(self.runtime.to_config().metric)

    def fit(self, items: Iterable[Any], *, seed: SeedLike = None) -> "VPT":
        """Build a tree over ``items`` and return a façade bound to it."""

        context = self.runtime.activate()
        metric = self._resolve_metric()
        if seed is None:
            seed = context.config.seed
        tree = build_tree(items, metric, seed=seed)
        return VPT(runtime=self.runtime, tree=tree, metric=metric)

    def search(self, target: Any, k: int) -> Tuple[List[Any], List[float]]:
        tree = self._require_tree()
        self.runtime.activate()
        return search_query(tree, target, k)

    def knn(
        self,
        targets: Iterable[Any],
        *,
        k: int,
        return_distances: bool = False,
    ) -> List[List[Any]] | Tuple[List[List[Any]], np.ndarray]:
        tree = self._require_tree()
        self.runtime.activate()
        return knn_query(tree, targets, k=k, return_distances=return_distances)

    def nearest(self, target: Any) -> Tuple[Any, float] | None:
        found_items, found_distances = self.search(target, 1)
        if not found_items:
            return None
        return found_items[0], found_distances[0]

    def __len__(self) -> int:
        return 0 if self.tree is None else len(self.tree)

    def _require_tree(self) -> VPTree:
        if self.tree is None:
            raise ValueError("VPT requires an existing tree; call fit() first.")
        return self.tree


__all__ = ["VPT"]
