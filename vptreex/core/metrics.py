from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Tuple, Union

import numpy as np

from vptreex import config as vx_config

DistanceFn = Callable[[Any, Any], float]


@dataclass(frozen=True)
class Metric:
    """Named distance function.

    ``distance`` must be a true metric: non-negative, zero only for equal
    items, symmetric, and obeying the triangle inequality. None of this is
    checked; a dissimilarity that breaks the axioms silently yields wrong
    neighbours, and NaN or infinite distances are undefined behaviour.
    """

    name: str
    distance: DistanceFn

    def __call__(self, lhs: Any, rhs: Any) -> float:
        return self.distance(lhs, rhs)


class MetricRegistry:
    """Minimal registry for runtime-selectable metrics."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def register(self, metric: Metric, *, overwrite: bool = False) -> None:
        name = metric.name.lower()
        if not overwrite and name in self._metrics:
            raise ValueError(f"Metric '{metric.name}' already registered.")
        self._metrics[name] = metric

    def get(self, name: str) -> Metric:
        key = name.lower()
        if key not in self._metrics:
            raise KeyError(f"Metric '{name}' not registered.")
        return self._metrics[key]

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._metrics.keys()))


def _as_vectors(lhs: Any, rhs: Any) -> Tuple[np.ndarray, np.ndarray]:
    lhs_arr = np.asarray(lhs, dtype=np.float64)
    rhs_arr = np.asarray(rhs, dtype=np.float64)
    if lhs_arr.shape != rhs_arr.shape:
        raise ValueError("Vector metric operands must have identical shapes.")
    return lhs_arr, rhs_arr


def euclidean(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    diff = lhs_arr - rhs_arr
    return float(np.sqrt(np.sum(diff * diff)))


def manhattan(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    return float(np.sum(np.abs(lhs_arr - rhs_arr)))


def chebyshev(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    if lhs_arr.size == 0:
        return 0.0
    return float(np.max(np.abs(lhs_arr - rhs_arr)))


def hamming(lhs: Sequence[Any], rhs: Sequence[Any]) -> float:
    """Number of positions at which two equal-length sequences differ."""

    if len(lhs) != len(rhs):
        raise ValueError("Hamming distance requires sequences of equal length.")
    return float(sum(1 for a, b in zip(lhs, rhs) if a != b))


def levenshtein(lhs: Sequence[Any], rhs: Sequence[Any]) -> float:
    """Edit distance with unit insert, delete and substitute costs."""

    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    if not rhs:
        return float(len(lhs))
    previous = list(range(len(rhs) + 1))
    for i, a in enumerate(lhs, start=1):
        current = [i]
        for j, b in enumerate(rhs, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (a != b),
                )
            )
        previous = current
    return float(previous[-1])


def _load_builtin_registry() -> MetricRegistry:
    registry = MetricRegistry()
    for name, fn in (
        ("euclidean", euclidean),
        ("manhattan", manhattan),
        ("chebyshev", chebyshev),
        ("hamming", hamming),
        ("levenshtein", levenshtein),
    ):
        registry.register(Metric(name=name, distance=fn))
    return registry


_REGISTRY = _load_builtin_registry()


def get_metric(name: str | None = None) -> Metric:
    """Return a registered metric, defaulting to the runtime-selected metric."""

    if name is None:
        name = vx_config.runtime_config().metric
    return _REGISTRY.get(name)


def register_metric(
    name: str, distance: DistanceFn, *, overwrite: bool = False
) -> Metric:
    metric = Metric(name=name, distance=distance)
    _REGISTRY.register(metric, overwrite=overwrite)
    return metric


def available_metrics() -> Tuple[str, ...]:
    return _REGISTRY.names()


MetricLike = Union[Metric, DistanceFn, str, None]


def resolve_metric(metric: MetricLike) -> Metric:
    """Normalise a metric name, ``Metric`` or bare callable into a ``Metric``."""

    if isinstance(metric, Metric):
        return metric
    if metric is None or isinstance(metric, str):
        return get_metric(metric)
    if callable(metric):
        name = getattr(metric, "__name__", None) or type(metric).__name__
        return Metric(name=name, distance=metric)
    raise TypeError(f"Cannot interpret {metric!r} as a distance metric.")


__all__ = [
    "DistanceFn",
    "Metric",
    "MetricLike",
    "MetricRegistry",
    "available_metrics",
    "chebyshev",
    "euclidean",
    "get_metric",
    "hamming",
    "levenshtein",
    "manhattan",
    "register_metric",
    "resolve_metric",
]
