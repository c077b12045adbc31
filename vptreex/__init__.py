"""vptreex: exact k-NN search over arbitrary metric spaces with a vantage-point tree.

Quick Start
-----------
>>> from vptreex import construct, search
>>>
>>> points = [(24, 57), (35, 28), (55, 48), (68, 42)]
>>> tree = construct("euclidean", points, seed=0)
>>> items, distances = search(tree, (12, 34), k=3)

Custom metrics
--------------
>>> from vptreex import VPT, Runtime
>>>
>>> words = ["kitten", "sitting", "mitten", "fitting"]
>>> index = VPT(Runtime(metric="levenshtein")).fit(words, seed=1)
>>> index.nearest("sitten")

Classes
-------
VPTree : Immutable vantage-point tree returned by ``construct``/``build_tree``.
VPT : Façade binding a runtime configuration to a built tree.
Runtime : Configuration for metric, seeding, diagnostics and logging.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("vptreex")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .algo import build_tree, construct
from .api import VPT, Runtime
from .baseline import BruteForceKNN
from .core import (
    BoundedMaxHeap,
    Metric,
    MetricRegistry,
    TreeBuildStats,
    VPNode,
    VPTree,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from .queries import knn, nearest_neighbor, search

__all__ = [
    "__version__",
    "VPT",
    "Runtime",
    "construct",
    "build_tree",
    "search",
    "knn",
    "nearest_neighbor",
    "VPTree",
    "VPNode",
    "TreeBuildStats",
    "BoundedMaxHeap",
    "BruteForceKNN",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
