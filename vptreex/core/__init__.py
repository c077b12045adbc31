"""Core data structures for the vantage-point tree."""

from .metrics import (
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from .topk import BoundedMaxHeap
from .tree import NO_CHILD, TreeBuildStats, VPNode, VPTree

__all__ = [
    "NO_CHILD",
    "BoundedMaxHeap",
    "TreeBuildStats",
    "VPNode",
    "VPTree",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
