from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Tuple, TypeVar

import numpy as np

from vptreex.core.metrics import Metric

Item = TypeVar("Item")

NO_CHILD = -1


@dataclass(frozen=True)
class TreeBuildStats:
    num_items: int = 0
    depth: int = 0
    distance_evaluations: int = 0
    seed: int | None = None


@dataclass(frozen=True)
class VPNode(Generic[Item]):
    """Read-only view of one partition boundary."""

    index: int
    item: Item
    threshold: float
    left: int | None
    right: int | None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _readonly(values: Any, dtype: Any) -> np.ndarray:
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class VPTree(Generic[Item]):
    """Immutable vantage-point tree stored as flat parallel buffers.

    Node ``i`` uses ``items[i]`` as its vantage point. ``left[i]`` and
    ``right[i]`` hold child node indices (``NO_CHILD`` when absent) and
    ``thresholds[i]`` the partition radius. Every item under ``left[i]`` lies
    within ``thresholds[i]`` of the vantage point; every item under
    ``right[i]`` lies at ``thresholds[i]`` or beyond. Leaves carry a zero
    threshold.

    Nothing here changes after construction, so one tree can serve any number
    of concurrent searches.
    """

    items: Tuple[Item, ...]
    thresholds: np.ndarray
    left: np.ndarray
    right: np.ndarray
    metric: Metric
    root_index: int = NO_CHILD
    stats: TreeBuildStats = field(default_factory=TreeBuildStats)

    def __post_init__(self) -> None:
        size = len(self.items)
        for name in ("thresholds", "left", "right"):
            arr = getattr(self, name)
            if arr.shape != (size,):
                raise ValueError(
                    f"VPTree buffer '{name}' has shape {arr.shape}; expected ({size},)."
                )
            arr.setflags(write=False)
        if size == 0 and self.root_index != NO_CHILD:
            raise ValueError("An empty VPTree cannot have a root.")
        if size > 0 and not 0 <= self.root_index < size:
            raise ValueError(f"Root index {self.root_index} is out of range.")

    @classmethod
    def from_buffers(
        cls,
        items: Any,
        *,
        thresholds: Any,
        left: Any,
        right: Any,
        metric: Metric,
        root_index: int,
        stats: TreeBuildStats | None = None,
    ) -> "VPTree[Item]":
        return cls(
            items=tuple(items),
            thresholds=_readonly(thresholds, np.float64),
            left=_readonly(left, np.int64),
            right=_readonly(right, np.int64),
            metric=metric,
            root_index=int(root_index),
            stats=stats or TreeBuildStats(num_items=len(items)),
        )

    @classmethod
    def empty(cls, metric: Metric) -> "VPTree[Item]":
        return cls.from_buffers(
            (),
            thresholds=(),
            left=(),
            right=(),
            metric=metric,
            root_index=NO_CHILD,
        )

    @property
    def num_items(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return self.root_index == NO_CHILD

    @property
    def depth(self) -> int:
        return self.stats.depth

    @property
    def root(self) -> VPNode[Item] | None:
        if self.is_empty():
            return None
        return self.node(self.root_index)

    def node(self, index: int) -> VPNode[Item]:
        if not 0 <= index < len(self.items):
            raise IndexError(f"Node index {index} is out of range.")
        left = int(self.left[index])
        right = int(self.right[index])
        return VPNode(
            index=index,
            item=self.items[index],
            threshold=float(self.thresholds[index]),
            left=None if left == NO_CHILD else left,
            right=None if right == NO_CHILD else right,
        )

    def iter_items(self) -> Iterator[Item]:
        return iter(self.items)


__all__ = ["NO_CHILD", "TreeBuildStats", "VPNode", "VPTree"]
