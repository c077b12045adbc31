#!/usr/bin/env python
"""Quick-start guide for vptreex library usage.

Run with: python -m vptreex

This module intentionally avoids importing vptreex internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                  VPTREEX
        Exact k-NN search over arbitrary metric spaces (vantage-point tree)
================================================================================

INSTALLATION
------------
    pip install vptreex

BASIC USAGE (Euclidean k-NN)
----------------------------
    import numpy as np
    from vptreex import construct, search

    points = list(np.random.default_rng(0).random((1000, 2)))
    tree = construct("euclidean", points, seed=0)

    # Items and distances, ascending by distance
    items, distances = search(tree, np.array([0.5, 0.5]), k=10)

CUSTOM METRICS
--------------
Any callable distance(a, b) -> float works, provided it is a true metric
(non-negative, symmetric, zero only for equal items, triangle inequality).
Violations are not detected and silently produce wrong neighbours.

    from vptreex import VPT, Runtime, register_metric

    index = VPT(Runtime(metric="levenshtein")).fit(["kitten", "mitten", "sitting"])
    index.nearest("sitten")

    register_metric("abs", lambda a, b: abs(a - b))

BATCH QUERIES
-------------
    from vptreex import knn

    neighbours, distances = knn(tree, queries, k=5, return_distances=True)

CONFIGURATION
-------------
    VPTREEX_METRIC              default metric name        (euclidean)
    VPTREEX_SEED                vantage-point seed         (unset)
    VPTREEX_ENABLE_DIAGNOSTICS  CPU/RSS sampling in logs   (1)
    VPTREEX_LOG_LEVEL           logging level              (INFO)
    VPTREEX_SEARCH_ORDER        near-first | left-first    (near-first)

BENCHMARKING CLI
----------------
    python -m cli.queries --dimension 2 --tree-points 8192 --k 10
    python -m cli.queries --baseline bruteforce

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
