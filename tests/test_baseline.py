import numpy as np
import pytest
from numpy.random import default_rng

from vptreex import BruteForceKNN, build_tree, search
from vptreex.core.metrics import euclidean
from tests.utils.datasets import uniform_coordinates


def test_bruteforce_matches_tree_search():
    rng = default_rng(3)
    points = uniform_coordinates(rng, 250)
    baseline = BruteForceKNN.from_items(points, euclidean)
    tree = build_tree(list(points), euclidean, seed=5)

    for query in uniform_coordinates(rng, 10):
        expected = baseline.search(query, 7)
        assert search(tree, query, 7) == expected


def test_bruteforce_respects_empty_contract():
    baseline = BruteForceKNN.from_items([], euclidean)

    assert baseline.search((0.0, 0.0), 3) == ([], [])
    assert BruteForceKNN.from_items([(1.0, 1.0)], "euclidean").search((0, 0), 0) == ([], [])


def test_bruteforce_batched_queries():
    rng = default_rng(13)
    points = uniform_coordinates(rng, 40)
    baseline = BruteForceKNN.from_items(points, "euclidean")
    queries = np.asarray(uniform_coordinates(rng, 3))

    rows = baseline.knn(queries, k=4)

    assert len(rows) == 3
    assert all(len(row) == 4 for row in rows)
    assert len(baseline) == 40
    assert rows[0][0] == min(points, key=lambda p: euclidean(p, queries[0]))


def test_bruteforce_orders_ties_by_insertion():
    baseline = BruteForceKNN.from_items(["b", "a", "c"], lambda x, y: 0.0 if x == y else 1.0)

    assert baseline.search("z", 2) == (["b", "a"], [1.0, 1.0])


@pytest.mark.parametrize("k", [1, 5, 50])
def test_bruteforce_returns_min_k_n(k: int):
    baseline = BruteForceKNN.from_items(range(10), lambda x, y: float(abs(x - y)))

    found, distances = baseline.search(4.2, k)

    assert len(found) == min(k, 10)
    assert distances == sorted(distances)


@pytest.mark.parametrize("k", [2.5, True, "3"])
def test_bruteforce_rejects_non_integer_k(k):
    baseline = BruteForceKNN.from_items(range(10), lambda x, y: float(abs(x - y)))
    tree = build_tree(list(range(10)), lambda x, y: float(abs(x - y)), seed=0)

    with pytest.raises(TypeError):
        baseline.search(4, k)
    with pytest.raises(TypeError):
        search(tree, 4, k)


def test_bruteforce_accepts_numpy_integer_k():
    baseline = BruteForceKNN.from_items(range(10), lambda x, y: float(abs(x - y)))

    found, _ = baseline.search(4, np.int64(3))

    assert found == [4, 3, 5]
