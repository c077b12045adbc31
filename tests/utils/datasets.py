from __future__ import annotations

from typing import List, Tuple

import numpy as np
from numpy.random import Generator, default_rng

Array = np.ndarray


def _ensure_rng(rng: Generator | None) -> Generator:
    return rng or default_rng()


def gaussian_points(
    rng: Generator | None,
    count: int,
    dimension: int,
    *,
    dtype: np.dtype | type[np.floating] = np.float64,
) -> Array:
    """Sample `count` Gaussian points with the requested dimensionality."""

    generator = _ensure_rng(rng)
    if count <= 0 or dimension <= 0:
        return np.zeros((max(count, 0), max(dimension, 0)), dtype=dtype)
    samples = generator.normal(loc=0.0, scale=1.0, size=(count, dimension))
    return np.asarray(samples, dtype=dtype)


def uniform_coordinates(rng: Generator | None, count: int) -> List[Tuple[float, float]]:
    """Sample `count` points from the unit square as hashable `(x, y)` tuples."""

    generator = _ensure_rng(rng)
    samples = generator.random(size=(max(count, 0), 2))
    return [(float(x), float(y)) for x, y in samples]


def random_words(
    rng: Generator | None,
    count: int,
    *,
    alphabet: str = "acgt",
    min_length: int = 3,
    max_length: int = 9,
) -> List[str]:
    """Sample `count` random words; duplicates are likely for small alphabets."""

    generator = _ensure_rng(rng)
    lengths = generator.integers(min_length, max_length + 1, size=max(count, 0))
    letters = list(alphabet)
    return ["".join(generator.choice(letters, size=int(n))) for n in lengths]


def bruteforce_knn(items, target, k, distance) -> Tuple[list, list]:
    """Sorted linear scan used as the reference answer in tests."""

    if k < 1:
        return [], []
    scored = sorted(((distance(item, target), item) for item in items), key=lambda e: e[0])
    top = scored[:k]
    return [item for _, item in top], [dist for dist, _ in top]
