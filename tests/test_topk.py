import pytest

from vptreex.core.topk import BoundedMaxHeap


def test_peek_max_tracks_largest_distance():
    heap = BoundedMaxHeap(3)
    heap.push("a", 2.0)
    heap.push("b", 5.0)
    heap.push("c", 1.0)

    assert heap.is_full()
    assert heap.peek_max() == ("b", 5.0)
    assert heap.max_distance() == 5.0


def test_drain_is_largest_first_and_empties_heap():
    heap = BoundedMaxHeap(4)
    for item, dist in [("x", 0.5), ("y", 3.0), ("z", 1.5), ("w", 2.0)]:
        heap.push(item, dist)

    drained = list(heap.drain())

    assert [dist for _, dist in drained] == [3.0, 2.0, 1.5, 0.5]
    assert len(heap) == 0


def test_evict_then_insert_keeps_k_smallest():
    heap = BoundedMaxHeap(2)
    for item, dist in [("a", 4.0), ("b", 3.0), ("c", 1.0), ("d", 2.0)]:
        if heap.is_full():
            if dist >= heap.max_distance():
                continue
            heap.pop_max()
        heap.push(item, dist)

    assert sorted(item for item, _ in heap.drain()) == ["c", "d"]


def test_ties_do_not_compare_items():
    class Opaque:
        pass

    heap = BoundedMaxHeap(3)
    heap.push(Opaque(), 1.0)
    heap.push(Opaque(), 1.0)
    heap.push(Opaque(), 1.0)

    assert len(list(heap.drain())) == 3


def test_push_past_capacity_raises():
    heap = BoundedMaxHeap(1)
    heap.push("a", 1.0)
    with pytest.raises(OverflowError):
        heap.push("b", 0.5)


def test_empty_heap_access_raises():
    heap = BoundedMaxHeap(2)
    with pytest.raises(IndexError):
        heap.peek_max()
    with pytest.raises(IndexError):
        heap.pop_max()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        BoundedMaxHeap(0)
