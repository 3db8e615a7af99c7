import random

import pytest

from satproof.heap import Heap


def drain(heap):
    out = []
    while len(heap):
        out.append(heap.remove_min())
    return out


def test_remove_min_yields_sorted_order():
    rng = random.Random(7)
    keys = rng.sample(range(1000), 200)
    heap = Heap(lambda a, b: a < b)
    for k in keys:
        heap.insert(k)
    assert len(heap) == 200
    assert drain(heap) == sorted(keys)


def test_custom_comparator_gives_max_heap():
    heap = Heap(lambda a, b: a > b)
    for k in [3, 9, 1, 4]:
        heap.insert(k)
    assert heap[0] == 9
    assert drain(heap) == [9, 4, 3, 1]


def test_contains_tracks_membership():
    heap = Heap(lambda a, b: a < b)
    heap.insert(5)
    assert 5 in heap
    assert 6 not in heap
    heap.remove_min()
    assert 5 not in heap


def test_decrease_after_priority_change():
    prio = {k: k * 10 for k in range(10)}
    heap = Heap(lambda a, b: prio[a] < prio[b])
    for k in prio:
        heap.insert(k)
    prio[8] = -1
    heap.decrease(8)
    assert heap[0] == 8
    assert drain(heap) == sorted(prio, key=prio.get)


def test_increase_after_priority_change():
    prio = {k: k for k in range(10)}
    heap = Heap(lambda a, b: prio[a] < prio[b])
    for k in prio:
        heap.insert(k)
    prio[0] = 100
    heap.increase(0)
    assert drain(heap) == sorted(prio, key=prio.get)


def test_update_inserts_or_moves():
    prio = {"a": 5, "b": 2, "c": 8}
    heap = Heap(lambda x, y: prio[x] < prio[y])
    for k in prio:
        heap.update(k)
    assert len(heap) == 3
    prio["c"] = 0
    heap.update("c")
    assert heap[0] == "c"


def test_remove_keeps_heap_valid():
    rng = random.Random(3)
    keys = list(range(50))
    rng.shuffle(keys)
    heap = Heap(lambda a, b: a < b)
    for k in keys:
        heap.insert(k)
    removed = {k for k in range(0, 50, 3)}
    for k in removed:
        heap.remove(k)
    assert all(k not in heap for k in removed)
    assert drain(heap) == [k for k in range(50) if k not in removed]


def test_build_heapifies():
    rng = random.Random(11)
    keys = rng.sample(range(500), 100)
    heap = Heap(lambda a, b: a < b)
    heap.insert(1000)
    heap.build(keys)
    assert 1000 not in heap
    assert len(heap) == len(keys)
    assert drain(heap) == sorted(keys)


def test_clear_empties_heap():
    heap = Heap(lambda a, b: a < b)
    for k in range(5):
        heap.insert(k)
    heap.clear()
    assert len(heap) == 0
    assert 2 not in heap
    heap.insert(2)
    assert heap.remove_min() == 2


def test_errors():
    heap = Heap(lambda a, b: a < b)
    with pytest.raises(IndexError):
        heap.remove_min()
    with pytest.raises(IndexError):
        heap[0]
    with pytest.raises(KeyError):
        heap.decrease(1)
    with pytest.raises(KeyError):
        heap.increase(1)
    with pytest.raises(KeyError):
        heap.remove(1)
    heap.insert(1)
    with pytest.raises(ValueError):
        heap.insert(1)
    with pytest.raises(ValueError):
        heap.build([1, 1])