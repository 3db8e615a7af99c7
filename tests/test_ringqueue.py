import pytest

from satproof.ringqueue import RingQueue


def test_fifo_order():
    q = RingQueue()
    for i in range(100):
        q.insert(i)
    assert len(q) == 100
    assert [q.pop() for _ in range(100)] == list(range(100))
    assert len(q) == 0


def test_capacity_always_exceeds_length():
    q = RingQueue()
    assert q.capacity() == 1
    for i in range(60):
        q.insert(i)
        assert q.capacity() > len(q)


def test_wraparound_interleaved():
    q = RingQueue()
    expected = []
    counter = 0
    for round_ in range(30):
        for _ in range(3):
            q.insert(counter)
            expected.append(counter)
            counter += 1
        for _ in range(2):
            assert q.pop() == expected.pop(0)
        assert [q[i] for i in range(len(q))] == expected
    assert len(q) == len(expected)


def test_peek_does_not_remove():
    q = RingQueue()
    q.insert("a")
    q.insert("b")
    assert q.peek() == "a"
    assert len(q) == 2
    assert q.pop() == "a"
    assert q.peek() == "b"


def test_setitem_round_trip():
    q = RingQueue()
    for i in range(5):
        q.insert(i)
    q.pop()
    q[0] = "first"
    assert q.peek() == "first"
    assert q[3] == 4


def test_index_errors():
    q = RingQueue()
    with pytest.raises(IndexError):
        q.peek()
    with pytest.raises(IndexError):
        q.pop()
    q.insert(1)
    with pytest.raises(IndexError):
        q[1]
    with pytest.raises(IndexError):
        q[-1]
    with pytest.raises(IndexError):
        q[1] = 0


def test_clear_resets():
    q = RingQueue()
    for i in range(10):
        q.insert(i)
    q.clear()
    assert len(q) == 0
    assert q.capacity() == 1
    q.insert(42)
    assert q.pop() == 42