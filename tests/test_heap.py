import pytest

from johnson_apsp.heap import IndexedMinHeap, PriorityEntry


def test_pop_in_score_order():
    h = IndexedMinHeap()
    for v, s in [(1, 5), (2, 3), (3, 8), (4, 1), (5, 4)]:
        h.push(v, s)
    assert [h.pop().vertex for _ in range(len(h))] == [4, 2, 5, 1, 3]
    assert not h


def test_decrease_key_reorders():
    h = IndexedMinHeap()
    for v in range(1, 6):
        h.push(v, float("inf"))
    h.decrease_key(4, 7)
    h.decrease_key(2, 3)
    h.decrease_key(4, 1)
    assert h.score(4) == 1
    assert 4 in h
    assert h.pop() == PriorityEntry(4, 1)
    assert h.pop().vertex == 2
    assert 4 not in h
    assert len(h) == 3


def test_ties_pop_in_insertion_order():
    h = IndexedMinHeap()
    for v in (9, 3, 7):
        h.push(v, 0)
    assert [h.pop().vertex for _ in range(3)] == [9, 3, 7]


def test_entry_identity_is_vertex_only():
    assert PriorityEntry(1, 10) == PriorityEntry(1, 2)
    assert hash(PriorityEntry(1, 10)) == hash(PriorityEntry(1, 2))
    assert PriorityEntry(1, 10) != PriorityEntry(2, 10)


def test_heap_errors():
    h = IndexedMinHeap()
    with pytest.raises(IndexError):
        h.pop()
    with pytest.raises(IndexError):
        h.peek()
    h.push(1, 5)
    with pytest.raises(ValueError):
        h.push(1, 2)
    with pytest.raises(ValueError):
        h.decrease_key(1, 6)
    with pytest.raises(KeyError):
        h.decrease_key(2, 0)
    assert h.peek().score == 5


def test_many_random_operations_keep_heap_order():
    import random

    rng = random.Random(7)
    h = IndexedMinHeap()
    scores = {}
    for v in range(200):
        s = rng.randint(0, 1000)
        h.push(v, s)
        scores[v] = s
    for v in rng.sample(range(200), 80):
        scores[v] -= rng.randint(0, 500)
        h.decrease_key(v, scores[v])
    popped = [h.pop() for _ in range(200)]
    assert [e.score for e in popped] == sorted(scores.values())
    assert all(scores[e.vertex] == e.score for e in popped)
