"""Unit tests for BinQueue."""

import pytest

from ordgrid.core.bins import BinQueue
from ordgrid.core.errors import EmptyBinError, DensityGridError
from ordgrid.core.node import NodeDescriptor


def make_nodes(n):
    return [NodeDescriptor(id=i) for i in range(n)]


class TestFifoOrder:
    """Tests for FIFO semantics."""

    def test_empty_queue(self):
        q = BinQueue()
        assert len(q) == 0
        assert q.slice() == ()

    def test_dequeue_in_enqueue_order(self):
        q = BinQueue()
        nodes = make_nodes(10)
        for n in nodes:
            q.enqueue(n)

        out = [q.dequeue() for _ in range(10)]
        assert all(a is b for a, b in zip(out, nodes))
        assert len(q) == 0

    def test_interleaved_scenario(self):
        a, b, c = make_nodes(3)
        q = BinQueue()

        q.enqueue(a)
        q.enqueue(b)
        assert q.dequeue() is a

        q.enqueue(c)
        assert q.dequeue() is b
        assert q.dequeue() is c

        with pytest.raises(EmptyBinError):
            q.dequeue()

    def test_dequeue_empty_fails(self):
        q = BinQueue()
        with pytest.raises(EmptyBinError):
            q.dequeue()

    def test_empty_bin_error_hierarchy(self):
        q = BinQueue()
        with pytest.raises(DensityGridError):
            q.dequeue()
        with pytest.raises(IndexError):
            q.dequeue()

    def test_len_tracks_live_entries(self):
        q = BinQueue()
        for n in make_nodes(5):
            q.enqueue(n)
        q.dequeue()
        q.dequeue()
        assert len(q) == 3


class TestSlice:
    """Tests for the read-only view."""

    def test_slice_does_not_remove(self):
        q = BinQueue()
        nodes = make_nodes(3)
        for n in nodes:
            q.enqueue(n)

        view = q.slice()
        assert view == tuple(nodes)
        assert len(q) == 3

    def test_slice_skips_dequeued(self):
        q = BinQueue()
        nodes = make_nodes(3)
        for n in nodes:
            q.enqueue(n)
        q.dequeue()

        assert q.slice() == tuple(nodes[1:])

    def test_iter_matches_slice(self):
        q = BinQueue()
        for n in make_nodes(4):
            q.enqueue(n)
        q.dequeue()
        assert tuple(q) == q.slice()


class TestStorageReuse:
    """Tests for compaction, growth and reset."""

    def test_reset_keeps_capacity(self):
        q = BinQueue()
        for n in make_nodes(8):
            q.enqueue(n)
        cap = q.capacity

        q.reset()
        assert len(q) == 0
        assert q.capacity == cap

    def test_reset_drops_references(self):
        q = BinQueue()
        for n in make_nodes(3):
            q.enqueue(n)
        q.reset()
        assert all(slot is None for slot in q._data)

    def test_compacts_before_growing(self):
        q = BinQueue(capacity=4)
        nodes = make_nodes(6)
        for n in nodes[:4]:
            q.enqueue(n)
        q.dequeue()
        q.dequeue()

        # Full backing list with a non-zero head: compact, don't grow
        q.enqueue(nodes[4])
        assert q.capacity == 4
        assert q.slice() == (nodes[2], nodes[3], nodes[4])

        q.enqueue(nodes[5])
        assert q.capacity == 4
        assert [q.dequeue() for _ in range(4)] == nodes[2:]

    def test_grows_when_full_from_head(self):
        q = BinQueue(capacity=4)
        for n in make_nodes(5):
            q.enqueue(n)
        assert q.capacity == 8
        assert len(q) == 5

    def test_emptied_queue_restarts_at_front(self):
        q = BinQueue(capacity=4)
        nodes = make_nodes(4)
        for n in nodes[:3]:
            q.enqueue(n)
        for _ in range(3):
            q.dequeue()

        q.enqueue(nodes[3])
        assert q._head == 0
        assert q.capacity == 4

    def test_repeated_cycles_do_not_grow(self):
        q = BinQueue()
        nodes = make_nodes(3)
        for n in nodes:
            q.enqueue(n)
        cap = q.capacity

        for _ in range(100):
            q.enqueue(q.dequeue())

        assert q.capacity == cap
        assert len(q) == 3


class TestDiscard:
    """Tests for identity-based removal."""

    def test_discard_middle_entry(self):
        q = BinQueue()
        a, b, c = make_nodes(3)
        for n in (a, b, c):
            q.enqueue(n)

        assert q.discard(b) is True
        assert q.slice() == (a, c)

    def test_discard_absent_node(self):
        q = BinQueue()
        a, b = make_nodes(2)
        q.enqueue(a)
        assert q.discard(b) is False
        assert len(q) == 1

    def test_discard_uses_identity(self):
        q = BinQueue()
        a = NodeDescriptor(id=1)
        twin = NodeDescriptor(id=1)
        q.enqueue(a)
        assert q.discard(twin) is False
        assert q.discard(a) is True

    def test_discard_keeps_capacity(self):
        q = BinQueue(capacity=4)
        nodes = make_nodes(4)
        for n in nodes:
            q.enqueue(n)
        q.discard(nodes[0])
        assert q.capacity == 4
        q.enqueue(nodes[0])
        assert q.slice() == (nodes[1], nodes[2], nodes[3], nodes[0])
