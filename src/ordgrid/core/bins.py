"""
Fine bins: one FIFO queue of nodes per grid cell.

Bins are emptied and refilled every layout iteration. To keep that cheap a
BinQueue never shrinks its backing list: dequeued slots are cleared and the
head offset advances, and a full queue compacts its live entries to the
front before it grows.

Removal is FIFO, not by identity. If several nodes share a cell the driver
must remove them in insertion order, otherwise another node's entry is
evicted. `discard` offers removal by identity for drivers that cannot
guarantee that order.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator

from ordgrid.core.errors import EmptyBinError

if TYPE_CHECKING:
    from ordgrid.core.node import NodeDescriptor

logger = logging.getLogger(__name__)

_MIN_CAPACITY = 4


class BinQueue:
    """
    FIFO queue of node references with reusable backing storage.

    Layout of the backing list:

        [ cleared ... | live entries ... | free slots ... ]
          0      head                tail        capacity

    Only `_data[head:tail]` holds nodes; every other slot is None.
    """

    __slots__ = ("_data", "_head", "_tail")

    def __init__(self, capacity: int = 0):
        self._data: list[NodeDescriptor | None] = [None] * capacity
        self._head = 0
        self._tail = 0

    def __len__(self) -> int:
        """Number of live nodes in the queue."""
        return self._tail - self._head

    def __iter__(self) -> Iterator[NodeDescriptor]:
        for i in range(self._head, self._tail):
            yield self._data[i]

    def __repr__(self) -> str:
        return f"BinQueue(len={len(self)}, capacity={self.capacity})"

    @property
    def capacity(self) -> int:
        """Size of the backing storage."""
        return len(self._data)

    def enqueue(self, node: NodeDescriptor) -> None:
        """Add a node to the back of the queue."""
        if self._tail == len(self._data):
            if self._head > 0:
                self._compact()
            else:
                self._grow()
        self._data[self._tail] = node
        self._tail += 1

    def dequeue(self) -> NodeDescriptor:
        """
        Remove and return the node at the front of the queue.

        Raises:
            EmptyBinError: if the queue is empty
        """
        if self._tail == self._head:
            logger.error("dequeue from empty bin")
            raise EmptyBinError("queue: empty queue")

        node = self._data[self._head]
        self._data[self._head] = None
        self._head += 1

        if self._head == self._tail:
            self._head = self._tail = 0

        return node

    def discard(self, node: NodeDescriptor) -> bool:
        """
        Remove a specific node by identity.

        Preserves the order of the remaining entries.

        Returns:
            True if the node was found and removed
        """
        for i in range(self._head, self._tail):
            if self._data[i] is node:
                del self._data[i]
                # Keep the backing size constant
                self._data.append(None)
                self._tail -= 1
                if self._head == self._tail:
                    self._head = self._tail = 0
                return True
        return False

    def slice(self) -> tuple[NodeDescriptor, ...]:
        """Read-only view of the live entries, front first."""
        return tuple(self._data[self._head:self._tail])

    def reset(self) -> None:
        """Clear the queue for reuse, keeping the backing storage."""
        for i in range(self._head, self._tail):
            self._data[i] = None
        self._head = self._tail = 0

    def _compact(self):
        """Move live entries to the front of the backing list."""
        n = len(self)
        self._data[:n] = self._data[self._head:self._tail]
        for i in range(n, self._tail):
            self._data[i] = None
        self._head = 0
        self._tail = n

    def _grow(self):
        """Double the backing storage."""
        extra = max(_MIN_CAPACITY, len(self._data))
        self._data.extend([None] * extra)
