"""Worklists holding the vertices whose forward edges may violate Bellman."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Protocol, Sequence, Set, Tuple

Vertex = int
Float = float


class Worklist(Protocol):
    """Protocol for worklists consumed by the solvers."""

    def push(self, vertex: Vertex) -> bool:
        """Insert ``vertex`` unless already present; return ``True`` if inserted."""
        ...

    def pop(self) -> Vertex:
        """Remove and return the front vertex."""
        ...

    def __contains__(self, vertex: object) -> bool:
        ...

    def __len__(self) -> int:
        ...


class FifoWorklist:
    """First-in first-out worklist with duplicate suppression.

    A vertex is present at most once at any time; after it is popped it may
    be pushed again. ``peak`` records the largest number of live entries,
    which never exceeds the number of distinct vertices pushed.
    """

    def __init__(self) -> None:
        self._queue: Deque[Vertex] = deque()
        self._members: Set[Vertex] = set()
        self.peak = 0

    def push(self, vertex: Vertex) -> bool:
        """Append ``vertex`` at the back unless it is already queued."""
        if vertex in self._members:
            return False
        self._queue.append(vertex)
        self._members.add(vertex)
        self.peak = max(self.peak, len(self._queue))
        return True

    def pop(self) -> Vertex:
        """Remove and return the front vertex.

        Raises:
            IndexError: If the worklist is empty.
        """
        vertex = self._queue.popleft()
        self._members.discard(vertex)
        return vertex

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._members

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._queue)


class LabelOrderedWorklist:
    """Worklist ordered ascending by the labels of the solve in progress.

    ``labels`` is the live label array the solver relaxes. A new vertex is
    placed in front of the first queued vertex whose *current* label is not
    smaller than its own, so it goes ahead of equal labels. A queued vertex
    is never moved: if its label improves while it waits, its position is
    not corrected and the front element need not hold the smallest label.

    Args:
        labels: Label array indexed by vertex id, read at every insertion.
    """

    def __init__(self, labels: Sequence[Float]) -> None:
        self._labels = labels
        self._queue: Deque[Vertex] = deque()
        self._members: Set[Vertex] = set()
        self.peak = 0

    def push(self, vertex: Vertex) -> bool:
        """Insert ``vertex`` by its current label if absent.

        Returns:
            ``True`` if inserted, ``False`` if the vertex was already queued.
        """
        if vertex in self._members:
            return False
        label = self._labels[vertex]
        pos = len(self._queue)
        for i, queued in enumerate(self._queue):
            if not self._labels[queued] < label:
                pos = i
                break
        self._queue.insert(pos, vertex)
        self._members.add(vertex)
        self.peak = max(self.peak, len(self._queue))
        return True

    def pop(self) -> Vertex:
        """Remove and return the front vertex.

        Raises:
            IndexError: If the worklist is empty.
        """
        vertex = self._queue.popleft()
        self._members.discard(vertex)
        return vertex

    def keys(self) -> List[Tuple[Vertex, Float]]:
        """Return ``(vertex, current_label)`` pairs in queue order."""
        return [(v, float(self._labels[v])) for v in self._queue]

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._members

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._queue)


__all__ = ["Worklist", "FifoWorklist", "LabelOrderedWorklist"]
