from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar('T')

DEFAULT_CAPACITY = 1024


class _Node(Generic[T]):
    __slots__ = ('priority', 'item')

    def __init__(self, priority: int, item: T):
        self.priority = priority
        self.item = item


class PriorityQueue(Generic[T]):
    """
    Binary max-heap. Indices are 1-based (0 means "no node"), node i lives
    in heap[i - 1], its children are 2i and 2i + 1.

    Sift-down swaps with the larger child; when both children share a
    priority the right child wins.
    """

    __slots__ = ('_heap', '_size')

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._heap: List[Optional[_Node[T]]] = [None] * capacity
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._heap)

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def push(self, priority: int, item: T) -> bool:
        if priority < 0:
            raise ValueError(f"Priority must be unsigned, got {priority}")
        if self._size == len(self._heap):
            # Double capacity, never shrinks
            self._heap.extend([None] * len(self._heap))
        self._size += 1
        qidx = self._size
        self._heap[qidx - 1] = _Node(priority, item)
        self._up_heap(qidx)
        return True

    def peek(self) -> Optional[T]:
        if self._size == 0:
            return None
        return self._heap[0].item

    def pop(self) -> Optional[T]:
        if self._size == 0:
            return None
        item = self._heap[0].item
        self._swap(1, self._size)
        self._heap[self._size - 1] = None
        self._size -= 1
        self._down_heap(1)
        return item

    def peek_priority(self) -> Optional[int]:
        if self._size == 0:
            return None
        return self._heap[0].priority

    def clear(self):
        for i in range(self._size):
            self._heap[i] = None
        self._size = 0

    def clear_and_destroy(self, destructor: Callable[[T], None]):
        if not callable(destructor):
            raise TypeError("destructor must be callable")
        nodes = self._heap[:self._size]
        self.clear()
        for node in nodes:
            if node.item is not None:
                destructor(node.item)

    # Internal

    def _priority(self, qidx: int) -> int:
        return self._heap[qidx - 1].priority

    def _swap(self, a: int, b: int):
        if a == 0 or b == 0 or a == b:
            return
        self._heap[a - 1], self._heap[b - 1] = self._heap[b - 1], self._heap[a - 1]

    def _left(self, qidx: int) -> int:
        idx = qidx * 2
        return idx if idx <= self._size else 0

    def _right(self, qidx: int) -> int:
        idx = qidx * 2 + 1
        return idx if idx <= self._size else 0

    def _up_heap(self, qidx: int):
        while True:
            pidx = qidx // 2
            if pidx == 0:
                return
            if self._priority(qidx) <= self._priority(pidx):
                return
            self._swap(qidx, pidx)
            qidx = pidx

    def _down_heap(self, qidx: int):
        while True:
            lidx = self._left(qidx)
            ridx = self._right(qidx)
            if lidx == 0:
                return
            if ridx == 0:
                # Lone left child is a leaf
                if self._priority(qidx) < self._priority(lidx):
                    self._swap(qidx, lidx)
                return
            # Larger child, right wins ties
            child = ridx if self._priority(ridx) >= self._priority(lidx) else lidx
            if self._priority(qidx) >= self._priority(child):
                return
            self._swap(qidx, child)
            qidx = child
