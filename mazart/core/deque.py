from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar('T')


class _Node(Generic[T]):
    __slots__ = ('item', 'preceding', 'succeeding')

    def __init__(self, item: T):
        self.item = item
        self.preceding: Optional['_Node[T]'] = None   # closer to front
        self.succeeding: Optional['_Node[T]'] = None  # closer to back


class Deque(Generic[T]):
    """Doubly linked double-ended queue. Every push/peek/pop is O(1)."""

    __slots__ = ('_first', '_last', '_size')

    def __init__(self):
        self._first: Optional[_Node[T]] = None
        self._last: Optional[_Node[T]] = None
        self._size = 0

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        node = self._first
        while node:
            yield node.item
            node = node.succeeding

    def push_front(self, item: T) -> bool:
        node = _Node(item)
        if self._first:
            self._first.preceding = node
            node.succeeding = self._first
        else:
            self._last = node
        self._first = node
        self._size += 1
        return True

    def push_back(self, item: T) -> bool:
        node = _Node(item)
        if self._last:
            self._last.succeeding = node
            node.preceding = self._last
        else:
            self._first = node
        self._last = node
        self._size += 1
        return True

    def peek_front(self) -> Optional[T]:
        return self._first.item if self._first else None

    def peek_back(self) -> Optional[T]:
        return self._last.item if self._last else None

    def pop_front(self) -> Optional[T]:
        node = self._first
        if node is None:
            return None
        if self._size == 1:
            self._first = None
            self._last = None
        else:
            self._first = node.succeeding
            self._first.preceding = None
        self._size -= 1
        node.succeeding = None
        return node.item

    def pop_back(self) -> Optional[T]:
        node = self._last
        if node is None:
            return None
        if self._size == 1:
            self._first = None
            self._last = None
        else:
            self._last = node.preceding
            self._last.succeeding = None
        self._size -= 1
        node.preceding = None
        return node.item

    def clear(self):
        # Unlink every node
        node = self._first
        while node:
            nxt = node.succeeding
            node.preceding = None
            node.succeeding = None
            node = nxt
        self._first = None
        self._last = None
        self._size = 0

    def clear_and_destroy(self, destructor: Callable[[T], None]):
        if not callable(destructor):
            raise TypeError("destructor must be callable")
        items = list(self)
        self.clear()
        for item in items:
            if item is not None:
                destructor(item)
