from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from mazart.core.point import Point

T = TypeVar('T')


class Grid(Generic[T]):
    """
    Fixed size 2D store. Slots live in one flat row-major list so that a
    slot can also be addressed by its index (row * width + col).
    """

    __slots__ = ('_height', '_width', '_slots')

    def __init__(self, height: int, width: int):
        if height <= 0 or width <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {height}x{width}")
        self._height = height
        self._width = width
        self._slots: List[Optional[T]] = [None] * (height * width)

    @classmethod
    def create(cls, height: int, width: int) -> Optional['Grid[T]']:
        """Returns None instead of raising for a zero sized grid."""
        try:
            return cls(height, width)
        except ValueError:
            return None

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    def __len__(self) -> int:
        return len(self._slots)

    def contains(self, pos: Point) -> bool:
        row, col = pos
        return 0 <= row < self._height and 0 <= col < self._width

    def index_of(self, pos: Point) -> Optional[int]:
        if not self.contains(pos):
            return None
        return pos[0] * self._width + pos[1]

    def position_of(self, index: int) -> Point:
        if not 0 <= index < len(self._slots):
            raise IndexError(f"Index {index} out of bounds")
        row, col = divmod(index, self._width)
        return Point(row, col)

    def get(self, pos: Point) -> Optional[T]:
        idx = self.index_of(pos)
        if idx is None:
            return None
        return self._slots[idx]

    def get_at(self, index: int) -> Optional[T]:
        if not 0 <= index < len(self._slots):
            return None
        return self._slots[index]

    def set(self, pos: Point, value: Optional[T]) -> bool:
        # Overwriting does not destroy the previous value
        idx = self.index_of(pos)
        if idx is None:
            return False
        self._slots[idx] = value
        return True

    def clear(self):
        for i in range(len(self._slots)):
            self._slots[i] = None

    def clear_and_destroy(self, destructor: Callable[[T], None]):
        """
        Empties every slot, handing each non-empty value to destructor
        exactly once.
        """
        if not callable(destructor):
            raise TypeError("destructor must be callable")
        for i, value in enumerate(self._slots):
            self._slots[i] = None
            if value is not None:
                destructor(value)

    def __iter__(self) -> Iterator[Tuple[Point, Optional[T]]]:
        for i, value in enumerate(self._slots):
            yield self.position_of(i), value
