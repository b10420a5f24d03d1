import logging
import random
from typing import Iterator, List, Optional, Tuple

from mazart.core.grid import Grid
from mazart.core.point import Point
from mazart.core.priority import PriorityQueue

logger = logging.getLogger(__name__)

# Fixed capacity attribute tables carried by every cell
MAX_FLAGS = 8
MAX_PROPERTIES = 8

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Candidate connections get a priority drawn from [0, PRIORITY_LIMIT)
PRIORITY_LIMIT = 1 << 31


class InvalidMazeError(ValueError):
    pass


class Cell:
    """
    One grid slot of a maze. Connections are stored as arena indices of the
    neighbouring cells (row-major index in the maze grid), never as direct
    references, so clearing and rebuilding them cannot leave stale cells.
    """

    # Directions, also the scan order for neighbour queries
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

    DR = {UP: -1, DOWN: 1, LEFT: 0, RIGHT: 0}
    DC = {UP: 0, DOWN: 0, LEFT: -1, RIGHT: 1}
    OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

    __slots__ = ('position', 'index', 'links', 'flags', 'properties', '_visited', '_width')

    def __init__(self, position: Point, index: int, width: int):
        self.position = position
        self.index = index
        self.links: List[Optional[int]] = [None, None, None, None]
        self.flags: List[bool] = [False] * MAX_FLAGS
        self.properties: List[int] = [0] * MAX_PROPERTIES
        self._visited = False
        self._width = width

    def __repr__(self) -> str:
        return f"Cell({self.position.row}, {self.position.col})"

    @property
    def up(self) -> Optional[int]:
        return self.links[Cell.UP]

    @property
    def down(self) -> Optional[int]:
        return self.links[Cell.DOWN]

    @property
    def left(self) -> Optional[int]:
        return self.links[Cell.LEFT]

    @property
    def right(self) -> Optional[int]:
        return self.links[Cell.RIGHT]

    def link(self, direction: int) -> Optional[int]:
        if direction not in Cell.OPPOSITE:
            return None
        return self.links[direction]

    def neighbour_indices(self) -> List[int]:
        return [idx for idx in self.links if idx is not None]

    def neighbour_points(self) -> List[Point]:
        """Positions of connected neighbours in up, down, left, right order."""
        return [Point(*divmod(idx, self._width)) for idx in self.links if idx is not None]

    def connection_count(self) -> int:
        return sum(1 for idx in self.links if idx is not None)

    def is_connected_to(self, other: 'Cell') -> bool:
        return other.index in self.links

    def get_flag(self, flag: int) -> bool:
        if not 0 <= flag < MAX_FLAGS:
            return False
        return self.flags[flag]

    def set_flag(self, flag: int, value: bool = True):
        if not 0 <= flag < MAX_FLAGS:
            return
        self.flags[flag] = bool(value)

    def get_property(self, prop: int) -> int:
        if not 0 <= prop < MAX_PROPERTIES:
            return 0
        return self.properties[prop]

    def set_property(self, prop: int, value: int):
        if not 0 <= prop < MAX_PROPERTIES:
            return
        self.properties[prop] = max(INT64_MIN, min(INT64_MAX, int(value)))

    def increment_property(self, prop: int):
        self.set_property(prop, self.get_property(prop) + 1)

    def decrement_property(self, prop: int):
        self.set_property(prop, self.get_property(prop) - 1)

    def _clear_links(self):
        self.links[:] = [None, None, None, None]


class Maze:
    """
    A perfect maze over a height x width grid. The spanning tree is grown
    at construction time from `start` by a randomized frontier walk.

    The maze owns its random source. Two mazes built with the same seed and
    driven through the same calls come out identical.
    """

    def __init__(self, height: int, width: int, start, end, seed: int = None, rng: random.Random = None):
        if height <= 0 or width <= 0:
            raise InvalidMazeError(f"Maze dimensions must be positive, got {height}x{width}")
        start = self._validate_point(start, height, width, "start")
        end = self._validate_point(end, height, width, "end")

        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.start = start
        self.end = end

        self._grid: Grid[Cell] = Grid(height, width)
        for i in range(height * width):
            pos = self._grid.position_of(i)
            self._grid.set(pos, Cell(pos, i, width))

        self._draw()

    @classmethod
    def create(cls, height: int, width: int, start, end, seed: int = None, rng: random.Random = None) -> Optional['Maze']:
        """Same as the constructor but returns None on invalid arguments."""
        try:
            return cls(height, width, start, end, seed=seed, rng=rng)
        except InvalidMazeError as e:
            logger.debug(f"Maze creation rejected: {e}")
            return None

    @staticmethod
    def _validate_point(pos, height: int, width: int, name: str) -> Point:
        if pos is None:
            raise InvalidMazeError(f"Missing {name} point")
        try:
            row, col = pos
        except (TypeError, ValueError):
            raise InvalidMazeError(f"Malformed {name} point {pos!r}") from None
        if not (0 <= row < height and 0 <= col < width):
            raise InvalidMazeError(f"{name.capitalize()} ({row}, {col}) outside {height}x{width} maze")
        return Point(row, col)

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def width(self) -> int:
        return self._grid.width

    def __len__(self) -> int:
        return len(self._grid)

    # Cell access

    def get_cell(self, pos) -> Optional[Cell]:
        if pos is None:
            return None
        return self._grid.get(Point(*pos))

    @property
    def start_cell(self) -> Cell:
        return self._grid.get(self.start)

    @property
    def end_cell(self) -> Cell:
        return self._grid.get(self.end)

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for _, cell in self._grid:
            yield cell

    def neighbour(self, cell: Cell, direction: int) -> Optional[Cell]:
        idx = cell.link(direction)
        if idx is None:
            return None
        return self._grid.get_at(idx)

    def neighbours(self, cell: Cell) -> List[Cell]:
        return [self._grid.get_at(idx) for idx in cell.neighbour_indices()]

    def edge_count(self) -> int:
        return sum(cell.connection_count() for cell in self.cells()) // 2

    # Generation

    def redraw(self, start=None, end=None):
        """
        Tears down every connection and grows a new tree. Cell objects and
        their flags/properties survive.
        """
        new_start = self.start if start is None else self._validate_point(start, self.height, self.width, "start")
        new_end = self.end if end is None else self._validate_point(end, self.height, self.width, "end")
        for cell in self.cells():
            cell._clear_links()
        self.start = new_start
        self.end = new_end
        self._draw()

    def _adjacent_indices(self, cell: Cell) -> Iterator[int]:
        """Grid neighbours of a cell regardless of connections."""
        row, col = cell.position
        for direction in Cell.DIRECTIONS:
            idx = self._grid.index_of(Point(row + Cell.DR[direction], col + Cell.DC[direction]))
            if idx is not None:
                yield idx

    def _connect(self, a: Cell, b: Cell) -> bool:
        dr = b.position.row - a.position.row
        dc = b.position.col - a.position.col
        for direction in Cell.DIRECTIONS:
            if Cell.DR[direction] == dr and Cell.DC[direction] == dc:
                a.links[direction] = b.index
                b.links[Cell.OPPOSITE[direction]] = a.index
                return True
        return False

    def _clear_visited(self):
        for cell in self.cells():
            cell._visited = False

    def _draw(self) -> int:
        self._clear_visited()

        # Candidate connections as (source index, target index), keyed by a random priority
        queue: PriorityQueue[Tuple[int, int]] = PriorityQueue()
        current = self.start_cell
        current._visited = True
        connections = 0

        while True:
            for idx in self._adjacent_indices(current):
                if not self._grid.get_at(idx)._visited:
                    queue.push(self.rng.randrange(PRIORITY_LIMIT), (current.index, idx))

            source = target = None
            while len(queue):
                src_idx, dst_idx = queue.pop()
                candidate = self._grid.get_at(dst_idx)
                if not candidate._visited:
                    source = self._grid.get_at(src_idx)
                    target = candidate
                    break

            if target is None:
                break

            self._connect(source, target)
            target._visited = True
            current = target
            connections += 1

        logger.debug(f"Drew {self.height}x{self.width} maze from {tuple(self.start)}: {connections} connections")
        return connections

    # Path search

    def compute_path(self, src, dest, max_length: int = None) -> List[Point]:
        """
        Depth-first walk along connections from src to dest.

        Returns the positions from src to dest inclusive, or an empty list
        when either point is outside the maze, dest is unreachable, or the
        path would be longer than max_length (defaults to the cell count).
        """
        source = self.get_cell(src)
        target = self.get_cell(dest)
        if source is None or target is None:
            return []
        if max_length is None:
            max_length = len(self._grid)
        if max_length <= 0:
            return []

        self._clear_visited()
        source._visited = True
        path: List[Cell] = [source]
        # Next link slot to try for each cell on the path
        cursors: List[int] = [0]

        while path:
            current = path[-1]
            if current is target:
                logger.debug(f"Path {tuple(source.position)} -> {tuple(target.position)}: {len(path)} cells")
                return [cell.position for cell in path]

            nxt = None
            # A full buffer makes this branch a dead end
            if len(path) < max_length:
                links = current.neighbour_indices()
                while cursors[-1] < len(links):
                    candidate = self._grid.get_at(links[cursors[-1]])
                    cursors[-1] += 1
                    if not candidate._visited:
                        nxt = candidate
                        break

            if nxt is None:
                path.pop()
                cursors.pop()
                continue

            nxt._visited = True
            path.append(nxt)
            cursors.append(0)

        logger.debug(f"No path {tuple(source.position)} -> {tuple(target.position)} within {max_length} cells")
        return []
