from typing import NamedTuple, Tuple


class Point(NamedTuple):
    row: int
    col: int


def swap_points(a: Point, b: Point) -> Tuple[Point, Point]:
    return b, a


def are_adjacent(a: Point, b: Point) -> bool:
    """True when the two points share an edge (4-adjacency)."""
    return abs(a.row - b.row) + abs(a.col - b.col) == 1
