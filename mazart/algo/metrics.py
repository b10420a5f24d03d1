import logging
from typing import Dict, Iterable, Tuple

from mazart.core.deque import Deque
from mazart.core.maze import Cell, Maze
from mazart.core.point import Point

logger = logging.getLogger(__name__)

# Default property slots used by the CLI
PATH_DISTANCE = 1
START_DISTANCE = 2
END_DISTANCE = 3

# Flag slot marking cells on the solution path
ON_PATH = 0


class MazeMetrics:
    @staticmethod
    def clear_property(maze: Maze, prop: int, value: int = 0):
        for cell in maze.cells():
            cell.set_property(prop, value)

    @staticmethod
    def distance_from(maze: Maze, sources: Iterable[Point], prop: int) -> int:
        """
        Breadth-first hop count from a set of source cells.

        Sources get 1, their neighbours 2 and so on; cells that cannot be
        reached keep 0. The maze is a tree, so the first value written to a
        cell is its exact distance. Returns the largest value written (0
        when no source lies in the maze).
        """
        MazeMetrics.clear_property(maze, prop)

        seeds = []
        for pos in sources:
            cell = maze.get_cell(pos)
            if cell is None:
                continue
            cell.set_property(prop, 1)
            seeds.append(cell)
        if not seeds:
            return 0

        # Frontier of (source, target) connections, FIFO
        frontier: Deque[Tuple[Cell, Cell]] = Deque()
        for cell in seeds:
            for neighbour in maze.neighbours(cell):
                if neighbour.get_property(prop) == 0:
                    frontier.push_back((cell, neighbour))

        max_dist = 1
        while len(frontier):
            source, target = frontier.pop_front()
            if target.get_property(prop) != 0:
                continue
            dist = source.get_property(prop) + 1
            target.set_property(prop, dist)
            if dist > max_dist:
                max_dist = dist
            for neighbour in maze.neighbours(target):
                if neighbour.get_property(prop) == 0:
                    frontier.push_back((target, neighbour))

        logger.debug(f"Max distance for property {prop}: {max_dist}")
        return max_dist

    @staticmethod
    def distance_from_path(maze: Maze, path: Iterable[Point], prop: int = PATH_DISTANCE) -> int:
        return MazeMetrics.distance_from(maze, path, prop)

    @staticmethod
    def distance_from_start(maze: Maze, prop: int = START_DISTANCE) -> int:
        return MazeMetrics.distance_from(maze, [maze.start], prop)

    @staticmethod
    def distance_from_end(maze: Maze, prop: int = END_DISTANCE) -> int:
        return MazeMetrics.distance_from(maze, [maze.end], prop)

    @staticmethod
    def mark_path(maze: Maze, path: Iterable[Point], flag: int = ON_PATH) -> int:
        """Sets `flag` on every path cell and clears it elsewhere."""
        for cell in maze.cells():
            cell.set_flag(flag, False)
        marked = 0
        for pos in path:
            cell = maze.get_cell(pos)
            if cell is None:
                continue
            cell.set_flag(flag, True)
            marked += 1
        return marked

    @staticmethod
    def calculate_stats(maze: Maze) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        junctions = 0  # 3 or 4 exits

        for cell in maze.cells():
            exits = cell.connection_count()
            if exits <= 1:
                dead_ends += 1
            elif exits == 2:
                corridors += 1
            else:
                junctions += 1

        total = len(maze)
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
