import unittest
import sys
import os
from collections import deque

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazart.algo.metrics import MazeMetrics, PATH_DISTANCE, START_DISTANCE, END_DISTANCE, ON_PATH
from mazart.core.maze import Maze
from mazart.core.point import Point

def hop_counts(maze, sources):
    dist = {Point(*s): 0 for s in sources}
    queue = deque(dist)
    while queue:
        cur = queue.popleft()
        for nxt in maze.get_cell(cur).neighbour_points():
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist

class TestDistanceMetrics(unittest.TestCase):
    def setUp(self):
        self.maze = Maze(16, 16, (0, 15), (15, 0), seed=5)

    def test_distance_from_start(self):
        max_dist = MazeMetrics.distance_from_start(self.maze)
        expected = hop_counts(self.maze, [self.maze.start])
        for pos, hops in expected.items():
            self.assertEqual(self.maze.get_cell(pos).get_property(START_DISTANCE), hops + 1)
        self.assertEqual(max_dist, max(expected.values()) + 1)
        self.assertEqual(self.maze.start_cell.get_property(START_DISTANCE), 1)

    def test_distance_from_end(self):
        max_dist = MazeMetrics.distance_from_end(self.maze)
        self.assertEqual(self.maze.end_cell.get_property(END_DISTANCE), 1)
        path = self.maze.compute_path(self.maze.end, self.maze.start)
        self.assertEqual(self.maze.start_cell.get_property(END_DISTANCE), len(path))
        self.assertGreaterEqual(max_dist, len(path))

    def test_distance_from_path(self):
        path = self.maze.compute_path(self.maze.start, self.maze.end)
        max_dist = MazeMetrics.distance_from_path(self.maze, path)
        expected = hop_counts(self.maze, path)
        for pos, hops in expected.items():
            self.assertEqual(self.maze.get_cell(pos).get_property(PATH_DISTANCE), hops + 1)
        for pos in path:
            self.assertEqual(self.maze.get_cell(pos).get_property(PATH_DISTANCE), 1)
        self.assertEqual(max_dist, max(expected.values()) + 1)

    def test_stale_values_cleared(self):
        for cell in self.maze.cells():
            cell.set_property(PATH_DISTANCE, 1000)
        MazeMetrics.distance_from(self.maze, [self.maze.start], PATH_DISTANCE)
        for cell in self.maze.cells():
            self.assertLess(cell.get_property(PATH_DISTANCE), 1000)
            self.assertGreater(cell.get_property(PATH_DISTANCE), 0)

    def test_no_sources(self):
        self.assertEqual(MazeMetrics.distance_from(self.maze, [], 4), 0)
        self.assertEqual(MazeMetrics.distance_from(self.maze, [(99, 99)], 4), 0)
        for cell in self.maze.cells():
            self.assertEqual(cell.get_property(4), 0)

    def test_single_cell(self):
        maze = Maze(1, 1, (0, 0), (0, 0), seed=0)
        self.assertEqual(MazeMetrics.distance_from_start(maze), 1)

    def test_mark_path(self):
        path = self.maze.compute_path(self.maze.start, self.maze.end)
        self.maze.get_cell((0, 0)).set_flag(ON_PATH, True)
        marked = MazeMetrics.mark_path(self.maze, path)
        self.assertEqual(marked, len(path))
        on_path = {c.position for c in self.maze.cells() if c.get_flag(ON_PATH)}
        self.assertEqual(on_path, set(path))

class TestStats(unittest.TestCase):
    def test_counts_cover_maze(self):
        maze = Maze(20, 20, (0, 0), (19, 19), seed=42)
        stats = MazeMetrics.calculate_stats(maze)
        self.assertEqual(stats["dead_ends"] + stats["corridors"] + stats["junctions"], 400)
        self.assertGreater(stats["dead_ends"], 0)
        self.assertAlmostEqual(stats["dead_end_percent"], stats["dead_ends"] / 4.0)

    def test_corridor(self):
        # A 1 x n maze is a single corridor with two dead ends
        maze = Maze(1, 6, (0, 0), (0, 5), seed=1)
        stats = MazeMetrics.calculate_stats(maze)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["corridors"], 4)
        self.assertEqual(stats["junctions"], 0)

if __name__ == '__main__':
    unittest.main()
