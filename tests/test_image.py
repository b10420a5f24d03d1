import unittest
import sys
import os
import shutil
import tempfile

import cv2
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazart.algo.metrics import MazeMetrics, START_DISTANCE
from mazart.core.maze import Cell, Maze
from mazart.core.point import Point
from mazart.viz.colorer import Colorer
from mazart.viz.colors import BLACK, BLUE, GREEN, LIGHT_GREY, RED, WHITE, get_palette, parse_color
from mazart.viz.image import MazeImage, MazeImageConfig

class TestMazeImage(unittest.TestCase):
    def setUp(self):
        self.out_dir = tempfile.mkdtemp()
        self.maze = Maze(6, 9, (0, 8), (5, 0), seed=21)

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_dimensions(self):
        image = MazeImage(self.maze)
        # 9 * 4 + 8 * 2 + 2 * 5
        self.assertEqual(image.width, 62)
        # 6 * 4 + 5 * 2 + 2 * 5
        self.assertEqual(image.height, 44)
        self.assertEqual(image.pixels.shape, (44, 62, 3))
        self.assertEqual(image.pixels.dtype, np.uint8)

    def test_layout(self):
        config = MazeImageConfig(border_width=3, cell_width=4, wall_width=2, default_border_color=BLUE)
        image = MazeImage(self.maze, config)
        px = image.pixels

        self.assertEqual(tuple(px[0, 0]), BLUE)
        self.assertEqual(tuple(px[-1, -1]), BLUE)

        for cell in self.maze.cells():
            row, col = image.to_image_position(cell.position)
            self.assertEqual(tuple(px[row, col]), WHITE)
            right = self.maze.neighbour(cell, Cell.RIGHT)
            if cell.position.col < self.maze.width - 1:
                expected = LIGHT_GREY if right is not None else BLACK
                self.assertEqual(tuple(px[row, col + 4]), expected)
            down = self.maze.neighbour(cell, Cell.DOWN)
            if cell.position.row < self.maze.height - 1:
                expected = LIGHT_GREY if down is not None else BLACK
                self.assertEqual(tuple(px[row + 4, col]), expected)
            # Corners between four cells are always wall
            if cell.position.row < self.maze.height - 1 and cell.position.col < self.maze.width - 1:
                self.assertEqual(tuple(px[row + 4, col + 4]), BLACK)

    def test_config_not_shared(self):
        config = MazeImageConfig()
        image = MazeImage(self.maze, config)
        image.config.cell_width = 10
        self.assertEqual(config.cell_width, 4)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            MazeImage(self.maze, MazeImageConfig(cell_width=0))

    def test_zero_wall(self):
        image = MazeImage(self.maze, MazeImageConfig(border_width=0, cell_width=2, wall_width=0))
        self.assertEqual(image.width, 18)
        self.assertTrue(np.all(image.pixels == 255))

    def test_draw_path(self):
        image = MazeImage(self.maze)
        path = self.maze.compute_path(self.maze.start, self.maze.end)
        image.draw_path(path)
        px = image.pixels
        for a, b in zip(path, path[1:]):
            row, col = image.to_image_position(a)
            self.assertEqual(tuple(px[row, col]), RED)
            # Gap between consecutive cells is painted too
            gap = ((row + image.to_image_position(b).row) // 2 + 2, (col + image.to_image_position(b).col) // 2 + 2)
            self.assertEqual(tuple(px[gap]), RED)

    def test_color_generators(self):
        MazeMetrics.distance_from_start(self.maze)
        config = MazeImageConfig(cell_color_gen=lambda cell: GREEN if cell.get_property(START_DISTANCE) == 1 else None)
        image = MazeImage(self.maze, config)
        row, col = image.to_image_position(self.maze.start)
        self.assertEqual(tuple(image.pixels[row, col]), GREEN)
        row, col = image.to_image_position(self.maze.end)
        self.assertEqual(tuple(image.pixels[row, col]), WHITE)

    def test_export_png(self):
        image = MazeImage(self.maze)
        image.draw_path(self.maze.compute_path(self.maze.start, self.maze.end))
        path = os.path.join(self.out_dir, "maze.png")
        image.export_png(path)
        self.assertTrue(os.path.exists(path))

        loaded = cv2.cvtColor(cv2.imread(path), cv2.COLOR_BGR2RGB)
        np.testing.assert_array_equal(loaded, image.pixels)

class TestColorer(unittest.TestCase):
    def setUp(self):
        self.maze = Maze(8, 8, (0, 0), (7, 7), seed=8)
        self.max_dist = MazeMetrics.distance_from_start(self.maze)

    def test_palette(self):
        palette = get_palette()
        self.assertEqual(palette.shape, (256, 3))
        colorer = Colorer.palette(START_DISTANCE)
        cell = self.maze.start_cell
        self.assertEqual(colorer.cell_color(cell), tuple(int(c) for c in palette[1]))
        cell.set_property(START_DISTANCE, -1)
        self.assertIsNone(colorer.cell_color(cell))

    def test_gradient(self):
        colorer = Colorer.gradient(GREEN, BLUE, START_DISTANCE, 0, self.max_dist)
        start = self.maze.start_cell
        start.set_property(START_DISTANCE, 0)
        self.assertEqual(colorer.cell_color(start), GREEN)

        far = max(self.maze.cells(), key=lambda c: c.get_property(START_DISTANCE))
        r, g, b = colorer.cell_color(far)
        self.assertGreater(b, g) # closer to end_color at hi

        for cell in self.maze.cells():
            color = colorer.cell_color(cell)
            self.assertEqual(len(color), 3)
            for channel in color:
                self.assertGreaterEqual(channel, 0)
                self.assertLessEqual(channel, 255)

    def test_palette_gradient_range(self):
        colorer = Colorer.palette_gradient(START_DISTANCE, 1, self.max_dist)
        palette = get_palette()
        far = max(self.maze.cells(), key=lambda c: c.get_property(START_DISTANCE))
        index = int(256 * ((self.max_dist - 1) / self.max_dist))
        self.assertEqual(colorer.cell_color(far), tuple(int(c) for c in palette[index]))

    def test_conn_color(self):
        colorer = Colorer.gradient(BLACK, WHITE, START_DISTANCE, 0, 1)
        a = self.maze.get_cell((0, 0))
        b = self.maze.get_cell((0, 1))
        a.set_property(START_DISTANCE, 0)
        b.set_property(START_DISTANCE, 0)
        self.assertEqual(colorer.conn_color(a, b), BLACK)
        nearest = Colorer.gradient(BLACK, WHITE, START_DISTANCE, 0, 1, conn_method=Colorer.NEAREST)
        b.set_property(START_DISTANCE, 1)
        self.assertEqual(nearest.conn_color(a, b), BLACK)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Colorer.palette_gradient(START_DISTANCE, 5, 1)
        with self.assertRaises(ValueError):
            Colorer("rainbow", START_DISTANCE)

    def test_apply(self):
        config = Colorer.palette(START_DISTANCE).apply(MazeImageConfig(), connections=False)
        self.assertIsNotNone(config.cell_color_gen)
        self.assertIsNone(config.conn_color_gen)

    def test_named_colors(self):
        self.assertEqual(parse_color("Light-Grey"), LIGHT_GREY)
        with self.assertRaises(ValueError):
            parse_color("chartreuse")

if __name__ == '__main__':
    unittest.main()
