import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

import cv2
import numpy as np

from mazart.core.maze import Cell, Maze
from mazart.core.point import Point, are_adjacent
from mazart.viz.colors import BLACK, LIGHT_GREY, RED, RGB, WHITE

logger = logging.getLogger(__name__)

CellColorGen = Callable[[Cell], Optional[RGB]]
ConnColorGen = Callable[[Cell, Cell], Optional[RGB]]


@dataclass
class MazeImageConfig:
    # Thicknesses in pixels
    border_width: int = 5
    cell_width: int = 4
    wall_width: int = 2
    # Colour generators; returning None falls back to the defaults
    cell_color_gen: Optional[CellColorGen] = None
    conn_color_gen: Optional[ConnColorGen] = None
    default_cell_color: RGB = WHITE
    default_wall_color: RGB = BLACK
    default_conn_color: RGB = LIGHT_GREY
    default_border_color: RGB = BLACK
    default_path_color: RGB = RED

    def validate(self):
        if self.cell_width < 1:
            raise ValueError(f"cell_width must be at least 1, got {self.cell_width}")
        if self.wall_width < 0 or self.border_width < 0:
            raise ValueError("wall_width and border_width cannot be negative")


class MazeImage:
    """
    RGB raster of a maze. Layout per axis:

        border | cell | wall | cell | ... | cell | border

    Wall gaps between connected cells are painted with the connection
    colour, everything never painted keeps the wall colour.
    """

    def __init__(self, maze: Maze, config: MazeImageConfig = None):
        self.config = replace(config) if config else MazeImageConfig()
        self.config.validate()

        cfg = self.config
        width = maze.width * cfg.cell_width + (maze.width - 1) * cfg.wall_width + cfg.border_width * 2
        height = maze.height * cfg.cell_width + (maze.height - 1) * cfg.wall_width + cfg.border_width * 2

        # (rows, cols, RGB)
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = cfg.default_wall_color

        self._draw_borders()
        self._draw_cells(maze)
        logger.debug(f"Rendered {maze.height}x{maze.width} maze to {width}x{height} pixels")

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def to_image_position(self, pos: Point) -> Point:
        """Top-left pixel of the cell block at maze position pos."""
        step = self.config.cell_width + self.config.wall_width
        return Point(step * pos[0] + self.config.border_width, step * pos[1] + self.config.border_width)

    def draw_path(self, path: Sequence[Point], color: RGB = None):
        if color is None:
            color = self.config.default_path_color
        cw = self.config.cell_width
        ww = self.config.wall_width

        for i, pos in enumerate(path):
            row, col = self.to_image_position(pos)
            self._fill(row, col, cw, cw, color)

            if i == 0 or ww == 0:
                continue
            prev = path[i - 1]
            # Only consecutive adjacent points share a wall gap
            if not are_adjacent(pos, prev):
                continue

            if pos[0] < prev[0]:
                self._fill(row + cw, col, ww, cw, color)
            elif pos[0] > prev[0]:
                self._fill(row - ww, col, ww, cw, color)
            elif pos[1] < prev[1]:
                self._fill(row, col + cw, cw, ww, color)
            else:
                self._fill(row, col - ww, cw, ww, color)

    def to_bgr(self) -> np.ndarray:
        return cv2.cvtColor(self.pixels, cv2.COLOR_RGB2BGR)

    def export_png(self, filename: str):
        if not cv2.imwrite(filename, self.to_bgr()):
            raise IOError(f"Failed to write PNG to {filename}")
        logger.info(f"Saved {self.width}x{self.height} image to {filename}")

    # Internal

    def _fill(self, row: int, col: int, height: int, width: int, color: RGB):
        if height <= 0 or width <= 0:
            return
        self.pixels[row:row + height, col:col + width] = color

    def _draw_borders(self):
        b = self.config.border_width
        if b == 0:
            return
        color = self.config.default_border_color
        self.pixels[:b, :] = color
        self.pixels[-b:, :] = color
        self.pixels[:, :b] = color
        self.pixels[:, -b:] = color

    def _cell_color(self, cell: Cell) -> RGB:
        gen = self.config.cell_color_gen
        color = gen(cell) if gen else None
        return self.config.default_cell_color if color is None else color

    def _conn_color(self, a: Cell, b: Cell) -> RGB:
        gen = self.config.conn_color_gen
        color = gen(a, b) if gen else None
        return self.config.default_conn_color if color is None else color

    def _draw_cells(self, maze: Maze):
        cw = self.config.cell_width
        ww = self.config.wall_width

        for cell in maze.cells():
            row, col = self.to_image_position(cell.position)
            self._fill(row, col, cw, cw, self._cell_color(cell))

            if ww == 0:
                continue
            # Each connection is painted once, from its upper/left cell
            for direction in (Cell.DOWN, Cell.RIGHT):
                neighbour = maze.neighbour(cell, direction)
                if neighbour is None:
                    continue
                color = self._conn_color(cell, neighbour)
                if direction == Cell.RIGHT:
                    self._fill(row, col + cw, cw, ww, color)
                else:
                    self._fill(row + cw, col, ww, cw, color)
