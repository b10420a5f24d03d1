import argparse
import time
from dataclasses import dataclass
from typing import Optional

from mazart.viz.colors import NAMED_COLORS, RGB, parse_color

# (min, max, default)
MAZE_WIDTH = (8, 2048, 64)
MAZE_HEIGHT = (8, 2048, 64)
CELL_WIDTH = (1, 64, 4)
WALL_WIDTH = (0, 16, 2)
BORDER_WIDTH = (0, 64, 8)

METRICS = ("none", "path", "start", "end")
MODES = ("none", "palette", "preset-a")
CONN_METHODS = ("fixed", "nearest", "average")


class ConfigError(ValueError):
    pass


@dataclass
class MazartConfig:
    maze_width: int = MAZE_WIDTH[2]
    maze_height: int = MAZE_HEIGHT[2]
    seed: Optional[int] = None  # None means "seed from the clock"
    cell_width: int = CELL_WIDTH[2]
    wall_width: int = WALL_WIDTH[2]
    border_width: int = BORDER_WIDTH[2]
    cell_color: str = "white"
    cell_metric: str = "none"
    cell_mode: str = "none"
    conn_color: str = "light-grey"
    conn_color_method: str = "fixed"
    wall_color: str = "black"
    border_color: Optional[str] = None  # defaults to wall_color
    draw_path: bool = False
    path_color: str = "red"
    output_file: Optional[str] = None
    debug: bool = False

    def validate(self) -> 'MazartConfig':
        for name, bounds in (("maze_width", MAZE_WIDTH), ("maze_height", MAZE_HEIGHT),
                             ("cell_width", CELL_WIDTH), ("wall_width", WALL_WIDTH),
                             ("border_width", BORDER_WIDTH)):
            value = getattr(self, name)
            lo, hi, _ = bounds
            if not lo <= value <= hi:
                raise ConfigError(f"{name} must be within [{lo}, {hi}], got {value}")

        if self.seed is not None and self.seed < 0:
            raise ConfigError(f"seed must be non-negative, got {self.seed}")

        if self.border_color is None:
            self.border_color = self.wall_color
        for name in ("cell_color", "conn_color", "wall_color", "border_color", "path_color"):
            value = getattr(self, name)
            if value not in NAMED_COLORS:
                raise ConfigError(f"Unknown {name} '{value}', expected one of: {', '.join(NAMED_COLORS)}")

        if self.cell_metric not in METRICS:
            raise ConfigError(f"Unknown cell metric '{self.cell_metric}'")
        if self.cell_mode not in MODES:
            raise ConfigError(f"Unknown cell mode '{self.cell_mode}'")
        if self.conn_color_method not in CONN_METHODS:
            raise ConfigError(f"Unknown connection color method '{self.conn_color_method}'")
        if self.cell_mode != "none" and self.cell_metric == "none":
            raise ConfigError("Color metric cannot be none if color mode is set")
        if self.cell_mode == "none" and self.cell_metric != "none":
            raise ConfigError("Color mode cannot be none if color metric is set")

        if not self.output_file:
            raise ConfigError("--output is required")
        return self

    def resolved_seed(self) -> int:
        return self.seed if self.seed is not None else int(time.time())

    def rgb(self, name: str) -> RGB:
        return parse_color(getattr(self, name))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'MazartConfig':
        seed = None
        if args.seed is not None and args.seed != "time":
            try:
                seed = int(args.seed)
            except ValueError:
                raise ConfigError(f"Expected integer or 'time' for --seed, got {args.seed}") from None
        return cls(
            maze_width=args.maze_width,
            maze_height=args.maze_height,
            seed=seed,
            cell_width=args.cell_width,
            wall_width=args.wall_width,
            border_width=args.border_width,
            cell_color=args.cell_color,
            cell_metric=args.cell_metric,
            cell_mode=args.cell_mode,
            conn_color=args.conn_color,
            conn_color_method=args.conn_color_method,
            wall_color=args.wall_color,
            border_color=args.border_color,
            draw_path=args.draw_path,
            path_color=args.path_color,
            output_file=args.output,
            debug=args.debug,
        ).validate()


def build_parser() -> argparse.ArgumentParser:
    colors = list(NAMED_COLORS)
    parser = argparse.ArgumentParser(prog="mazart", description="Mazart: perfect maze generator and renderer")
    parser.add_argument("--debug", "--verbose", "-v", dest="debug", action="store_true", help="Enable debug logging")

    maze = parser.add_argument_group("maze")
    maze.add_argument("--maze-width", type=int, default=MAZE_WIDTH[2], help="Maze width in cells")
    maze.add_argument("--maze-height", type=int, default=MAZE_HEIGHT[2], help="Maze height in cells")
    maze.add_argument("--seed", type=str, default="time", help="Random seed (integer or 'time')")

    image = parser.add_argument_group("image")
    image.add_argument("--cell-width", type=int, default=CELL_WIDTH[2], help="Cell width in pixels")
    image.add_argument("--wall-width", type=int, default=WALL_WIDTH[2], help="Wall width in pixels")
    image.add_argument("--border-width", type=int, default=BORDER_WIDTH[2], help="Border width in pixels")
    image.add_argument("--cell-color", default="white", choices=colors, help="Cell color")
    image.add_argument("--cell-metric", default="none", choices=METRICS, help="Metric used to color cells")
    image.add_argument("--cell-mode", default="none", choices=MODES, help="How the metric maps to colors")
    image.add_argument("--conn-color", default="light-grey", choices=colors, help="Connection color")
    image.add_argument("--conn-color-method", default="fixed", choices=CONN_METHODS, help="How connections are colored")
    image.add_argument("--wall-color", default="black", choices=colors, help="Wall color")
    image.add_argument("--border-color", default=None, choices=colors, help="Border color (same as wall color)")
    image.add_argument("--draw-path", action="store_true", help="Also export the solved maze")
    image.add_argument("--path-color", default="red", choices=colors, help="Solution path color")
    image.add_argument("--output", "-o", type=str, help="Output PNG file")
    return parser
