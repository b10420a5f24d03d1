import sys
import os
import logging

# Ensure project root is in path so we can import 'mazart' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazart.algo.metrics import MazeMetrics, PATH_DISTANCE, START_DISTANCE, END_DISTANCE
from mazart.config import ConfigError, MazartConfig, build_parser
from mazart.core.maze import Maze
from mazart.core.point import Point
from mazart.viz.colorer import Colorer
from mazart.viz.colors import BLUE, GREEN
from mazart.viz.image import MazeImage, MazeImageConfig

METRIC_PROPERTIES = {
    "path": PATH_DISTANCE,
    "start": START_DISTANCE,
    "end": END_DISTANCE,
}


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def solved_filename(output: str) -> str:
    stem, ext = os.path.splitext(output)
    return f"{stem}.sol{ext or '.png'}"


def build_image_config(config: MazartConfig, maze: Maze, path) -> MazeImageConfig:
    image_config = MazeImageConfig(
        border_width=config.border_width,
        cell_width=config.cell_width,
        wall_width=config.wall_width,
        default_cell_color=config.rgb("cell_color"),
        default_wall_color=config.rgb("wall_color"),
        default_conn_color=config.rgb("conn_color"),
        default_border_color=config.rgb("border_color"),
        default_path_color=config.rgb("path_color"),
    )
    if config.cell_metric == "none":
        return image_config

    prop = METRIC_PROPERTIES[config.cell_metric]
    if config.cell_metric == "path":
        max_dist = MazeMetrics.distance_from_path(maze, path, prop)
    elif config.cell_metric == "start":
        max_dist = MazeMetrics.distance_from_start(maze, prop)
    else:
        max_dist = MazeMetrics.distance_from_end(maze, prop)
    logging.getLogger("mazart").info(f"Max {config.cell_metric} distance is {max_dist}")
    # Colour ranges need hi >= lo
    max_dist = max(max_dist, 1)

    conn_method = Colorer.AVERAGE if config.conn_color_method == "fixed" else config.conn_color_method
    if config.cell_mode == "palette":
        colorer = Colorer.palette_gradient(prop, 1, max_dist, conn_method=conn_method)
    else:
        colorer = Colorer.gradient(GREEN, BLUE, prop, 1, max_dist, conn_method=conn_method)
    return colorer.apply(image_config, connections=config.conn_color_method != "fixed")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = MazartConfig.from_args(args)
    except ConfigError as e:
        parser.error(str(e))

    setup_logging(config.debug)
    logger = logging.getLogger("mazart")

    seed = config.resolved_seed()
    start = Point(0, config.maze_width - 1)
    end = Point(config.maze_height - 1, 0)
    logger.info(f"Creating {config.maze_width}x{config.maze_height} maze (seed={seed})...")
    maze = Maze(config.maze_height, config.maze_width, start, end, seed=seed)

    path = maze.compute_path(start, end)
    logger.info(f"Path found, length = {len(path)}")
    stats = MazeMetrics.calculate_stats(maze)
    logger.debug(f"Stats: {stats}")

    image = MazeImage(maze, build_image_config(config, maze, path))
    image.export_png(config.output_file)

    if config.draw_path:
        image.draw_path(path)
        image.export_png(solved_filename(config.output_file))

    return 0


if __name__ == "__main__":
    sys.exit(main())
