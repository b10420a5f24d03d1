import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazart.core.maze import Maze
from mazart.algo.metrics import MazeMetrics

def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height/1e6:.2f}M cells) ---")

    # 1. Generation
    start = (0, width - 1)
    end = (height - 1, 0)
    gen_start = time.time()
    maze = Maze(height, width, start, end, seed=42)
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s")
    print(f"Speed: {(width*height)/gen_time:,.0f} cells/sec")

    # 2. Path
    path_start = time.time()
    path = maze.compute_path(start, end)
    print(f"Path Time: {time.time() - path_start:.4f}s (length {len(path)})")

    # 3. Distance from path
    dist_start = time.time()
    max_dist = MazeMetrics.distance_from_path(maze, path)
    print(f"Distance Time: {time.time() - dist_start:.4f}s (max {max_dist})")

    stats = MazeMetrics.calculate_stats(maze)
    print(f"Dead ends: {stats['dead_end_percent']:.1f}%")

def run_suite():
    sizes = [
        (64, 64),
        (256, 256),
        (1024, 1024),
        (2048, 2048)   # CLI maximum
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
