import time

import pytest

from maze_explorer.maze import generate_maze
from maze_explorer.search import explore, find_path

# Guardrail against large regressions, not a micro-benchmark.


@pytest.mark.performance
def test_generation_and_search_large_grid():
    max_seconds = 3.0
    for seed in (10101, 20202, 30303):
        start = time.perf_counter()
        m = generate_maze(width=60, height=60, seed=seed)
        dfs = explore(m.graph, m.start, m.goal)
        astar = find_path(m.graph, m.start, m.goal)
        elapsed = time.perf_counter() - start
        assert dfs.found and astar.found
        assert elapsed < max_seconds, f"seed {seed} took {elapsed:.3f}s (> {max_seconds}s)"
