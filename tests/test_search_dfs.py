from collections import Counter

import pytest

from maze_explorer.maze import MissingStartOrGoalError, WallGrid, generate_maze
from maze_explorer.search import explore, explore_iterative
from maze_explorer.search.dfs import MAX_RECURSIVE_NODES

from tests.maze_test_utils import is_neighbor_chain, maze_from_walls, open_grid


def test_open_two_by_two_walk():
    m = maze_from_walls(open_grid(2, 2), (0, 0), (1, 0))
    r = explore(m.graph, m.start, m.goal)
    # Up before Right: the walk goes around the block
    assert r.trace == [(0, 0), (0, 1), (1, 1), (1, 0)]
    assert r.found
    assert r.expansions == 4
    assert r.final_path == [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_dead_end_is_walked_back():
    w = WallGrid(3, 1)
    w.clear_vertical(1, 0)
    w.clear_vertical(2, 0)
    m = maze_from_walls(w, (1, 0), (0, 0))
    r = explore(m.graph, m.start, m.goal)
    assert r.trace == [(1, 0), (2, 0), (2, 0), (0, 0)]
    assert r.expansions == 3
    assert r.final_path == [(1, 0), (0, 0)]
    assert r.path_length == 2


def test_goal_in_other_component_exhausts_start_side():
    w = WallGrid(2, 2)
    w.clear_vertical(1, 0)
    w.clear_vertical(1, 1)
    m = maze_from_walls(w, (0, 0), (1, 1))
    r = explore(m.graph, m.start, m.goal)
    assert not r.found
    assert r.trace == [(0, 0), (1, 0), (1, 0), (0, 0)]
    assert r.expansions == 2
    assert r.final_path == []


def test_start_equals_goal():
    m = maze_from_walls(open_grid(3, 3), (1, 1), (1, 1))
    r = explore(m.graph, m.start, m.goal)
    assert r.trace == [(1, 1)]
    assert r.expansions == 1
    assert r.found


def test_trace_properties_on_generated_mazes():
    for seed in range(1, 25):
        m = generate_maze(width=12, height=10, seed=seed)
        r = explore(m.graph, m.start, m.goal)
        assert r.found, f"seed {seed}: goal not found in a connected maze"
        assert r.trace[0] == m.start
        assert r.trace[-1] == m.goal
        counts = Counter(r.trace)
        assert len(counts) == r.expansions
        assert max(counts.values()) <= 2, f"seed {seed}: node walked more than twice"
        assert r.expansions <= len(m.graph)
        assert r.final_path[0] == m.start and r.final_path[-1] == m.goal
        assert is_neighbor_chain(m.graph, r.final_path)
        assert len(set(r.final_path)) == len(r.final_path)


def test_iterative_matches_recursive():
    for seed in (2, 8, 13, 21, 34):
        m = generate_maze(width=15, height=15, seed=seed)
        rec = explore(m.graph, m.start, m.goal, iterative=False)
        it = explore_iterative(m.graph, m.start, m.goal)
        assert rec.trace == it.trace, f"seed {seed}: traces differ"
        assert rec.final_path == it.final_path
        assert rec.expansions == it.expansions


def test_large_graph_uses_explicit_stack():
    m = generate_maze(width=60, height=60, seed=77)
    assert len(m.graph) > MAX_RECURSIVE_NODES
    r = explore(m.graph, m.start, m.goal)
    assert r.found
    assert r.trace[-1] == m.goal


def test_runs_do_not_share_state():
    m = generate_maze(width=8, height=8, seed=5)
    a = explore(m.graph, m.start, m.goal)
    b = explore(m.graph, m.start, m.goal)
    assert a.trace == b.trace
    assert a.trace is not b.trace


@pytest.mark.parametrize('start,goal', [(None, (0, 0)), ((0, 0), None), ((9, 9), (0, 0)), ((0, 0), (9, 9))])
def test_missing_start_or_goal(start, goal):
    m = maze_from_walls(open_grid(2, 2), (0, 0), (1, 1))
    with pytest.raises(MissingStartOrGoalError):
        explore(m.graph, start, goal)
